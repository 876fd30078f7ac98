import os
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

import yaml

from easyhyoka_core.enricher import DEFAULT_ENRICH_LIMIT
from easyhyoka_core.models import ActivityScope
from easyhyoka_core.providers.base import ModelConfig

DEFAULT_CONFIG: dict = {
    "provider": "openai",
    "owner": None,  # GitHub user or organization to search under
    "enrich_limit": DEFAULT_ENRICH_LIMIT,
    "window_days": 182,  # default evaluation window when --since is omitted
}

_API_KEY_FIELDS = {
    "openai": "openai_api_key",
    "anthropic": "anthropic_api_key",
}


@dataclass(frozen=True)
class RunConfig:
    """Everything one evaluation run needs, resolved once at startup."""

    scope: ActivityScope
    provider: str = "openai"
    api_key: Optional[str] = None
    enrich_limit: int = DEFAULT_ENRICH_LIMIT
    show_prompt: bool = False
    model_config: Optional[ModelConfig] = None


def load_config(config_path: str = ".easyhyoka.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .easyhyoka.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

    return config


def api_key_for(config: dict) -> Optional[str]:
    """Return the API key for the configured provider, or None if it is not set."""
    provider = config["provider"]
    if provider not in _API_KEY_FIELDS:
        raise ValueError(f"Unknown provider: {provider!r}. Choose 'openai' or 'anthropic'.")
    return config.get(_API_KEY_FIELDS[provider])


def resolve_window(
    since: Optional[date],
    until: Optional[date],
    window_days: int,
    today: Optional[date] = None,
) -> tuple:
    """Fill in a missing evaluation window.

    ``until`` defaults to today and ``since`` to ``window_days`` before ``until``.
    """
    if until is None:
        until = today or date.today()
    if since is None:
        since = until - timedelta(days=window_days)
    return since, until
