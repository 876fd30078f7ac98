"""Tests for configuration loading."""

from datetime import date

import pytest

from easyhyoka_core.config import DEFAULT_CONFIG, RunConfig, api_key_for, load_config, resolve_window
from easyhyoka_core.models import ActivityScope


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["provider"] == "openai"
    assert config["owner"] is None
    assert config["enrich_limit"] == 5
    assert config["window_days"] == 182


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".easyhyoka.yml"
    cfg.write_text("provider: anthropic\nowner: acme\nenrich_limit: 3\n")
    config = load_config(config_path=str(cfg))
    assert config["provider"] == "anthropic"
    assert config["owner"] == "acme"
    assert config["enrich_limit"] == 3


def test_empty_config_file(tmp_path):
    cfg = tmp_path / ".easyhyoka.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["provider"] == "openai"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".easyhyoka.yml"
    cfg.write_text("owner: acme\n")
    config = load_config(config_path=str(cfg), cli_overrides={"owner": "globex"})
    assert config["owner"] == "globex"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".easyhyoka.yml"
    cfg.write_text("provider: anthropic\n")
    config = load_config(config_path=str(cfg), cli_overrides={"provider": None})
    assert config["provider"] == "anthropic"


def test_defaults_not_mutated(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"), cli_overrides={"owner": "acme"})
    config["enrich_limit"] = 99
    assert DEFAULT_CONFIG["owner"] is None
    assert DEFAULT_CONFIG["enrich_limit"] == 5


def test_env_vars_loaded(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    config = load_config(config_path="nonexistent.yml")
    assert config["github_token"] == "gh-token"
    assert config["openai_api_key"] == "oai-key"
    assert config["anthropic_api_key"] == "ant-key"


class TestApiKeyFor:
    def test_picks_provider_key(self):
        config = {"provider": "anthropic", "openai_api_key": "oai", "anthropic_api_key": "ant"}
        assert api_key_for(config) == "ant"

    def test_missing_key_is_none(self):
        assert api_key_for({"provider": "openai", "openai_api_key": None}) is None

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            api_key_for({"provider": "llama"})


class TestResolveWindow:
    def test_explicit_dates_untouched(self):
        assert resolve_window(date(2025, 1, 1), date(2025, 3, 31), 182) == (date(2025, 1, 1), date(2025, 3, 31))

    def test_until_defaults_to_today(self):
        since, until = resolve_window(date(2025, 1, 1), None, 182, today=date(2025, 6, 30))
        assert until == date(2025, 6, 30)
        assert since == date(2025, 1, 1)

    def test_since_defaults_to_window_before_until(self):
        since, until = resolve_window(None, date(2025, 6, 30), 30)
        assert since == date(2025, 5, 31)


def test_run_config_defaults():
    scope = ActivityScope(owner="acme", author="alice", since=date(2025, 1, 1), until=date(2025, 3, 31))
    run_config = RunConfig(scope=scope)
    assert run_config.provider == "openai"
    assert run_config.enrich_limit == 5
    assert run_config.show_prompt is False
