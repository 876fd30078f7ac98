"""Where the evaluate command gets its GitHub token.

The configured token (GITHUB_TOKEN from the environment or .env, already
read by load_config) wins. Otherwise an existing GitHub CLI session is
borrowed via `gh auth token`.
"""

from __future__ import annotations

import logging
import subprocess

import click

logger = logging.getLogger(__name__)

_GH_TIMEOUT_SECONDS = 5

MISSING_TOKEN_HINT = (
    "No GitHub token found. Set GITHUB_TOKEN (environment or .env) or run `gh auth login` first.\n"
    "The token needs read access to the repositories under the owner; "
    "create one at https://github.com/settings/tokens"
)


def _token_from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=_GH_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        logger.debug("gh CLI unavailable; no token from a gh session.")
        return None
    if result.returncode != 0:
        logger.debug("`gh auth token` exited with %d.", result.returncode)
        return None
    return result.stdout.strip() or None


def resolve_github_token(configured: str | None = None) -> str | None:
    """Return the token to search GitHub with, or None when there is none."""
    if configured:
        return configured
    token = _token_from_gh_cli()
    if token:
        logger.debug("Using the GitHub token from the gh CLI session.")
    return token


def require_github_token(config: dict) -> str:
    """Like resolve_github_token, but a missing token is a usage error."""
    token = resolve_github_token(config.get("github_token"))
    if not token:
        raise click.UsageError(MISSING_TOKEN_HINT)
    return token
