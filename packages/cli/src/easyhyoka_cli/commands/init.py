"""init command — interactive setup wizard that writes .easyhyoka.yml."""

from __future__ import annotations

import subprocess
from pathlib import Path

import click
import yaml
from rich.console import Console

from easyhyoka_core.config import DEFAULT_CONFIG

console = Console()


@click.command("init")
@click.option("--owner", default=None, help="Default GitHub owner. Auto-detected from git remote.")
@click.pass_context
def init_cmd(ctx, owner: str | None):
    """Set up easyhyoka defaults for this directory.

    Writes the provider, default owner, enrichment limit and evaluation window
    to the configuration file so `easyhyoka evaluate` needs fewer flags.
    """
    config_path = (ctx.obj or {}).get("config_path", ".easyhyoka.yml")
    console.print("\n[bold cyan]easyhyoka init[/bold cyan] — setup wizard\n")

    if owner is None:
        detected = _detect_owner_from_git()
        if detected:
            console.print(f"[dim]Detected owner: {detected}[/dim]")
        owner = click.prompt("GitHub owner (user or organization)", default=detected)

    provider = click.prompt(
        "AI provider",
        type=click.Choice(["openai", "anthropic"]),
        default=DEFAULT_CONFIG["provider"],
    )
    enrich_limit = click.prompt(
        "Number of most recent items to fetch comments for",
        type=click.IntRange(min=0),
        default=DEFAULT_CONFIG["enrich_limit"],
    )
    window_days = click.prompt(
        "Default evaluation window in days",
        type=click.IntRange(min=1),
        default=DEFAULT_CONFIG["window_days"],
    )

    _write_config(
        config_path,
        {"provider": provider, "owner": owner, "enrich_limit": enrich_limit, "window_days": window_days},
    )
    console.print(f"[green]Wrote {config_path}[/green]")

    api_key_env = "ANTHROPIC_API_KEY" if provider == "anthropic" else "OPENAI_API_KEY"
    console.print(f"\n[yellow]Remember to set [bold]{api_key_env}[/bold] in your environment or .env file.[/yellow]")
    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Run an evaluation with: [bold]easyhyoka evaluate --since YYYY-MM-DD --until YYYY-MM-DD[/bold]")


def _detect_owner_from_git() -> str | None:
    """Try to detect the GitHub owner from the git remote URL."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode != 0:
            return None
        url = result.stdout.strip()
        # https://github.com/owner/repo.git  →  owner
        # git@github.com:owner/repo.git      →  owner
        if "github.com" not in url:
            return None
        slug = url.split("github.com")[-1].lstrip("/:")
        return slug.split("/")[0] or None
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None


def _write_config(config_path: str, config: dict) -> None:
    """Write or update the config file, preserving any existing keys."""
    path = Path(config_path)
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
