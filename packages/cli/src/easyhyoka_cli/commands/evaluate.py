"""evaluate command — fetch GitHub activity and generate an evaluation summary."""

from __future__ import annotations

import click
from rich.console import Console

from easyhyoka_core.errors import EasyHyokaError
from easyhyoka_core.gh.activity import GithubActivitySource
from easyhyoka_core.pipeline import get_summarizer, run_evaluation
from easyhyoka_core.prompt import DEFAULT_TEMPLATE

console = Console()

_DATE = click.DateTime(formats=["%Y-%m-%d"])


@click.command("evaluate")
@click.option("--owner", default=None, help="GitHub user or organization to search under. Overrides config file.")
@click.option("--author", default=None, help="Contributor login. Defaults to the authenticated GitHub user.")
@click.option("--since", type=_DATE, default=None, help="First day of the window (YYYY-MM-DD, inclusive).")
@click.option(
    "--until",
    type=_DATE,
    default=None,
    help="Last day of the window (YYYY-MM-DD, inclusive). Defaults to today.",
)
@click.option(
    "--provider",
    type=click.Choice(["openai", "anthropic"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option(
    "--enrich-limit",
    type=click.IntRange(min=0),
    default=None,
    help="Fetch comments for this many of the most recently updated PRs and issues.",
)
@click.option(
    "--show-prompt",
    is_flag=True,
    help="Print the prompt that would be sent to the model instead of calling it.",
)
@click.pass_context
def evaluate_cmd(
    ctx,
    owner: str | None,
    author: str | None,
    since,
    until,
    provider: str | None,
    enrich_limit: int | None,
    show_prompt: bool,
):
    """Generate a performance-evaluation summary from GitHub activity.

    Searches the pull requests and issues AUTHOR created under OWNER between
    --since and --until, attaches comments to the most recent ones, and asks
    the model for an evaluation narrative.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub personal access token (or use gh CLI)
      OPENAI_API_KEY       Required when using --provider openai
      ANTHROPIC_API_KEY    Required when using --provider anthropic
    """
    from easyhyoka_core.config import RunConfig, api_key_for, load_config, resolve_window
    from easyhyoka_core.models import ActivityScope
    from easyhyoka_cli.auth import require_github_token

    config_path = (ctx.obj or {}).get("config_path", ".easyhyoka.yml")
    config = load_config(
        config_path,
        cli_overrides={"owner": owner, "provider": provider, "enrich_limit": enrich_limit},
    )

    if not config.get("owner"):
        raise click.UsageError("No owner given. Pass --owner or set owner in the config file.")

    try:
        api_key = api_key_for(config)
    except ValueError as e:
        raise click.UsageError(str(e))

    # Checked before any GitHub call so a missing key costs no API quota.
    summarizer = None
    if not show_prompt:
        try:
            summarizer = get_summarizer(config["provider"], api_key)
        except EasyHyokaError as e:
            raise click.ClickException(str(e))

    source = GithubActivitySource(require_github_token(config))

    since_date, until_date = resolve_window(
        since.date() if since else None,
        until.date() if until else None,
        config["window_days"],
    )

    try:
        if author is None:
            author = source.current_login()
            console.print(f"GitHub user: [bold]{author}[/bold]")
        scope = ActivityScope(owner=config["owner"], author=author, since=since_date, until=until_date)
    except EasyHyokaError as e:
        raise click.ClickException(str(e))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--since/--until")

    run_config = RunConfig(
        scope=scope,
        provider=config["provider"],
        api_key=api_key,
        enrich_limit=config["enrich_limit"],
        show_prompt=show_prompt,
    )

    try:
        result = run_evaluation(source, run_config, summarizer=summarizer)
    except EasyHyokaError as e:
        raise click.ClickException(str(e))

    if result.prompt_only:
        console.print("\n[bold]=== Prompt (not sent) ===[/bold]")
        console.print("[bold]System prompt:[/bold]")
        click.echo(DEFAULT_TEMPLATE.system)
        console.print("\n[bold]User prompt:[/bold]")
        click.echo(result.prompt)
        return

    console.print("\n[bold]Evaluation summary[/bold]")
    console.print("=" * 40)
    click.echo(result.summary)

    if result.warnings:
        console.print(f"\n[yellow]Completed with {len(result.warnings)} warning(s); see above.[/yellow]")
