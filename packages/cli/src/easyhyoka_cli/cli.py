"""CLI entry point for easyhyoka.

Commands:
  evaluate — fetch GitHub activity and generate an evaluation summary
  init     — interactive setup wizard that writes .easyhyoka.yml
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from dotenv import find_dotenv, load_dotenv
from rich.logging import RichHandler

from easyhyoka_cli.commands.evaluate import evaluate_cmd
from easyhyoka_cli.commands.init import init_cmd


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("easyhyoka"),
    prog_name="easyhyoka",
)
@click.option(
    "--config",
    "config_path",
    default=".easyhyoka.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="EASYHYOKA_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Turn a contributor's GitHub activity into a performance-evaluation summary."""
    _setup_logging(verbose)
    # Existing environment variables win over .env entries.
    load_dotenv(find_dotenv(usecwd=True))

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(evaluate_cmd)
main.add_command(init_cmd)
