"""Core evaluation orchestration: fetch → enrich → build prompt → summarize."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from easyhyoka_core.enricher import enrich_comments
from easyhyoka_core.fetcher import fetch_activity
from easyhyoka_core.models import ActivityKind
from easyhyoka_core.prompt import build_prompt
from easyhyoka_core.providers.anthropic import AnthropicSummarizer
from easyhyoka_core.providers.openai import OpenAISummarizer

if TYPE_CHECKING:
    from easyhyoka_core.config import RunConfig
    from easyhyoka_core.gh.base import ActivitySource
    from easyhyoka_core.models import ActivityRecord
    from easyhyoka_core.providers.base import BaseSummarizer, ModelConfig

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    """What run_evaluation produced.

    ``summary`` is the model's text, or the prompt itself when the run was
    in show-prompt mode (``prompt_only``).
    """

    prs: list[ActivityRecord]
    issues: list[ActivityRecord]
    prompt: str
    summary: str
    prompt_only: bool = False
    truncated: bool = False
    warnings: list[str] = field(default_factory=list)


def get_summarizer(provider: str, api_key: str | None, model_config: ModelConfig | None = None) -> BaseSummarizer:
    if provider == "openai":
        return OpenAISummarizer(api_key=api_key, model_config=model_config)
    if provider == "anthropic":
        return AnthropicSummarizer(api_key=api_key, model_config=model_config)
    raise ValueError(f"Unknown provider: {provider!r}. Choose 'openai' or 'anthropic'.")


def _warn(message: str, warnings: list[str]) -> None:
    console.print(f"  [yellow]⚠ {escape(message)}[/yellow]")
    warnings.append(message)


def run_evaluation(
    source: ActivitySource,
    run_config: RunConfig,
    summarizer: BaseSummarizer | None = None,
) -> EvaluationResult:
    """Run the whole pipeline once and return its result.

    The summarizer is resolved before anything touches GitHub, so a missing
    credential (AuthFailure) aborts the run without spending API calls.
    FetchFailure from a search, and AuthFailure/ServiceFailure from the
    model, propagate to the caller.
    """
    if not run_config.show_prompt and summarizer is None:
        summarizer = get_summarizer(run_config.provider, run_config.api_key, run_config.model_config)

    scope = run_config.scope
    warnings: list[str] = []
    truncated = False

    console.print(f"Fetching GitHub activity ({scope.describe()})...")

    prs_result = fetch_activity(source, scope, ActivityKind.PULL_REQUEST)
    console.print(f"  {len(prs_result.records)} pull request(s) found.")
    if prs_result.truncated:
        truncated = True
        _warn(prs_result.warning.message, warnings)

    issues_result = fetch_activity(source, scope, ActivityKind.ISSUE)
    console.print(f"  {len(issues_result.records)} issue(s) found.")
    if issues_result.truncated:
        truncated = True
        _warn(issues_result.warning.message, warnings)

    # Each set gets its own enrichment budget.
    for label, records in (("pull request", prs_result.records), ("issue", issues_result.records)):
        if not records:
            continue
        console.print(f"[dim]Fetching comments for the most recent {label}s...[/dim]")
        enrichment = enrich_comments(source, records, run_config.enrich_limit)
        for message in enrichment.warnings:
            _warn(message, warnings)

    prompt = build_prompt(prs_result.records, issues_result.records, scope)

    if run_config.show_prompt:
        logger.debug("Show-prompt mode: skipping summary generation.")
        return EvaluationResult(
            prs=prs_result.records,
            issues=issues_result.records,
            prompt=prompt,
            summary=prompt,
            prompt_only=True,
            truncated=truncated,
            warnings=warnings,
        )

    console.print("\nGenerating evaluation summary...")
    summary = summarizer.summarize(prompt)

    return EvaluationResult(
        prs=prs_result.records,
        issues=issues_result.records,
        prompt=prompt,
        summary=summary,
        truncated=truncated,
        warnings=warnings,
    )
