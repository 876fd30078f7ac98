"""Failure taxonomy shared by the pipeline and the CLI.

Fatal kinds abort the run and are reported with enough context to retry by
hand. Nothing in easyhyoka retries a network call on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from easyhyoka_core.models import ActivityKind

if TYPE_CHECKING:
    from easyhyoka_core.models import ActivityScope


class EasyHyokaError(Exception):
    """Base class for every failure easyhyoka reports to the operator."""


class FetchFailure(EasyHyokaError):
    """The GitHub search or comment API rejected the call or could not be reached.

    Fatal for searches. For a single record's comment fetch it is collected as
    a warning by the enricher instead.
    """

    def __init__(
        self,
        message: str,
        call: str,
        scope: ActivityScope | None = None,
        status: int | None = None,
    ):
        super().__init__(message)
        self.call = call
        self.scope = scope
        self.status = status

    def __str__(self) -> str:
        text = f"{self.call} failed: {self.args[0]}"
        if self.status is not None:
            text += f" (HTTP {self.status})"
        if self.scope is not None:
            text += f" [{self.scope.describe()}]"
        return text


class AuthFailure(EasyHyokaError):
    """The text-generation credential is missing or was rejected."""

    def __init__(self, message: str, env_var: str | None = None):
        super().__init__(message)
        self.env_var = env_var

    def __str__(self) -> str:
        if self.env_var:
            return f"{self.args[0]} Check the {self.env_var} environment variable (or .env file)."
        return self.args[0]


class ServiceFailure(EasyHyokaError):
    """The text-generation call failed after reaching (or trying to reach) the service.

    ``body`` keeps the raw response text so the operator can see what the
    service actually said.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        text = self.args[0]
        if self.status_code is not None:
            text += f" (HTTP {self.status_code})"
        if self.body:
            text += f"\n{self.body}"
        return text


@dataclass(frozen=True)
class TruncationWarning:
    """Signal that a search hit the platform's result ceiling. Never aborts a run."""

    kind: ActivityKind
    count: int
    limit: int

    @property
    def message(self) -> str:
        label = "pull requests" if self.kind is ActivityKind.PULL_REQUEST else "issues"
        return (
            f"Search for {label} returned {self.count} results, the maximum GitHub allows. "
            "Some activity may be missing; narrow the range with --since/--until."
        )
