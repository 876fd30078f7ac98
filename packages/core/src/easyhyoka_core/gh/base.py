"""Abstract activity source.

The pipeline talks to GitHub only through this interface, so the fetcher,
enricher and orchestration can run against fixtures in tests. The real
implementation lives in easyhyoka_core.gh.activity.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from easyhyoka_core.models import ActivityKind, ActivityRecord, ActivityScope, Comment


class ActivitySource(ABC):
    """Search and comment capabilities of a version-control host.

    Implementations raise FetchFailure for any transport or auth problem and
    never retry on their own.
    """

    @abstractmethod
    def search_items(self, scope: ActivityScope, kind: ActivityKind, limit: int) -> list[ActivityRecord]:
        """Return at most ``limit`` matching items in the order the host returns them."""

    @abstractmethod
    def fetch_comments(self, record: ActivityRecord) -> list[Comment]:
        """Return the discussion thread of one record, oldest first."""

    @abstractmethod
    def current_login(self) -> str:
        """Return the login of the authenticated user."""
