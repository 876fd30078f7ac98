"""Activity data models.

Records are built fresh for every run from the search response and are only
mutated by the comment enricher. Nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class ActivityKind(str, Enum):
    PULL_REQUEST = "pull_request"
    ISSUE = "issue"


class ActivityState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"  # pull requests only


@dataclass
class Comment:
    """A single discussion entry on a pull request or issue."""

    author: str
    created_at: datetime
    body: str


@dataclass
class ActivityRecord:
    """One pull request or issue returned by the search.

    ``comments`` stays ``None`` until the enricher attaches a thread. An empty
    list means the thread was fetched and has no comments, which is not the
    same thing as never having been fetched.
    """

    kind: ActivityKind
    repository: str  # "owner/name"
    number: int
    title: str
    url: str
    state: ActivityState
    created_at: datetime
    updated_at: datetime
    body: str = ""
    comments: list[Comment] | None = None

    @property
    def identifier(self) -> str:
        return f"{self.repository}#{self.number}"

    @property
    def is_enriched(self) -> bool:
        return self.comments is not None


@dataclass(frozen=True)
class ActivityScope:
    """Who and when to search for. Both dates are inclusive."""

    owner: str
    author: str | None
    since: date
    until: date

    def __post_init__(self):
        if self.since > self.until:
            raise ValueError(f"since ({self.since}) must not be after until ({self.until}).")

    def describe(self) -> str:
        who = f"author={self.author}" if self.author else "all authors"
        return f"owner={self.owner}, {who}, {self.since}..{self.until}"
