"""Shared fixtures: record factory and a fixture-backed ActivitySource."""

from datetime import datetime, timedelta, timezone

import pytest

from easyhyoka_core.errors import FetchFailure
from easyhyoka_core.gh.base import ActivitySource
from easyhyoka_core.models import ActivityKind, ActivityRecord, ActivityState, Comment

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _record(
    number,
    kind=ActivityKind.PULL_REQUEST,
    repository="acme/api",
    state=ActivityState.OPEN,
    updated_hours=0,
    title=None,
    body="",
):
    segment = "pull" if kind is ActivityKind.PULL_REQUEST else "issues"
    return ActivityRecord(
        kind=kind,
        repository=repository,
        number=number,
        title=title or f"Item {number}",
        url=f"https://github.com/{repository}/{segment}/{number}",
        state=state,
        created_at=BASE_TIME,
        updated_at=BASE_TIME + timedelta(hours=updated_hours),
        body=body,
    )


class FixtureActivitySource(ActivitySource):
    """Serves canned search results and comment threads; records every call."""

    def __init__(self, prs=None, issues=None, comments=None, failing=(), login="alice"):
        self._items = {ActivityKind.PULL_REQUEST: list(prs or []), ActivityKind.ISSUE: list(issues or [])}
        self._comments = comments or {}
        self._failing = set(failing)
        self._login = login
        self.search_calls = []
        self.comment_calls = []

    def search_items(self, scope, kind, limit):
        self.search_calls.append((scope, kind, limit))
        return self._items[kind][:limit]

    def fetch_comments(self, record):
        self.comment_calls.append(record.identifier)
        if record.identifier in self._failing:
            raise FetchFailure("boom", call=f"comments {record.identifier}", status=502)
        return list(self._comments.get(record.identifier, []))

    def current_login(self):
        return self._login


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def make_comment():
    def _comment(author="bob", body="LGTM", hours=1):
        return Comment(author=author, created_at=BASE_TIME + timedelta(hours=hours), body=body)

    return _comment


@pytest.fixture
def fixture_source():
    return FixtureActivitySource
