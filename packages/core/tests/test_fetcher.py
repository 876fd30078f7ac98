"""Tests for fetch_activity: ceiling detection, ordering and failures."""

import logging
from datetime import date

import pytest

from easyhyoka_core.errors import FetchFailure
from easyhyoka_core.fetcher import SEARCH_RESULT_LIMIT, fetch_activity
from easyhyoka_core.gh.base import ActivitySource
from easyhyoka_core.models import ActivityKind, ActivityScope

SCOPE = ActivityScope(owner="acme", author="alice", since=date(2025, 1, 1), until=date(2025, 3, 31))


class TestTruncation:
    def test_exactly_limit_is_truncated(self, make_record, fixture_source):
        prs = [make_record(n) for n in range(1, 1001)]
        result = fetch_activity(fixture_source(prs=prs), SCOPE, ActivityKind.PULL_REQUEST)
        assert len(result.records) == 1000
        assert result.truncated is True
        assert result.warning is not None
        assert result.warning.count == 1000

    def test_one_below_limit_is_not_truncated(self, make_record, fixture_source):
        prs = [make_record(n) for n in range(1, 1000)]
        result = fetch_activity(fixture_source(prs=prs), SCOPE, ActivityKind.PULL_REQUEST)
        assert len(result.records) == 999
        assert result.truncated is False
        assert result.warning is None

    def test_truncation_not_logged_as_warning(self, make_record, fixture_source, caplog):
        prs = [make_record(n) for n in range(1, 1001)]
        with caplog.at_level(logging.DEBUG, logger="easyhyoka_core.fetcher"):
            fetch_activity(fixture_source(prs=prs), SCOPE, ActivityKind.PULL_REQUEST)
        # Printed by the pipeline; logged at DEBUG only.
        assert [r.levelno for r in caplog.records if "1000 results" in r.getMessage()] == [logging.DEBUG]

    def test_asks_source_for_the_ceiling(self, fixture_source):
        source = fixture_source()
        fetch_activity(source, SCOPE, ActivityKind.ISSUE)
        assert source.search_calls == [(SCOPE, ActivityKind.ISSUE, SEARCH_RESULT_LIMIT)]


class TestRecords:
    def test_order_preserved(self, make_record, fixture_source):
        prs = [make_record(3, updated_hours=1), make_record(1, updated_hours=5), make_record(2)]
        result = fetch_activity(fixture_source(prs=prs), SCOPE, ActivityKind.PULL_REQUEST)
        assert [r.number for r in result.records] == [3, 1, 2]

    def test_duplicates_dropped_first_wins(self, make_record, fixture_source):
        first = make_record(1, title="first")
        prs = [first, make_record(2), make_record(1, title="second")]
        result = fetch_activity(fixture_source(prs=prs), SCOPE, ActivityKind.PULL_REQUEST)
        assert [r.identifier for r in result.records] == ["acme/api#1", "acme/api#2"]
        assert result.records[0] is first

    def test_same_number_in_other_repo_kept(self, make_record, fixture_source):
        prs = [make_record(1, repository="acme/api"), make_record(1, repository="acme/web")]
        result = fetch_activity(fixture_source(prs=prs), SCOPE, ActivityKind.PULL_REQUEST)
        assert len(result.records) == 2

    def test_empty_result(self, fixture_source):
        result = fetch_activity(fixture_source(), SCOPE, ActivityKind.ISSUE)
        assert result.records == []
        assert result.truncated is False


class TestFailures:
    def test_search_failure_propagates(self):
        class _BrokenSource(ActivitySource):
            def search_items(self, scope, kind, limit):
                raise FetchFailure("Bad credentials", call="search pull_request", scope=scope, status=401)

            def fetch_comments(self, record):
                return []

            def current_login(self):
                return "alice"

        with pytest.raises(FetchFailure) as exc_info:
            fetch_activity(_BrokenSource(), SCOPE, ActivityKind.PULL_REQUEST)
        assert exc_info.value.status == 401
