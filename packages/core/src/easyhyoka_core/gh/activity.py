"""GitHub implementation of ActivitySource, backed by PyGithub."""

from __future__ import annotations

import logging
from itertools import islice

import requests
from github import Auth, Github, GithubException

from easyhyoka_core.errors import FetchFailure
from easyhyoka_core.gh.base import ActivitySource
from easyhyoka_core.models import ActivityKind, ActivityRecord, ActivityScope, ActivityState, Comment

logger = logging.getLogger(__name__)

# Search pages are fetched lazily while iterating; 100 is the largest page
# GitHub accepts, so the 1000-item ceiling costs at most 10 requests.
_PER_PAGE = 100

_KIND_QUALIFIER = {
    ActivityKind.PULL_REQUEST: "is:pr",
    ActivityKind.ISSUE: "is:issue",
}


def build_search_query(scope: ActivityScope, kind: ActivityKind) -> str:
    """Return the GitHub search query for one kind of item within ``scope``."""
    parts = [_KIND_QUALIFIER[kind], f"user:{scope.owner}"]
    if scope.author:
        parts.append(f"author:{scope.author}")
    parts.append(f"created:{scope.since.isoformat()}..{scope.until.isoformat()}")
    return " ".join(parts)


def repository_from_url(html_url: str) -> str:
    """Extract "owner/name" from an item URL such as https://github.com/o/r/pull/1."""
    parts = html_url.split("/")
    if len(parts) < 5:
        raise ValueError(f"Unexpected GitHub URL: {html_url!r}")
    return f"{parts[3]}/{parts[4]}"


def _error_message(e: GithubException) -> str:
    if isinstance(e.data, dict) and e.data.get("message"):
        return e.data["message"]
    return str(e)


def _item_state(item, kind: ActivityKind) -> ActivityState:
    if kind is ActivityKind.PULL_REQUEST and item.pull_request is not None:
        if item.pull_request.merged_at:
            return ActivityState.MERGED
    return ActivityState(item.state)


def to_record(item, kind: ActivityKind) -> ActivityRecord:
    """Convert a PyGithub search result (an Issue object) to an ActivityRecord."""
    return ActivityRecord(
        kind=kind,
        repository=repository_from_url(item.html_url),
        number=item.number,
        title=item.title,
        url=item.html_url,
        state=_item_state(item, kind),
        created_at=item.created_at,
        updated_at=item.updated_at,
        body=item.body or "",
    )


def to_comment(raw) -> Comment:
    return Comment(
        author=raw.user.login if raw.user is not None else "Unknown",
        created_at=raw.created_at,
        body=raw.body or "",
    )


class GithubActivitySource(ActivitySource):
    """Reads pull requests, issues and their comments from the GitHub REST API."""

    def __init__(self, token: str, github: Github | None = None):
        self._github = github if github is not None else Github(auth=Auth.Token(token), per_page=_PER_PAGE)

    def search_items(self, scope: ActivityScope, kind: ActivityKind, limit: int) -> list[ActivityRecord]:
        query = build_search_query(scope, kind)
        logger.debug("Searching GitHub: %s", query)
        try:
            results = self._github.search_issues(query)
            # islice stops paging once limit is reached; GitHub refuses to
            # serve anything past the 1000th result anyway.
            return [to_record(item, kind) for item in islice(results, limit)]
        except GithubException as e:
            raise FetchFailure(_error_message(e), call=f"search {kind.value}", scope=scope, status=e.status) from e
        except requests.RequestException as e:
            raise FetchFailure(str(e), call=f"search {kind.value}", scope=scope) from e

    def fetch_comments(self, record: ActivityRecord) -> list[Comment]:
        call = f"comments {record.identifier}"
        try:
            repo = self._github.get_repo(record.repository, lazy=True)
            raw = list(repo.get_issue(record.number).get_comments())
            if record.kind is ActivityKind.PULL_REQUEST:
                # Review comments live on the diff, separate from the conversation.
                raw.extend(repo.get_pull(record.number).get_review_comments())
        except GithubException as e:
            raise FetchFailure(_error_message(e), call=call, status=e.status) from e
        except requests.RequestException as e:
            raise FetchFailure(str(e), call=call) from e

        # sorted() is stable: conversation comments stay ahead of review
        # comments posted at the same instant.
        return [to_comment(c) for c in sorted(raw, key=lambda c: c.created_at)]

    def current_login(self) -> str:
        try:
            return self._github.get_user().login
        except GithubException as e:
            raise FetchFailure(_error_message(e), call="resolve current user", status=e.status) from e
        except requests.RequestException as e:
            raise FetchFailure(str(e), call="resolve current user") from e
