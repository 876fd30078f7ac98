"""Search one kind of activity and flag results that hit GitHub's ceiling."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from easyhyoka_core.errors import TruncationWarning

if TYPE_CHECKING:
    from easyhyoka_core.gh.base import ActivitySource
    from easyhyoka_core.models import ActivityKind, ActivityRecord, ActivityScope

logger = logging.getLogger(__name__)

# The search API never returns more than 1000 items for one query.
SEARCH_RESULT_LIMIT = 1000


@dataclass
class FetchResult:
    records: list[ActivityRecord] = field(default_factory=list)
    truncated: bool = False
    warning: TruncationWarning | None = None


def _dedupe(records: list[ActivityRecord]) -> list[ActivityRecord]:
    seen: set[str] = set()
    unique = []
    for record in records:
        if record.identifier in seen:
            logger.debug("Dropping duplicate search result %s", record.identifier)
            continue
        seen.add(record.identifier)
        unique.append(record)
    return unique


def fetch_activity(source: ActivitySource, scope: ActivityScope, kind: ActivityKind) -> FetchResult:
    """Search ``kind`` items in ``scope``.

    Records keep the order the source returned them in. ``truncated`` is set
    when the raw result count equals SEARCH_RESULT_LIMIT exactly, because
    there may be more matches GitHub did not return. FetchFailure from the
    source is not caught here: a failed search aborts the run.
    """
    raw = source.search_items(scope, kind, SEARCH_RESULT_LIMIT)
    result = FetchResult(records=_dedupe(raw))
    if len(raw) == SEARCH_RESULT_LIMIT:
        result.truncated = True
        result.warning = TruncationWarning(kind=kind, count=len(raw), limit=SEARCH_RESULT_LIMIT)
        logger.debug(result.warning.message)
    return result
