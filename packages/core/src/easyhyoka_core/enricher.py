"""Attach discussion threads to the most recently updated records.

Only a handful of records get comments: each thread costs one or two API
calls, and the search itself may already have spent a good share of the
rate limit.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from easyhyoka_core.errors import FetchFailure

if TYPE_CHECKING:
    from easyhyoka_core.gh.base import ActivitySource
    from easyhyoka_core.models import ActivityRecord

logger = logging.getLogger(__name__)

DEFAULT_ENRICH_LIMIT = 5


@dataclass
class EnrichmentResult:
    records: list[ActivityRecord]
    enriched: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def select_most_recent(records: list[ActivityRecord], limit: int) -> list[ActivityRecord]:
    """Return the ``limit`` records with the latest ``updated_at``.

    sorted() is stable, so records updated at the same instant keep their
    original relative order.
    """
    if limit <= 0:
        return []
    return sorted(records, key=lambda r: r.updated_at, reverse=True)[:limit]


def enrich_comments(
    source: ActivitySource,
    records: list[ActivityRecord],
    limit: int = DEFAULT_ENRICH_LIMIT,
) -> EnrichmentResult:
    """Fetch comments for up to ``limit`` of ``records`` and attach them in place.

    The list itself is not reordered. A failed fetch leaves that record's
    ``comments`` unset and is reported in ``warnings``; the other fetches
    carry on.
    """
    result = EnrichmentResult(records=records)
    selected = select_most_recent(records, limit)
    if not selected:
        return result

    with ThreadPoolExecutor(max_workers=len(selected)) as executor:
        futures = [(record, executor.submit(source.fetch_comments, record)) for record in selected]
        # Collect in selection order so warnings and `enriched` are deterministic.
        for record, future in futures:
            try:
                record.comments = future.result()
            except FetchFailure as e:
                message = f"Could not fetch comments for {record.identifier}: {e}"
                logger.debug(message)
                result.warnings.append(message)
                continue
            result.enriched.append(record.identifier)

    return result
