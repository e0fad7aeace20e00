"""Merge freshly scanned records into the feed: newest first, then best match."""
from __future__ import annotations

from datetime import datetime
from typing import Iterable

from alert_agent.log import get_logger
from alert_agent.models import JobRecord

log = get_logger(__name__)


def sort_key(job: JobRecord) -> tuple[int, float, int]:
    """Ascending key whose order is recency DESC, match score DESC.

    Records with an unparsable publish date sort after every dated record
    and are ranked among themselves by score only.
    """
    published: datetime | None = job.published_at
    if published is None:
        return (1, 0.0, -job.match_score)
    return (0, -published.timestamp(), -job.match_score)


def merge_and_sort(
    incoming: Iterable[JobRecord], existing: Iterable[JobRecord]
) -> list[JobRecord]:
    """Return every record of both inputs in feed order.

    Duplicates are kept; ``sorted`` is stable, so records equal on both
    keys keep their incoming-then-existing order.
    """
    new = list(incoming)
    old = list(existing)
    merged = sorted(new + old, key=sort_key)
    undated = sum(1 for j in merged if j.published_at is None)
    if undated:
        log.warning("%d record(s) without a parsable publish date placed last", undated)
    log.debug("Merged %d new + %d existing → %d records", len(new), len(old), len(merged))
    return merged
