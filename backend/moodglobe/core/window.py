"""
Trailing time window and volume cap applied before aggregation.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List

from moodglobe.models import Submission
from moodglobe.utils import ensure_utc


def is_recent(submission: Submission, cutoff: datetime) -> bool:
    """Records without a timestamp count as recent."""
    if submission.timestamp is None:
        return True
    return ensure_utc(submission.timestamp) >= cutoff


def filter_recent(
    submissions: Iterable[Submission],
    now: datetime,
    window: timedelta,
    max_count: int,
) -> List[Submission]:
    """
    Keep submissions inside the trailing window, capped at ``max_count``.

    The cutoff is inclusive: a record stamped exactly ``now - window`` stays.
    The cap keeps the first records in source order, so with more than
    ``max_count`` recent rows the earliest-parsed ones win.

    Args:
        submissions: Parsed submissions in source order
        now: Reference time (naive values are taken as UTC)
        window: Length of the trailing window
        max_count: Maximum number of records to return

    Returns:
        Filtered list, source order preserved
    """
    cutoff = ensure_utc(now) - window
    limit = max(0, max_count)

    recent: List[Submission] = []
    for submission in submissions:
        if len(recent) >= limit:
            break
        if is_recent(submission, cutoff):
            recent.append(submission)
    return recent
