"""
Pipeline coordinator: upstream bytes in, one MoodSnapshot out.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Iterable, List, Optional, Sequence

from moodglobe.config import MAX_RECORDS, USE_FALLBACK_DATA, WINDOW_HOURS
from moodglobe.core.aggregator import aggregate_by_country, summarize_moods
from moodglobe.core.centroids import CentroidResolver
from moodglobe.core.encoding import decode_payload
from moodglobe.core.parser import parse_document
from moodglobe.core.window import filter_recent
from moodglobe.errors import SourceUnavailable
from moodglobe.models import BoundaryFeature, MoodSnapshot, Submission
from moodglobe.sources.boundaries import BoundaryFetcher
from moodglobe.sources.fallback import FallbackProducer, generate_fallback_submissions
from moodglobe.sources.sheets import SheetsFetcher
from moodglobe.utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)

SOURCE_LIVE = "live"
SOURCE_FALLBACK = "fallback"


def snapshot_from_submissions(
    submissions: Iterable[Submission],
    features: Sequence[BoundaryFeature] = (),
    now: Optional[datetime] = None,
    window: Optional[timedelta] = None,
    max_count: Optional[int] = None,
    source: str = SOURCE_LIVE,
    rejected_rows: int = 0,
) -> MoodSnapshot:
    """
    Window, aggregate and summarise already-parsed submissions.

    Args:
        submissions: Parsed submissions in source order
        features: Boundary features for center resolution
        now: Reference time for the window (defaults to current UTC time)
        window: Trailing window (defaults to MOOD_WINDOW_HOURS)
        max_count: Record cap (defaults to MOOD_MAX_RECORDS)
        source: "live" or "fallback"
        rejected_rows: Rows dropped while parsing, reported on the snapshot

    Returns:
        MoodSnapshot for this pass
    """
    now = ensure_utc(now) if now else now_utc()
    window = window if window is not None else timedelta(hours=WINDOW_HOURS)
    max_count = MAX_RECORDS if max_count is None else max_count

    recent = filter_recent(submissions, now, window, max_count)

    # One resolver per pass so each country's center is computed once
    resolver = CentroidResolver(features)
    countries = aggregate_by_country(recent, resolver)
    total, global_mood = summarize_moods(recent)

    return MoodSnapshot(
        countries=MappingProxyType(countries),
        total_submissions=total,
        global_mood=global_mood,
        generated_at=now,
        source=source,
        rejected_rows=rejected_rows,
    )


def build_snapshot(
    payload: bytes | str,
    features: Sequence[BoundaryFeature] = (),
    now: Optional[datetime] = None,
    window: Optional[timedelta] = None,
    max_count: Optional[int] = None,
    source: str = SOURCE_LIVE,
) -> MoodSnapshot:
    """
    Run the whole pipeline over a raw CSV document.

    Args:
        payload: Raw document as fetched (bytes) or already-decoded text
        features: Boundary features for center resolution
        now: Reference time for the window
        window: Trailing window
        max_count: Record cap
        source: Label stored on the snapshot

    Returns:
        MoodSnapshot for this pass
    """
    parsed = parse_document(decode_payload(payload))
    if parsed.rejected:
        logger.info(
            "Parsed %d rows, dropped %d malformed",
            len(parsed.submissions), parsed.rejected,
        )

    return snapshot_from_submissions(
        parsed.submissions,
        features=features,
        now=now,
        window=window,
        max_count=max_count,
        source=source,
        rejected_rows=parsed.rejected,
    )


async def load_boundaries(fetcher: Optional[BoundaryFetcher] = None) -> List[BoundaryFeature]:
    """
    Fetch boundary features, degrading to an empty list.

    Without features every country falls back to the static center table.
    """
    fetcher = fetcher or BoundaryFetcher()
    try:
        return await fetcher.fetch()
    except SourceUnavailable as e:
        logger.warning("%s; using static country centers", e)
        return []


async def collect_snapshot(
    features: Optional[Sequence[BoundaryFeature]] = None,
    sheets: Optional[SheetsFetcher] = None,
    boundaries: Optional[BoundaryFetcher] = None,
    fallback: Optional[FallbackProducer] = generate_fallback_submissions,
    use_fallback: bool = USE_FALLBACK_DATA,
    now: Optional[datetime] = None,
) -> MoodSnapshot:
    """
    Fetch the sheet (and boundaries, if not supplied) and build a snapshot.

    Args:
        features: Pre-loaded boundary features; fetched concurrently if None
        sheets: Sheet fetcher (defaults to the configured export URL)
        boundaries: Boundary fetcher used when ``features`` is None
        fallback: Producer of synthetic submissions
        use_fallback: Substitute fallback data when the sheet is unavailable
        now: Reference time for the window

    Returns:
        MoodSnapshot labelled "live" or "fallback"

    Raises:
        SourceUnavailable: if the sheet fails and no fallback is allowed
    """
    sheets = sheets or SheetsFetcher()
    now = ensure_utc(now) if now else now_utc()

    if features is None:
        payload, features = await asyncio.gather(
            sheets.fetch(),
            load_boundaries(boundaries),
            return_exceptions=True,
        )
        if isinstance(features, BaseException):
            raise features
    else:
        try:
            payload = await sheets.fetch()
        except SourceUnavailable as e:
            payload = e

    if isinstance(payload, SourceUnavailable):
        if not use_fallback or fallback is None:
            raise payload
        logger.warning("%s; serving fallback data", payload)
        return snapshot_from_submissions(
            fallback(now), features=features, now=now, source=SOURCE_FALLBACK
        )
    if isinstance(payload, BaseException):
        raise payload

    return build_snapshot(payload, features=features, now=now, source=SOURCE_LIVE)
