"""
Holder for the latest mood snapshot and the periodic refresh loop.

A refresh builds a brand-new snapshot and then replaces the stored one.
If two refreshes overlap, whichever finishes last is what readers see.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from moodglobe.config import REFRESH_SECONDS, USE_FALLBACK_DATA
from moodglobe.errors import SourceUnavailable
from moodglobe.models import BoundaryFeature, MoodSnapshot
from moodglobe.sources.boundaries import BoundaryFetcher
from moodglobe.sources.collector import collect_snapshot, load_boundaries
from moodglobe.sources.fallback import FallbackProducer, generate_fallback_submissions
from moodglobe.sources.sheets import SheetsFetcher
from moodglobe.utils import now_utc

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Latest published snapshot plus what is needed to build the next one."""

    def __init__(
        self,
        sheets: Optional[SheetsFetcher] = None,
        boundaries: Optional[BoundaryFetcher] = None,
        fallback: Optional[FallbackProducer] = generate_fallback_submissions,
        use_fallback: bool = USE_FALLBACK_DATA,
    ):
        self._sheets = sheets
        self._boundaries = boundaries
        self._fallback = fallback
        self._use_fallback = use_fallback

        self._snapshot: Optional[MoodSnapshot] = None
        self._features: Optional[List[BoundaryFeature]] = None
        self.last_error: Optional[str] = None
        self.last_refresh: Optional[datetime] = None

    @property
    def snapshot(self) -> Optional[MoodSnapshot]:
        return self._snapshot

    def publish(self, snapshot: MoodSnapshot) -> None:
        self._snapshot = snapshot
        self.last_refresh = now_utc()

    async def boundary_features(self) -> List[BoundaryFeature]:
        """Boundary outlines, loaded on first use; an empty load is retried next time."""
        if not self._features:
            self._features = await load_boundaries(self._boundaries)
        return self._features

    async def refresh(self) -> Optional[MoodSnapshot]:
        """
        Run one aggregation pass and publish its result.

        Returns:
            The new snapshot, or the previous one if the source was unavailable
        """
        features = await self.boundary_features()
        try:
            snapshot = await collect_snapshot(
                features=features,
                sheets=self._sheets,
                fallback=self._fallback,
                use_fallback=self._use_fallback,
            )
        except SourceUnavailable as e:
            self.last_error = str(e)
            logger.warning("Refresh failed, keeping previous snapshot: %s", e)
            return self._snapshot

        self.last_error = None
        self.publish(snapshot)
        logger.info(
            "Snapshot refreshed: %d submissions across %d countries (%s)",
            snapshot.total_submissions, snapshot.country_count, snapshot.source,
        )
        return snapshot

    async def run_forever(self, interval: float = REFRESH_SECONDS) -> None:
        """Refresh every ``interval`` seconds until cancelled."""
        while True:
            try:
                await self.refresh()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Unexpected error during refresh: %s", e)
            await asyncio.sleep(interval)


# Module-level singleton, injected into routes via get_store
snapshot_store = SnapshotStore()


def get_store() -> SnapshotStore:
    """FastAPI dependency returning the shared snapshot store."""
    return snapshot_store
