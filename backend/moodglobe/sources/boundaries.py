"""
Country boundary (GeoJSON) fetcher with a fallback dataset URL.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

import httpx

from moodglobe.config import BOUNDARIES_FALLBACK_URL, BOUNDARIES_URL
from moodglobe.errors import SourceUnavailable
from moodglobe.models import BoundaryFeature
from moodglobe.sources.common import build_client

logger = logging.getLogger(__name__)


def parse_feature_collection(data: Any) -> List[BoundaryFeature]:
    """
    Convert a GeoJSON FeatureCollection into boundary features.

    Args:
        data: Decoded JSON document

    Returns:
        Features with at least one code; malformed entries are skipped
    """
    if not isinstance(data, dict):
        return []

    features: List[BoundaryFeature] = []
    for raw in data.get("features") or []:
        try:
            feature = BoundaryFeature.from_geojson(raw)
        except (ValueError, TypeError, IndexError) as e:
            logger.debug("Skipping malformed boundary feature: %s", e)
            continue
        if feature.codes:
            features.append(feature)
    return features


class BoundaryFetcher:
    """Loads country outlines, trying each configured URL in turn."""

    SOURCE_NAME = "boundaries"

    def __init__(
        self,
        urls: Optional[Sequence[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.urls = list(urls) if urls is not None else [BOUNDARIES_URL, BOUNDARIES_FALLBACK_URL]
        self._transport = transport

    async def fetch(self) -> List[BoundaryFeature]:
        """
        Fetch boundary features from the first URL that yields any.

        Returns:
            List of BoundaryFeature objects

        Raises:
            SourceUnavailable: if no URL produced a usable FeatureCollection
        """
        last_error = "no boundary URLs configured"

        async with build_client(self._transport) as client:
            for url in self.urls:
                if not url:
                    continue
                try:
                    response = await client.get(url)
                    response.raise_for_status()
                    features = parse_feature_collection(response.json())
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning("Error loading boundaries from %s: %s", url, e)
                    last_error = str(e) or type(e).__name__
                    continue

                if features:
                    logger.info("Loaded %d boundary features from %s", len(features), url)
                    return features

                logger.warning("Boundary document at %s has no usable features", url)
                last_error = "no usable features"

        raise SourceUnavailable(self.SOURCE_NAME, last_error)
