"""
Display anchor points for countries.

Resolution order for a country code:

1. a boundary feature carrying that code: the plain mean of all its outline
   vertices (not an area centroid, so densely drawn coastlines pull the
   point towards them);
2. the static table in ``core/countries.py``;
3. the coordinates of the submission that introduced the country, with 0
   for anything missing.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from moodglobe.core.countries import lookup_center
from moodglobe.models import BoundaryFeature, Center, Submission

logger = logging.getLogger(__name__)

ORIGIN = Center(0.0, 0.0)


def feature_centroid(feature: BoundaryFeature) -> Optional[Center]:
    """
    Unweighted mean of every vertex in every ring of ``feature``.

    Args:
        feature: Boundary feature with (lng, lat) rings

    Returns:
        Center, or None if the feature has no vertices
    """
    lat_sum = 0.0
    lng_sum = 0.0
    count = 0
    for ring in feature.rings:
        for lng, lat in ring:
            lng_sum += lng
            lat_sum += lat
            count += 1

    if count == 0:
        return None
    return Center(lat=lat_sum / count, lng=lng_sum / count)


def index_features(features: Iterable[BoundaryFeature]) -> Dict[str, BoundaryFeature]:
    """Map every candidate code to its feature; the first feature claiming a code keeps it."""
    index: Dict[str, BoundaryFeature] = {}
    for feature in features:
        for code in feature.codes:
            index.setdefault(code, feature)
    return index


def submission_center(submission: Optional[Submission]) -> Center:
    if submission is None:
        return ORIGIN
    return Center(lat=submission.lat or 0.0, lng=submission.lng or 0.0)


def resolve_center(
    code: str,
    features: Iterable[BoundaryFeature],
    fallback: Optional[Submission] = None,
) -> Center:
    """
    Resolve one country code without caching.

    Args:
        code: Country code, any case
        features: Boundary features to search
        fallback: Submission whose coordinates are used when nothing matches

    Returns:
        Center for the country (never raises)
    """
    return CentroidResolver(features).resolve(code, fallback)


class CentroidResolver:
    """Resolves country centers, computing each at most once.

    Create one resolver per aggregation pass: the cache lives exactly as long
    as the pass that owns it.
    """

    def __init__(self, features: Iterable[BoundaryFeature] = ()):
        self._index = index_features(features)
        self._cache: Dict[str, Center] = {}

    def resolve(self, code: str, fallback: Optional[Submission] = None) -> Center:
        key = code.strip().upper()
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        center = self._lookup(key)
        if center is None:
            logger.debug("No center for %s, using submission coordinates", key)
            center = submission_center(fallback)

        self._cache[key] = center
        return center

    def _lookup(self, key: str) -> Optional[Center]:
        feature = self._index.get(key)
        if feature is not None:
            center = feature_centroid(feature)
            if center is not None:
                return center
        return lookup_center(key)
