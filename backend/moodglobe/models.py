"""
File: moodglobe/models.py
Internal data structures used during parsing/aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


Ring = Tuple[Tuple[float, float], ...]

# Natural Earth marks countries without an official code this way.
_PLACEHOLDER_CODES = {"", "-99", "-1"}
_CODE_PROPERTIES = ("ISO_A2", "ISO_A2_EH", "ISO_A3")


def _frozen_mapping(values: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class Submission:
    """A single parsed mood record, prior to windowing and aggregation.

    lat/lng stay None when absent or unparseable; the aggregator applies
    the 0 default only where a coordinate is actually needed.
    """

    country_code: str
    mood: str
    timestamp: Optional[datetime] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    country_name: Optional[str] = None

    # Columns the parser did not recognise, keyed by lower-cased header
    extra: Mapping[str, str] = field(default_factory=_frozen_mapping)
    line_number: Optional[int] = None


@dataclass(frozen=True)
class Center:
    lat: float
    lng: float

    def as_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class BoundaryFeature:
    """A named country outline: candidate codes plus rings of (lng, lat) vertices."""

    name: str
    codes: Tuple[str, ...]
    rings: Tuple[Ring, ...] = ()

    @classmethod
    def from_geojson(cls, feature: Mapping[str, Any]) -> "BoundaryFeature":
        """Build a feature from a GeoJSON Feature object.

        Codes are collected from ISO_A2, ISO_A2_EH and ISO_A3 (in that order),
        then the Feature's own ``id``. Polygon and MultiPolygon geometries are
        flattened into a list of rings.

        Raises:
            ValueError: if the object is not a usable Feature
        """
        if not isinstance(feature, Mapping):
            raise ValueError("feature must be a mapping")

        properties = feature.get("properties") or {}
        codes: List[str] = []
        for key in _CODE_PROPERTIES:
            _add_code(codes, properties.get(key))
        _add_code(codes, feature.get("id"))

        name = (
            properties.get("ADMIN")
            or properties.get("NAME")
            or properties.get("name")
            or (codes[0] if codes else "")
        )

        geometry = feature.get("geometry") or {}
        rings = tuple(_rings_from_geometry(geometry))
        return cls(name=str(name), codes=tuple(codes), rings=rings)


def _add_code(codes: List[str], value: Any) -> None:
    if value is None:
        return
    code = str(value).strip().upper()
    if code in _PLACEHOLDER_CODES or code in codes:
        return
    codes.append(code)


def _rings_from_geometry(geometry: Mapping[str, Any]) -> Iterable[Ring]:
    kind = geometry.get("type")
    coordinates = geometry.get("coordinates") or []

    if kind == "Polygon":
        polygons = [coordinates]
    elif kind == "MultiPolygon":
        polygons = coordinates
    else:
        return []

    rings: List[Ring] = []
    for polygon in polygons:
        for ring in polygon or []:
            vertices = tuple(
                (float(point[0]), float(point[1]))
                for point in ring or []
                if isinstance(point, (list, tuple)) and len(point) >= 2
            )
            if vertices:
                rings.append(vertices)
    return rings


@dataclass(frozen=True)
class CountryStat:
    """Per-country summary produced by one aggregation pass.

    ``mood_counts`` and ``percentages`` preserve first-seen mood order.
    """

    code: str
    country: str
    center: Center
    total: int
    mood_counts: Mapping[str, int]
    percentages: Mapping[str, float]
    dominant_mood: Optional[str]
    dominant_percent: float


@dataclass(frozen=True)
class MoodSnapshot:
    """Everything one refresh cycle hands to the rendering layer."""

    countries: Mapping[str, CountryStat]
    total_submissions: int
    global_mood: Optional[str]
    generated_at: datetime
    source: str = "live"
    rejected_rows: int = 0

    @property
    def country_count(self) -> int:
        return len(self.countries)


__all__ = [
    "BoundaryFeature",
    "Center",
    "CountryStat",
    "MoodSnapshot",
    "Ring",
    "Submission",
]
