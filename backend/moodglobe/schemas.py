# moodglobe/schemas.py
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from moodglobe.core.moods import get_mood_color, get_mood_label
from moodglobe.models import CountryStat, MoodSnapshot


class CenterOut(BaseModel):
    lat: float
    lng: float


class CountryStatOut(BaseModel):
    code: str
    country: str
    center: CenterOut
    total: int
    mood_counts: Dict[str, int]
    percentages: Dict[str, float]
    dominant_mood: Optional[str] = None
    dominant_percent: float = 0.0
    dominant_label: str = ""
    dominant_color: str = ""

    @classmethod
    def from_stat(cls, stat: CountryStat) -> "CountryStatOut":
        mood = stat.dominant_mood or ""
        return cls(
            code=stat.code,
            country=stat.country,
            center=CenterOut(lat=stat.center.lat, lng=stat.center.lng),
            total=stat.total,
            mood_counts=dict(stat.mood_counts),
            percentages=dict(stat.percentages),
            dominant_mood=stat.dominant_mood,
            dominant_percent=stat.dominant_percent,
            dominant_label=get_mood_label(mood),
            dominant_color=get_mood_color(mood),
        )


class SnapshotResponse(BaseModel):
    as_of: str
    source: str                              # "live" | "fallback"
    total_submissions: int
    country_count: int
    global_mood: Optional[str] = None
    rejected_rows: int = 0
    countries: Dict[str, CountryStatOut]

    @classmethod
    def from_snapshot(cls, snapshot: MoodSnapshot) -> "SnapshotResponse":
        return cls(
            as_of=snapshot.generated_at.isoformat(),
            source=snapshot.source,
            total_submissions=snapshot.total_submissions,
            country_count=snapshot.country_count,
            global_mood=snapshot.global_mood,
            rejected_rows=snapshot.rejected_rows,
            countries={
                code: CountryStatOut.from_stat(stat)
                for code, stat in snapshot.countries.items()
            },
        )


class MoodOptionOut(BaseModel):
    emoji: str
    label: str
    color: str


class SubmissionRequest(BaseModel):
    mood: str = Field(..., min_length=1, max_length=32)
    lat: float = Field(default=0.0, ge=-90, le=90)
    lng: float = Field(default=0.0, ge=-180, le=180)
    country_code: Optional[str] = Field(default=None, max_length=3)
    country_name: Optional[str] = Field(default=None, max_length=120)


class SubmissionResponse(BaseModel):
    ok: bool
    message: str
    forwarded: bool
    mood: str
    country_code: Optional[str] = None
    country_name: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    as_of: str
    service: str
    snapshot_age_seconds: Optional[float] = None
    last_error: Optional[str] = None


__all__: List[str] = [
    "CountryStatOut",
    "HealthResponse",
    "MoodOptionOut",
    "SnapshotResponse",
    "SubmissionRequest",
    "SubmissionResponse",
]
