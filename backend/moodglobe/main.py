"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from moodglobe.config import (
    CORS_ALLOW_ORIGINS,
    LOG_FORMAT,
    LOG_LEVEL,
    REFRESH_ON_STARTUP,
    REFRESH_SECONDS,
)
from moodglobe.core.moods import MOODS
from moodglobe.models import MoodSnapshot
from moodglobe.schemas import (
    CountryStatOut,
    HealthResponse,
    MoodOptionOut,
    SnapshotResponse,
    SubmissionRequest,
    SubmissionResponse,
)
from moodglobe.services.snapshots import SnapshotStore, get_store, snapshot_store
from moodglobe.services.submissions import LocationData, submit_mood
from moodglobe.utils import now_utc

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger("uvicorn")


async def current_snapshot(store: SnapshotStore) -> MoodSnapshot:
    """
    Latest snapshot, running a pass on demand if none has been published yet.

    Raises:
        HTTPException: 503 if no snapshot could be produced
    """
    snapshot = store.snapshot
    if snapshot is None:
        snapshot = await store.refresh()
    if snapshot is None:
        raise HTTPException(status_code=503, detail=store.last_error or "No mood data available yet")
    return snapshot


# Initialize FastAPI app
app = FastAPI(
    title="Internet Mood Globe API",
    version="0.1.0",
    description="Per-country mood summaries built from crowd-submitted emoji",
)


@app.on_event("startup")
async def start_refresh_loop():
    """Start the periodic snapshot refresh in the background."""
    if not REFRESH_ON_STARTUP:
        logger.info("Snapshot refresh loop disabled")
        return
    app.state.refresh_task = asyncio.create_task(snapshot_store.run_forever(REFRESH_SECONDS))
    logger.info("Snapshot refresh loop started (every %.0fs)", REFRESH_SECONDS)


@app.on_event("shutdown")
async def stop_refresh_loop():
    task = getattr(app.state, "refresh_task", None)
    if task is not None:
        task.cancel()


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health_check(store: SnapshotStore = Depends(get_store)):
    """Health check endpoint."""
    now = now_utc()
    age = None
    if store.last_refresh is not None:
        age = round((now - store.last_refresh).total_seconds(), 1)
    return HealthResponse(
        status="ok",
        as_of=now.isoformat(),
        service="mood-globe-api",
        snapshot_age_seconds=age,
        last_error=store.last_error,
    )


@app.get("/moods", response_model=SnapshotResponse)
async def get_mood_snapshot(store: SnapshotStore = Depends(get_store)):
    """Per-country mood summary for the current window."""
    snapshot = await current_snapshot(store)
    return SnapshotResponse.from_snapshot(snapshot)


@app.get("/moods/palette", response_model=List[MoodOptionOut])
async def get_mood_palette():
    """Moods offered to submitters, with display label and colour."""
    return [MoodOptionOut(emoji=m.emoji, label=m.label, color=m.color) for m in MOODS]


@app.get("/moods/countries/{code}", response_model=CountryStatOut)
async def get_country_moods(code: str, store: SnapshotStore = Depends(get_store)):
    """Mood summary of a single country."""
    snapshot = await current_snapshot(store)
    stat = snapshot.countries.get(code.strip().upper())
    if stat is None:
        raise HTTPException(status_code=404, detail=f"No submissions for {code.upper()}")
    return CountryStatOut.from_stat(stat)


@app.post("/moods", response_model=SubmissionResponse, status_code=201)
async def post_mood(payload: SubmissionRequest):
    """Forward a new mood submission upstream."""
    if not payload.mood.strip():
        raise HTTPException(status_code=422, detail="Mood is empty")

    location = LocationData(
        lat=payload.lat,
        lng=payload.lng,
        country_code=payload.country_code,
        country_name=payload.country_name,
    )
    try:
        result = await submit_mood(payload.mood, location)
    except Exception as e:
        logger.error(f"Error submitting mood: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    return SubmissionResponse(
        ok=result.success,
        message=result.message,
        forwarded=result.forwarded,
        mood=result.mood,
        country_code=result.country_code,
        country_name=result.country_name,
    )


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("moodglobe.main:app", host="0.0.0.0", port=8000, reload=True)
