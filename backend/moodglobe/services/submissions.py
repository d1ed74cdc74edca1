"""
Forwarding of new mood submissions to the spreadsheet endpoint.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

import httpx

from moodglobe.config import GEOCODER_URL, SUBMIT_URL
from moodglobe.core.encoding import repair_text
from moodglobe.sources.common import build_client
from moodglobe.utils import normalize_text, now_utc

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Logged locally (configure MOOD_SUBMIT_URL for real submission)"


@dataclass(frozen=True)
class LocationData:
    lat: float = 0.0
    lng: float = 0.0
    country_code: Optional[str] = None
    country_name: Optional[str] = None


@dataclass(frozen=True)
class SubmitResult:
    success: bool
    message: str
    forwarded: bool
    mood: str
    country_code: Optional[str] = None
    country_name: Optional[str] = None


def build_submission_params(
    mood: str,
    location: LocationData,
    timestamp: datetime,
) -> Dict[str, str]:
    """
    Query parameters in the column layout of the submissions sheet.

    Args:
        mood: Mood glyph
        location: Coordinates and country of the submitter
        timestamp: Submission time

    Returns:
        Flat string mapping for the GET request
    """
    return {
        "timestamp": timestamp.isoformat(),
        "mood": mood,
        "lat": str(location.lat),
        "lng": str(location.lng),
        "country_code": location.country_code or "",
        "country_name": location.country_name or "",
    }


async def reverse_geocode(
    lat: float,
    lng: float,
    url: str = GEOCODER_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Tuple[Optional[str], Optional[str]]:
    """
    Look up the country at a coordinate through a Nominatim-style endpoint.

    Args:
        lat: Latitude
        lng: Longitude
        url: Reverse geocoding endpoint
        transport: Optional transport override

    Returns:
        (country_code, country_name); both None when the lookup fails
    """
    params = {
        "format": "json",
        "lat": str(lat),
        "lon": str(lng),
        "zoom": "3",
        "addressdetails": "1",
    }
    try:
        async with build_client(transport) as client:
            response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Reverse geocoding failed for %.4f,%.4f: %s", lat, lng, e)
        return None, None

    address = data.get("address") if isinstance(data, dict) else None
    if not isinstance(address, dict):
        return None, None
    code = normalize_text(address.get("country_code")).upper() or None
    name = normalize_text(address.get("country")) or None
    return code, name


async def submit_mood(
    mood: str,
    location: Optional[LocationData] = None,
    submit_url: Optional[str] = None,
    geocoder_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    now: Optional[datetime] = None,
) -> SubmitResult:
    """
    Forward one mood to the submissions endpoint.

    Missing country information is filled in by reverse geocoding when
    coordinates are known. Without a configured endpoint, or when the
    request fails, the submission is only logged.

    Args:
        mood: Mood glyph as sent by the client
        location: Submitter location (defaults to the origin, no country)
        submit_url: Endpoint override (defaults to MOOD_SUBMIT_URL)
        geocoder_url: Reverse geocoder override (defaults to MOOD_GEOCODER_URL)
        transport: Optional transport override for both requests
        now: Submission time (defaults to current UTC time)

    Returns:
        SubmitResult describing what happened
    """
    mood = repair_text(mood).strip()
    location = location or LocationData()
    submit_url = SUBMIT_URL if submit_url is None else submit_url

    code = normalize_text(location.country_code).upper() or None
    name = normalize_text(location.country_name) or None
    if code is None and (location.lat or location.lng):
        code, geocoded_name = await reverse_geocode(
            location.lat, location.lng, url=geocoder_url or GEOCODER_URL, transport=transport
        )
        name = name or geocoded_name

    location = LocationData(lat=location.lat, lng=location.lng, country_code=code, country_name=name)

    if not submit_url:
        logger.info("No submission endpoint configured; mood %s logged locally", mood)
        return SubmitResult(True, FALLBACK_MESSAGE, False, mood, code, name)

    params = build_submission_params(mood, location, now or now_utc())
    try:
        async with build_client(transport) as client:
            response = await client.get(submit_url, params=params)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Error forwarding submission: %s", e)
        return SubmitResult(True, FALLBACK_MESSAGE, False, mood, code, name)

    return SubmitResult(True, "Mood submitted successfully!", True, mood, code, name)
