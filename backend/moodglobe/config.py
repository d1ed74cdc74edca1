"""
Application configuration with environment variable support.
"""
from __future__ import annotations

import os
from typing import List


def _get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable with fallback."""
    try:
        return float(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable with fallback."""
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get boolean value from environment variable with fallback."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_env_list(key: str, default: List[str], separator: str = ",") -> List[str]:
    """Get list value from environment variable with fallback."""
    value = os.getenv(key)
    if not value:
        return default
    return [item.strip() for item in value.split(separator) if item.strip()]


# Aggregation window
WINDOW_HOURS: float = _get_env_float("MOOD_WINDOW_HOURS", 24.0)
MAX_RECORDS: int = _get_env_int("MOOD_MAX_RECORDS", 20_000)
REFRESH_SECONDS: float = _get_env_float("MOOD_REFRESH_SECONDS", 120.0)

# Upstream spreadsheet (CSV export) and submission endpoint
SHEET_CSV_URL: str = os.getenv(
    "MOOD_SHEET_CSV_URL",
    "https://docs.google.com/spreadsheets/d/12sGepXa5WvUgieWpAT6d93V2uVTeT6lzlrNQ1tPGyOA"
    "/export?format=csv&gid=0",
)
SUBMIT_URL: str = os.getenv("MOOD_SUBMIT_URL", "")

# Country boundaries (GeoJSON FeatureCollection)
BOUNDARIES_URL: str = os.getenv(
    "MOOD_BOUNDARIES_URL",
    "https://raw.githubusercontent.com/hjnilsson/country-boundaries/master/geojson/countries.geojson",
)
BOUNDARIES_FALLBACK_URL: str = os.getenv(
    "MOOD_BOUNDARIES_FALLBACK_URL",
    "https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson",
)

# Reverse geocoding for submissions without a country
GEOCODER_URL: str = os.getenv(
    "MOOD_GEOCODER_URL", "https://nominatim.openstreetmap.org/reverse"
)

# Behaviour switches
USE_FALLBACK_DATA: bool = _get_env_bool("MOOD_USE_FALLBACK_DATA", True)
REFRESH_ON_STARTUP: bool = _get_env_bool("MOOD_REFRESH_ON_STARTUP", True)

# HTTP Client Configuration
HTTP_TIMEOUT_SECONDS: float = _get_env_float("HTTP_TIMEOUT_SECONDS", 15.0)
USER_AGENT = os.getenv("MOOD_USER_AGENT", "InternetMoodGlobe/1.0")
HTTP_HEADERS = {"User-Agent": USER_AGENT}

# CORS Configuration
CORS_ALLOW_ORIGINS: List[str] = _get_env_list("CORS_ALLOW_ORIGINS", ["*"])

# Logging Configuration
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
