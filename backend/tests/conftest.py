"""
pytest configuration and shared fixtures for the mood globe tests.

Tests never reach the network: upstream HTTP goes through
httpx.MockTransport and the API is driven through ASGITransport.
"""

import os
from datetime import datetime, timezone

import pytest

# Set env vars BEFORE importing the app so config picks them up correctly
os.environ.setdefault("MOOD_REFRESH_ON_STARTUP", "false")
os.environ.setdefault("MOOD_SUBMIT_URL", "")

from moodglobe.models import BoundaryFeature  # noqa: E402

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
HEADER = "timestamp,mood,lat,lng,country_code,country_name"


@pytest.fixture()
def now():
    return NOW


@pytest.fixture()
def make_csv():
    """
    Build a CSV document from row strings.

    Usage:
        text = make_csv(["2026-10-19T11:00:00Z,😊,1,2,US,United States"])
    """
    def _make(rows, header=HEADER):
        return "\n".join([header, *rows]) + "\n"

    return _make


@pytest.fixture()
def square_feature():
    return BoundaryFeature(
        name="Squareland",
        codes=("SQ", "SQR"),
        rings=(((0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)),),
    )


@pytest.fixture()
def sample_csv(make_csv):
    return make_csv([
        "2026-10-19T11:00:00Z,😊,40.7,-74.0,US,United States",
        "2026-10-19T10:30:00Z,😐,34.0,-118.2,us,",
        "2026-10-19T09:00:00Z,😊,48.8,2.3,FR,France",
        "2026-10-19T08:00:00Z,😡,48.8,2.3,FR,France",
        "2026-10-19T07:00:00Z,😡,45.7,4.8,FR,France",
        "2026-10-17T07:00:00Z,😴,45.7,4.8,FR,France",
        ",😴,,,ZZ,Nowhere",
        "2026-10-19T07:00:00Z,😊,1,1,,Missing Code",
    ])
