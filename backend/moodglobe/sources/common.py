"""
Common utilities for upstream fetchers and the row parser.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

import httpx
from dateutil import parser as dateparser

from moodglobe.config import HTTP_HEADERS, HTTP_TIMEOUT_SECONDS
from moodglobe.utils import ensure_utc


def parse_utc_datetime(date_string: Optional[str]) -> Optional[datetime]:
    """
    Parse a date string and convert to UTC datetime.

    Args:
        date_string: Date string in various formats, or None

    Returns:
        UTC datetime object, or None if the input is empty, unparseable
        or not representable in UTC
    """
    if not date_string or not date_string.strip():
        return None

    try:
        parsed_date = dateparser.parse(date_string.strip())
        # Offsets near year 1 or 9999 can push the UTC value out of range
        return ensure_utc(parsed_date)
    except (ValueError, OverflowError):
        return None


def clean_text(text: Optional[str]) -> str:
    """
    Clean and normalize text content.

    Args:
        text: Raw text string or None

    Returns:
        Cleaned text string, empty string if input is None
    """
    if not text:
        return ""
    return text.strip()


def build_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """
    Create the HTTP client shared by all fetchers.

    Args:
        transport: Optional transport override (tests pass httpx.MockTransport)

    Returns:
        Configured httpx.AsyncClient; use it as an async context manager
    """
    return httpx.AsyncClient(
        headers=HTTP_HEADERS,
        timeout=HTTP_TIMEOUT_SECONDS,
        follow_redirects=True,
        transport=transport,
    )
