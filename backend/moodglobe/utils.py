"""
Shared utility functions for the mood globe application.
"""
from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

ONE_DECIMAL = Decimal("0.1")


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes and convert aware ones to UTC.

    Args:
        value: Datetime, naive or aware

    Returns:
        UTC-aware datetime
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_text(text: str | None) -> str:
    """
    Normalize whitespace in text content.

    Args:
        text: Input text string (can be None)

    Returns:
        Normalized text with single spaces and trimmed edges
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def parse_float(value: str | None) -> Optional[float]:
    """
    Parse a finite float, returning None for blanks, garbage, NaN and infinities.

    Args:
        value: Raw cell text

    Returns:
        Parsed float or None
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def round_percent(count: int, total: int) -> float:
    """
    Share of ``count`` in ``total`` as a percentage with one decimal.

    Exact halves round up (12.25 -> 12.3), not to the even digit. The share
    is computed from the integers, so float noise cannot flip a tie.

    Args:
        count: Records with a given mood
        total: All records of the country

    Returns:
        Percentage rounded half-up to one decimal place
    """
    if total <= 0:
        return 0.0
    share = Decimal(count * 100) / Decimal(total)
    return float(share.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))
