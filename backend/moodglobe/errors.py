"""
Error types raised inside the mood pipeline.

Neither kind is fatal: row errors drop a single record, source errors make
the caller fall back to synthetic data or keep the previous snapshot.
"""
from __future__ import annotations

from typing import Optional


class MoodGlobeError(Exception):
    """Base class for pipeline errors."""


class RecoverableRowError(MoodGlobeError):
    """One malformed line of the input document."""

    def __init__(self, reason: str, line_number: Optional[int] = None):
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{reason}")


class SourceUnavailable(MoodGlobeError):
    """An upstream document could not be fetched at all."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source} unavailable: {reason}")


__all__ = ["MoodGlobeError", "RecoverableRowError", "SourceUnavailable"]
