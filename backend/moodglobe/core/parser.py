"""
Delimited-text parsing of the mood spreadsheet export.

Each line is parsed independently: a bad line is reported in
``ParseResult.errors`` and never stops the rest of the document.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Optional, Sequence

from moodglobe.core.encoding import repair_text
from moodglobe.errors import RecoverableRowError
from moodglobe.models import Submission
from moodglobe.sources.common import clean_text, parse_utc_datetime
from moodglobe.utils import parse_float

logger = logging.getLogger(__name__)

BOM = "\ufeff"
QUOTE = '"'

TIMESTAMP = "timestamp"
MOOD = "mood"
LAT = "lat"
LNG = "lng"
COUNTRY_CODE = "country_code"
COUNTRY_NAME = "country_name"
KNOWN_FIELDS = frozenset({TIMESTAMP, MOOD, LAT, LNG, COUNTRY_CODE, COUNTRY_NAME})


@dataclass
class ParseResult:
    """Outcome of parsing one document."""

    submissions: List[Submission] = field(default_factory=list)
    errors: List[RecoverableRowError] = field(default_factory=list)
    header: List[str] = field(default_factory=list)

    @property
    def rejected(self) -> int:
        return len(self.errors)


def parse_line(line: str, delimiter: str = ",") -> List[str]:
    """
    Split one line into raw field values.

    Double quotes wrap fields that may contain the delimiter; inside a quoted
    field two consecutive quotes stand for one literal quote.

    Args:
        line: A single line without its newline
        delimiter: Field separator

    Returns:
        List of field strings (untrimmed)
    """
    values: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    values.append("".join(current))
    return values


def parse_header(line: str, delimiter: str = ",") -> List[str]:
    """Lower-cased, trimmed field names; a leading BOM is dropped."""
    if line.startswith(BOM):
        line = line[len(BOM):]
    return [token.strip().lower() for token in parse_line(line, delimiter)]


def parse_row(
    header: Sequence[str],
    values: Sequence[str],
    line_number: Optional[int] = None,
) -> Submission:
    """
    Build a Submission from one row of values.

    Args:
        header: Field names from ``parse_header``
        values: Raw values from ``parse_line``
        line_number: 1-based position in the document, for error reports

    Returns:
        Parsed Submission

    Raises:
        RecoverableRowError: if the row has no country code or no mood
    """
    cells: Dict[str, str] = {}
    extra: Dict[str, str] = {}

    for idx, name in enumerate(header):
        if not name:
            continue
        value = clean_text(values[idx]) if idx < len(values) else ""
        if name in KNOWN_FIELDS:
            # Repeated columns: the first non-empty value wins
            if not cells.get(name):
                cells[name] = value
        else:
            extra.setdefault(name, value)

    country_code = cells.get(COUNTRY_CODE, "").strip().upper()
    if not country_code:
        raise RecoverableRowError("missing country_code", line_number)

    mood = repair_text(cells.get(MOOD, "")).strip()
    if not mood:
        raise RecoverableRowError("missing mood", line_number)

    return Submission(
        country_code=country_code,
        mood=mood,
        timestamp=parse_utc_datetime(cells.get(TIMESTAMP)),
        lat=parse_float(cells.get(LAT)),
        lng=parse_float(cells.get(LNG)),
        country_name=cells.get(COUNTRY_NAME) or None,
        extra=MappingProxyType(extra),
        line_number=line_number,
    )


def parse_document(text: str, delimiter: str = ",") -> ParseResult:
    """
    Parse a whole document: header line first, one record per following line.

    Args:
        text: Decoded document text
        delimiter: Field separator

    Returns:
        ParseResult with the accepted submissions and the per-line errors
    """
    result = ParseResult()
    if not text:
        return result

    lines = text.lstrip(BOM).strip().split("\n")
    if len(lines) < 2:
        return result

    result.header = parse_header(lines[0].strip(), delimiter)
    if COUNTRY_CODE not in result.header:
        logger.warning("Header has no %s column; every row will be dropped", COUNTRY_CODE)

    for line_number, line in enumerate(lines[1:], start=2):
        line = line.strip()
        if not line:
            continue
        try:
            values = parse_line(line, delimiter)
            result.submissions.append(parse_row(result.header, values, line_number))
        except RecoverableRowError as e:
            logger.debug("Dropping row: %s", e)
            result.errors.append(e)
        except Exception as e:
            # Any other failure is still confined to its own line
            logger.debug("Dropping row %d: %s: %s", line_number, type(e).__name__, e)
            result.errors.append(RecoverableRowError(f"{type(e).__name__}: {e}", line_number))

    return result


__all__ = [
    "KNOWN_FIELDS",
    "ParseResult",
    "parse_document",
    "parse_header",
    "parse_line",
    "parse_row",
]
