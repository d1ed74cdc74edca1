"""
Repair of emoji that went through a UTF-8 → Latin-1 mis-decode.

Spreadsheet CSV exports regularly hand us "ðŸ˜Š" where the sheet holds "😊":
the four UTF-8 bytes of the glyph were decoded one byte per character using
Windows-1252 (or ISO-8859-1). This module undoes that, best effort:

1. Known corrupted sequences are swapped for their glyph from a fixed table.
2. Otherwise, or if the corruption signature is still present, each
   single-byte character is turned back into its byte and the byte runs are
   decoded as UTF-8. That candidate is kept only if it produced new emoji.

The second step is a heuristic. Text that merely looks like the corruption
can be "repaired" into something else; callers get a string back either way.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

# Glyphs observed in production submissions, mood palette first.
KNOWN_GLYPHS: Tuple[str, ...] = (
    "😊", "😐", "😞", "😡", "😴", "🤯",
    "😀", "🙂", "😂", "😍", "🥰", "😢", "😭", "😬", "😤", "😱", "🥱", "🤔",
    "👍", "❤️",
)

_EMOJI_RE = re.compile("[\U0001F300-\U0001F9FF]")
# Lead bytes F0 9F of every glyph in the emoji planes, as cp1252 or latin-1.
_SUSPICIOUS_RE = re.compile("ð[Ÿ\u009f]")


def _cp1252_char(byte: int) -> str:
    try:
        return bytes([byte]).decode("cp1252")
    except UnicodeDecodeError:
        # 0x81, 0x8D, 0x8F, 0x90, 0x9D: browsers keep them as C1 controls
        return chr(byte)


def _build_reverse_map() -> Dict[str, int]:
    reverse = {chr(byte): byte for byte in range(256)}
    for byte in range(0x80, 0xA0):
        reverse.setdefault(_cp1252_char(byte), byte)
    return reverse


_CHAR_TO_BYTE = _build_reverse_map()


def mis_decode(glyph: str, codec: str = "cp1252") -> str:
    """
    Reproduce the corruption for ``glyph``.

    Args:
        glyph: Correct text
        codec: "cp1252" or "latin-1", the encoding the bytes were misread as

    Returns:
        The garbled text the spreadsheet export would contain
    """
    raw = glyph.encode("utf-8")
    if codec == "latin-1":
        return "".join(chr(byte) for byte in raw)
    return "".join(_cp1252_char(byte) for byte in raw)


def _build_table(glyphs: Tuple[str, ...]) -> List[Tuple[str, str]]:
    table: Dict[str, str] = {}
    for glyph in glyphs:
        for codec in ("cp1252", "latin-1"):
            corrupted = mis_decode(glyph, codec)
            if corrupted != glyph:
                table.setdefault(corrupted, glyph)
    # Longest first so a short key never eats part of a longer sequence
    return sorted(table.items(), key=lambda item: len(item[0]), reverse=True)


REPAIR_TABLE: List[Tuple[str, str]] = _build_table(KNOWN_GLYPHS)


def _substitute_known(text: str) -> Tuple[str, bool]:
    matched = False
    for corrupted, glyph in REPAIR_TABLE:
        if corrupted in text:
            text = text.replace(corrupted, glyph)
            matched = True
    return text, matched


def _reinterpret_bytes(text: str) -> str:
    pieces: List[str] = []
    run = bytearray()
    for char in text:
        byte = _CHAR_TO_BYTE.get(char)
        if byte is None:
            # Not single-byte representable, so it was never corrupted
            if run:
                pieces.append(run.decode("utf-8", errors="replace"))
                run = bytearray()
            pieces.append(char)
        else:
            run.append(byte)
    if run:
        pieces.append(run.decode("utf-8", errors="replace"))
    return "".join(pieces)


def _count_emoji(text: str) -> int:
    return len(_EMOJI_RE.findall(text))


def _repair_once(text: str) -> str:
    substituted, matched = _substitute_known(text)
    if matched and not _SUSPICIOUS_RE.search(substituted):
        return substituted

    candidate = _reinterpret_bytes(substituted)
    if candidate != substituted and _count_emoji(candidate) > _count_emoji(substituted):
        return candidate
    return substituted


def repair_text(text: str) -> str:
    """
    Undo UTF-8-as-Latin-1 corruption in a short glyph string.

    Never raises. Already-correct text comes back unchanged, and the result
    is a fixpoint: ``repair_text(repair_text(x)) == repair_text(x)``.

    Args:
        text: Possibly corrupted text

    Returns:
        Best-effort repaired text
    """
    if not text:
        return text

    current = text
    # Every accepted change shortens the string, so this terminates
    while True:
        repaired = _repair_once(current)
        if repaired == current:
            break
        current = repaired

    if _SUSPICIOUS_RE.search(current):
        logger.debug("Could not fully repair %r", text)
    return current or text


def decode_payload(raw: bytes | str) -> str:
    """
    Turn a fetched document into text.

    Args:
        raw: Response body as bytes, or text that was already decoded

    Returns:
        Decoded text (UTF-8 with optional BOM, else Windows-1252)
    """
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("Payload is not valid UTF-8, decoding as Windows-1252")
        return raw.decode("cp1252", errors="replace")


__all__ = ["KNOWN_GLYPHS", "REPAIR_TABLE", "decode_payload", "mis_decode", "repair_text"]
