"""
Mood palette used for display metadata.

Aggregation treats moods as opaque text; this table only attaches a label
and colour to the glyphs the submission UI offers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class MoodOption:
    emoji: str
    label: str
    color: str


MOODS: Tuple[MoodOption, ...] = (
    MoodOption("😊", "Happy", "#22c55e"),
    MoodOption("😐", "Neutral", "#eab308"),
    MoodOption("😞", "Sad", "#3b82f6"),
    MoodOption("😡", "Angry", "#ef4444"),
    MoodOption("😴", "Tired", "#8b5cf6"),
    MoodOption("🤯", "Overwhelmed", "#ec4899"),
)

UNKNOWN_LABEL = "Unknown"
UNKNOWN_COLOR = "#666"

_BY_EMOJI: Dict[str, MoodOption] = {mood.emoji: mood for mood in MOODS}


def get_mood_label(emoji: str) -> str:
    mood = _BY_EMOJI.get(emoji)
    return mood.label if mood else UNKNOWN_LABEL


def get_mood_color(emoji: str) -> str:
    mood = _BY_EMOJI.get(emoji)
    return mood.color if mood else UNKNOWN_COLOR


def default_mood_glyphs() -> Tuple[str, ...]:
    return tuple(mood.emoji for mood in MOODS)
