"""
Per-country aggregation of mood submissions.

Every pass is a fresh fold over the current submission set; nothing is
carried over between passes.

Ordering contract: countries and moods are kept in first-seen order (Python
dicts preserve insertion order). Dominant-mood ties are broken by that order,
so the mood that appeared first wins.

Percentages are rounded half-up to one decimal (see ``round_percent``). Each
rounding is off by at most 0.05, so a country's percentages sum to within
``0.05 * distinct moods`` of 100. With the six palette moods that stays inside
[99.7, 100.3]; a country with dozens of distinct one-off moods can drift past
101.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from moodglobe.core.centroids import CentroidResolver
from moodglobe.models import Center, CountryStat, Submission
from moodglobe.utils import round_percent


@dataclass
class _CountryTally:
    # Scratch state for a single pass; discarded once the stat is built.
    center: Center
    name: Optional[str] = None
    total: int = 0
    counts: Dict[str, int] = field(default_factory=dict)


def dominant_entry(counts: Mapping[str, int]) -> Optional[Tuple[str, int]]:
    """
    Entry with the strictly largest count; the earliest entry wins ties.

    Args:
        counts: Mood → count, in first-seen order

    Returns:
        (mood, count) or None if ``counts`` is empty
    """
    best: Optional[Tuple[str, int]] = None
    for mood, count in counts.items():
        if best is None or count > best[1]:
            best = (mood, count)
    return best


def _finalize(code: str, tally: _CountryTally) -> CountryStat:
    percentages = {
        mood: round_percent(count, tally.total) for mood, count in tally.counts.items()
    }
    dominant = dominant_entry(tally.counts)
    dominant_mood = dominant[0] if dominant else None

    return CountryStat(
        code=code,
        country=tally.name or code,
        center=tally.center,
        total=tally.total,
        mood_counts=MappingProxyType(dict(tally.counts)),
        percentages=MappingProxyType(percentages),
        dominant_mood=dominant_mood,
        dominant_percent=percentages.get(dominant_mood, 0.0) if dominant_mood else 0.0,
    )


def aggregate_by_country(
    submissions: Iterable[Submission],
    resolver: Optional[CentroidResolver] = None,
) -> Dict[str, CountryStat]:
    """
    Fold submissions into one CountryStat per country code.

    Args:
        submissions: Filtered submissions
        resolver: Center source for this pass; a table-only resolver if omitted

    Returns:
        Mapping country code → CountryStat, in order of first appearance
    """
    if resolver is None:
        resolver = CentroidResolver()

    tallies: Dict[str, _CountryTally] = {}

    for submission in submissions:
        code = (submission.country_code or "").strip().upper()
        if not code:
            continue

        tally = tallies.get(code)
        if tally is None:
            tally = _CountryTally(center=resolver.resolve(code, submission))
            tallies[code] = tally

        if not tally.name and submission.country_name:
            tally.name = submission.country_name

        tally.total += 1
        tally.counts[submission.mood] = tally.counts.get(submission.mood, 0) + 1

    return {
        code: _finalize(code, tally)
        for code, tally in tallies.items()
        if tally.total > 0
    }


def summarize_moods(submissions: Iterable[Submission]) -> Tuple[int, Optional[str]]:
    """
    Overall record count and the most common mood across all records.

    Args:
        submissions: Filtered submissions

    Returns:
        (total, global mood); the mood is None when there are no records
    """
    counts: Dict[str, int] = {}
    total = 0
    for submission in submissions:
        total += 1
        counts[submission.mood] = counts.get(submission.mood, 0) + 1

    dominant = dominant_entry(counts)
    return total, dominant[0] if dominant else None


__all__ = ["aggregate_by_country", "dominant_entry", "summarize_moods"]
