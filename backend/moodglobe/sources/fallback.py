"""
Synthetic dataset used when the submissions sheet cannot be fetched.
"""
from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from moodglobe.core.countries import COUNTRY_CENTERS, COUNTRY_NAMES
from moodglobe.core.moods import default_mood_glyphs
from moodglobe.models import Submission
from moodglobe.utils import now_utc

# Signature of a pluggable fallback producer
FallbackProducer = Callable[[datetime], List[Submission]]

MIN_PER_COUNTRY = 100
MAX_PER_COUNTRY = 599
JITTER_DEGREES = 5.0


def generate_fallback_submissions(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[Submission]:
    """
    Random submissions for a handful of countries over the last 24 hours.

    Args:
        now: Reference time (defaults to current UTC time)
        rng: Random source, pass a seeded one for reproducible output

    Returns:
        List of Submission objects
    """
    now = now or now_utc()
    rng = rng or random.Random()
    moods = default_mood_glyphs()

    submissions: List[Submission] = []
    for code, name in COUNTRY_NAMES.items():
        center = COUNTRY_CENTERS[code]
        for _ in range(rng.randint(MIN_PER_COUNTRY, MAX_PER_COUNTRY)):
            submissions.append(
                Submission(
                    country_code=code,
                    country_name=name,
                    mood=rng.choice(moods),
                    timestamp=now - timedelta(seconds=rng.uniform(0, 24 * 3600)),
                    lat=center.lat + rng.uniform(-JITTER_DEGREES, JITTER_DEGREES),
                    lng=center.lng + rng.uniform(-JITTER_DEGREES, JITTER_DEGREES),
                )
            )
    return submissions
