"""Mood rating for journal entries.

Placeholder until a mood-analysis service is connected. Callers go through
``rating.get_rating`` so a real scorer with the same signature can be swapped
in without touching them.
"""

import random

from moodlog.journal.models import MAX_RATING, MIN_RATING


def get_rating(entry: str) -> int:
    """Return a rating for ``entry``, uniformly drawn from 0 to 10 inclusive.

    The entry text is not inspected yet.
    """
    return random.randint(MIN_RATING, MAX_RATING)  # nosec B311
