"""
Monthly statistics for the dashboard.

Each statistic is a pure function of the entries it is given; the caller
decides which month the entries belong to. Input order never matters.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from .models import (
    MonthComparison,
    MonthlyStatistics,
    MoodCount,
    MoodEntry,
    MoodShare,
    Trend,
)
from .moods import DEFAULT_POSITIVE_MOODS, MOOD_COUNT


def mood_frequencies(entries: Iterable[MoodEntry]) -> dict[int, int]:
    """Count entries per mood index, skipping entries without a mood."""
    counts = Counter(
        entry.mood_index for entry in entries if entry.mood_index is not None
    )
    return dict(sorted(counts.items()))


def compare_months(current_count: int, previous_count: int) -> MonthComparison | None:
    """
    Percentage change in entry count from the previous month.

    Returns:
        None when the previous month has no entries to compare against
    """
    if previous_count == 0:
        return None

    change = current_count - previous_count
    percentage = (Decimal(change) * 100 / Decimal(previous_count)).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    if change > 0:
        trend = Trend.UP
    elif change < 0:
        trend = Trend.DOWN
    else:
        trend = Trend.NEUTRAL
    return MonthComparison(percentage=int(percentage), trend=trend)


def positive_streak(
    entries: Iterable[MoodEntry], positive_moods: Iterable[int] = DEFAULT_POSITIVE_MOODS
) -> int:
    """Longest run of consecutive calendar days with a positive mood."""
    positive = set(positive_moods)
    days = sorted({entry.day for entry in entries if entry.mood_index in positive})
    if not days:
        return 0

    longest = run = 1
    for previous, current in zip(days, days[1:]):
        if current - previous == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def most_common_mood(
    frequencies: dict[int, int], mood_count: int = MOOD_COUNT
) -> MoodCount | None:
    """The most frequent mood; ties go to the lowest mood index."""
    best: MoodCount | None = None
    for index in range(mood_count):
        count = frequencies.get(index, 0)
        if count > 0 and (best is None or count > best.count):
            best = MoodCount(mood_index=index, count=count)
    return best


def mood_distribution(
    entries: Sequence[MoodEntry], mood_count: int = MOOD_COUNT
) -> list[MoodShare]:
    """Count and share of all month entries for every mood in catalogue order."""
    frequencies = mood_frequencies(entries)
    total = len(entries)
    return [
        MoodShare(
            mood_index=index,
            count=frequencies.get(index, 0),
            share=frequencies.get(index, 0) / total if total else 0.0,
        )
        for index in range(mood_count)
    ]


class StatisticsEngine:
    """Computes the statistics dashboard for a month of entries."""

    def __init__(
        self,
        positive_moods: Iterable[int] = DEFAULT_POSITIVE_MOODS,
        mood_count: int = MOOD_COUNT,
    ) -> None:
        self.positive_moods = frozenset(positive_moods)
        self.mood_count = mood_count

    def compute(
        self, current: Sequence[MoodEntry], previous: Sequence[MoodEntry]
    ) -> MonthlyStatistics:
        """
        Compute all statistics for a month.

        Args:
            current: Entries of the month being shown
            previous: Entries of the month before it

        Returns:
            The statistics; an empty month yields the "no data" values
        """
        frequencies = mood_frequencies(current)
        return MonthlyStatistics(
            entry_count=len(current),
            previous_entry_count=len(previous),
            frequencies=frequencies,
            distribution=mood_distribution(current, self.mood_count),
            comparison=compare_months(len(current), len(previous)),
            positive_streak=positive_streak(current, self.positive_moods),
            most_common=most_common_mood(frequencies, self.mood_count),
        )
