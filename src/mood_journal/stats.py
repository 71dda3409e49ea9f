"""Monthly mood statistics derived from a mood record snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime

from mood_journal.storage.models import (
    MonthKey,
    MonthlyMoodSummary,
    MoodCategory,
    TrendPoint,
)

TREND_WINDOW_MONTHS = 6

MoodCounts = dict[MoodCategory, int]


def _empty_counts() -> MoodCounts:
    return {category: 0 for category in MoodCategory}


def _as_month(value: MonthKey | date | datetime) -> MonthKey:
    if isinstance(value, MonthKey):
        return value
    return MonthKey.of(value)


def monthly_counts(moods: Mapping[str, MoodCategory]) -> dict[MonthKey, MoodCounts]:
    """Count mood categories per calendar month.

    Every month with at least one entry carries all five categories, zero
    filled. Entries whose key is not a valid DateKey are skipped.
    """
    counts: dict[MonthKey, MoodCounts] = {}
    for key, mood in moods.items():
        month = MonthKey.from_date_key(key)
        if month is None:
            continue
        bucket = counts.setdefault(month, _empty_counts())
        bucket[mood] += 1
    return counts


def monthly_average(counts: Mapping[MoodCategory, int]) -> float | None:
    """Weighted mean of ``counts`` or ``None`` when there are no entries."""
    total = sum(counts.values())
    if total == 0:
        return None
    score = sum(category.weight * count for category, count in counts.items())
    return score / total


def counts_for_month(
    moods: Mapping[str, MoodCategory], month: MonthKey | date | datetime
) -> MoodCounts:
    """Counts for a single month, all zero when the month has no entries."""
    return monthly_counts(moods).get(_as_month(month), _empty_counts())


def monthly_summaries(moods: Mapping[str, MoodCategory]) -> list[MonthlyMoodSummary]:
    """Summaries for every month with data, oldest first."""
    return [
        MonthlyMoodSummary(month=month, counts=counts, average=monthly_average(counts))
        for month, counts in sorted(monthly_counts(moods).items())
    ]


def trend_range(end_month: MonthKey | date | datetime) -> tuple[MonthKey, MonthKey]:
    """First and last month of the trend window ending at ``end_month``."""
    end = _as_month(end_month)
    return end.shift(-(TREND_WINDOW_MONTHS - 1)), end


def trend(
    moods: Mapping[str, MoodCategory], end_month: MonthKey | date | datetime
) -> list[TrendPoint]:
    """Monthly averages inside the six month window ending at ``end_month``.

    Months without entries are left out rather than reported as zero, so
    the result may hold fewer than six points.
    """
    start, end = trend_range(end_month)
    return [
        TrendPoint(month=summary.month, average=summary.average)
        for summary in monthly_summaries(moods)
        if summary.average is not None and start <= summary.month <= end
    ]


__all__ = [
    "TREND_WINDOW_MONTHS",
    "monthly_counts",
    "monthly_average",
    "counts_for_month",
    "monthly_summaries",
    "trend_range",
    "trend",
]
