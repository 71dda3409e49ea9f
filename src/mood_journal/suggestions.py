"""Heuristic nudges based on journaling recency and recent moods."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, tzinfo

from mood_journal.storage.models import MoodCategory, parse_date_key

RECENCY_THRESHOLD_DAYS = 3
RECENT_MOOD_WINDOW = 3

RECENCY_MESSAGE = "It's been {days} days since your last journal. Want to write something?"
LOW_MOOD_MESSAGE = "You've felt a bit low lately. Want to try something uplifting?"
POSITIVE_MOOD_MESSAGE = (
    "You've had great moods recently! Would you like to reflect on what's working?"
)
ALL_GOOD_MESSAGE = "All good! No suggestions for now. Keep tracking 😊"


def _today(now: date | datetime | None, tz: tzinfo | None) -> date:
    if now is None:
        return datetime.now(tz).astimezone(tz).date()
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(tz)
        return now.date()
    return now


def _last_diary_date(diaries: Mapping[str, str]) -> date | None:
    for key in sorted(diaries, reverse=True):
        parsed = parse_date_key(key)
        if parsed is not None:
            return parsed
    return None


def _recent_weights(moods: Mapping[str, MoodCategory]) -> list[int]:
    keys = sorted((key for key in moods if parse_date_key(key)), reverse=True)
    return [moods[key].weight for key in keys[:RECENT_MOOD_WINDOW]]


def generate_suggestions(
    moods: Mapping[str, MoodCategory],
    diaries: Mapping[str, str],
    now: date | datetime | None = None,
    tz: tzinfo | None = None,
) -> list[str]:
    """Build the ordered list of suggestions shown to the user.

    Args:
        moods: Snapshot of the mood record.
        diaries: Snapshot of the diary record.
        now: Reference moment; defaults to the current time in ``tz``.
        tz: Zone deciding the calendar day of aware moments; system zone when
            ``None``.

    Returns:
        Recency nudge first, then the mood trend nudge, or the single
        all-good message when neither applies.

    """
    suggestions: list[str] = []
    today = _today(now, tz)

    last_entry = _last_diary_date(diaries)
    if last_entry is not None:
        days = (today - last_entry).days
        if days >= RECENCY_THRESHOLD_DAYS:
            suggestions.append(RECENCY_MESSAGE.format(days=days))

    weights = _recent_weights(moods)
    if len(weights) == RECENT_MOOD_WINDOW:
        if all(weight <= 2 for weight in weights):
            suggestions.append(LOW_MOOD_MESSAGE)
        elif all(weight >= 4 for weight in weights):
            suggestions.append(POSITIVE_MOOD_MESSAGE)

    if not suggestions:
        suggestions.append(ALL_GOOD_MESSAGE)
    return suggestions


__all__ = [
    "generate_suggestions",
    "RECENCY_MESSAGE",
    "LOW_MOOD_MESSAGE",
    "POSITIVE_MOOD_MESSAGE",
    "ALL_GOOD_MESSAGE",
]
