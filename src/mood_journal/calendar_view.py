"""Month calendar grid combining mood emojis and diary markers."""

from __future__ import annotations

import calendar
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo

from mood_journal.storage.models import MonthKey, MoodCategory, date_key

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True, slots=True)
class CalendarDay:
    """A single day cell of the month grid."""

    day: int
    date_key: str
    mood: MoodCategory | None
    has_diary: bool
    is_today: bool
    is_past: bool

    @property
    def emoji(self) -> str | None:
        return self.mood.emoji if self.mood else None


@dataclass(slots=True)
class CalendarMonth:
    """Sunday-first month grid."""

    month: MonthKey
    leading_blanks: int
    days: list[CalendarDay] = field(default_factory=list)

    def rows(self) -> list[list[CalendarDay | None]]:
        """Split the grid into weeks of seven cells padded with ``None``."""
        cells: list[CalendarDay | None] = [None] * self.leading_blanks
        cells.extend(self.days)
        cells.extend([None] * (-len(cells) % 7))
        return [cells[index : index + 7] for index in range(0, len(cells), 7)]


def build_calendar(
    moods: Mapping[str, MoodCategory],
    diaries: Mapping[str, str],
    month: MonthKey | date | datetime,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> CalendarMonth:
    """Lay out ``month`` with the mood and diary state of each day.

    Args:
        moods: Snapshot of the mood record.
        diaries: Snapshot of the diary record.
        month: Month to render.
        today: Reference day for the today/past flags; defaults to the current
            day in ``tz``.
        tz: Zone used when ``today`` is omitted; system zone when ``None``.

    Returns:
        The populated :class:`CalendarMonth`.

    """
    if not isinstance(month, MonthKey):
        month = MonthKey.of(month)
    today = today or datetime.now(tz).astimezone(tz).date()
    first = month.first_day
    # Monday is 0 in ``date.weekday``; the grid starts on Sunday.
    leading = (first.weekday() + 1) % 7
    _, length = calendar.monthrange(month.year, month.month)

    days: list[CalendarDay] = []
    for day in range(1, length + 1):
        current = date(month.year, month.month, day)
        key = date_key(current)
        days.append(
            CalendarDay(
                day=day,
                date_key=key,
                mood=moods.get(key),
                has_diary=key in diaries,
                is_today=current == today,
                is_past=current < today,
            )
        )
    return CalendarMonth(month=month, leading_blanks=leading, days=days)


__all__ = ["WEEKDAY_LABELS", "CalendarDay", "CalendarMonth", "build_calendar"]
