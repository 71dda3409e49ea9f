"""Mood categories, date keys and month keys shared across the journal."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from enum import Enum

DATE_KEY_FORMAT = "%Y-%m-%d"

_WEIGHTS = {
    "Awful": 1,
    "Sad": 2,
    "Neutral": 3,
    "Happy": 4,
    "Delighted": 5,
}

_EMOJIS = {
    "Delighted": "😁",
    "Happy": "😊",
    "Neutral": "😐",
    "Sad": "😞",
    "Awful": "😖",
}


class MoodCategory(Enum):
    """The five daily moods a user can pick, best first."""

    DELIGHTED = "Delighted"
    HAPPY = "Happy"
    NEUTRAL = "Neutral"
    SAD = "Sad"
    AWFUL = "Awful"

    @property
    def weight(self) -> int:
        """Integer weight used for averaging, from 1 (Awful) to 5 (Delighted)."""
        return _WEIGHTS[self.value]

    @property
    def emoji(self) -> str:
        return _EMOJIS[self.value]

    @classmethod
    def parse(cls, name: str | MoodCategory) -> MoodCategory:
        """Resolve a persisted name or member name into a category.

        Args:
            name: ``"Happy"``, ``"happy"``, ``"HAPPY"`` or a member.

        Returns:
            The matching :class:`MoodCategory`.

        Raises:
            ValueError: If the name does not denote any category.

        """
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            wanted = name.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        raise ValueError(f"Unknown mood category: {name!r}")


def date_key(value: date | datetime | str, tz: tzinfo | None = None) -> str:
    """Normalise a date-like value into a ``YYYY-MM-DD`` key.

    Naive datetimes are taken as local wall-clock time. Aware datetimes are
    converted to ``tz`` (the system zone when ``None``) before truncation.

    Raises:
        ValueError: If a string is not an ISO date or datetime.
        TypeError: If the value is not date-like.

    """
    if isinstance(value, str):
        text = value.strip()
        try:
            value = date.fromisoformat(text)
        except ValueError:
            value = datetime.fromisoformat(text)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date().strftime(DATE_KEY_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_KEY_FORMAT)
    raise TypeError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")


def parse_date_key(key: str) -> date | None:
    """Return the date encoded by ``key`` or ``None`` when it is malformed."""
    try:
        return datetime.strptime(key, DATE_KEY_FORMAT).date()
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True, order=True)
class MonthKey:
    """A calendar month identified by year and month number."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be in 1..12, got {self.month}")

    @classmethod
    def of(cls, value: date | datetime) -> MonthKey:
        return cls(value.year, value.month)

    @classmethod
    def from_date_key(cls, key: str) -> MonthKey | None:
        """Month of a DateKey, or ``None`` when the key is malformed."""
        parsed = parse_date_key(key)
        return cls.of(parsed) if parsed else None

    @classmethod
    def parse(cls, text: str) -> MonthKey:
        """Parse ``YYYY-MM`` text.

        Raises:
            ValueError: If the text is not a valid month.

        """
        parsed = datetime.strptime(text.strip(), "%Y-%m")
        return cls(parsed.year, parsed.month)

    def shift(self, months: int) -> MonthKey:
        """Return the month ``months`` away, crossing year boundaries as needed."""
        index = self.year * 12 + (self.month - 1) + months
        return MonthKey(index // 12, index % 12 + 1)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def label(self) -> str:
        """Human readable ``"May 2024"`` style label."""
        return self.first_day.strftime("%B %Y")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(slots=True)
class MonthlyMoodSummary:
    """Mood counts and weighted average observed in one month."""

    month: MonthKey
    counts: dict[MoodCategory, int] = field(default_factory=dict)
    average: float | None = None

    @property
    def total(self) -> int:
        return sum(self.counts.values())


@dataclass(frozen=True, slots=True)
class TrendPoint:
    """Monthly average mood used by the trend chart."""

    month: MonthKey
    average: float
