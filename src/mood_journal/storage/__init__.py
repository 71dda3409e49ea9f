"""Storage layer exports."""

from __future__ import annotations

from .adapters import DatabaseAdapter, PostgresAdapter, SQLiteAdapter
from .core import DIARY_LOGS_KEY, MOOD_LOGS_KEY, MoodStore
from .models import (
    MonthKey,
    MonthlyMoodSummary,
    MoodCategory,
    TrendPoint,
    date_key,
    parse_date_key,
)
from .vault import PersistenceError, Vault

__all__ = [
    "DatabaseAdapter",
    "SQLiteAdapter",
    "PostgresAdapter",
    "Vault",
    "PersistenceError",
    "MoodStore",
    "MOOD_LOGS_KEY",
    "DIARY_LOGS_KEY",
    "MoodCategory",
    "MonthKey",
    "MonthlyMoodSummary",
    "TrendPoint",
    "date_key",
    "parse_date_key",
]
