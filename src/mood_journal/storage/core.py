"""Mood and diary store keyed by calendar date and persisted through the vault."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from types import MappingProxyType
from typing import Any

from .models import MoodCategory, date_key, parse_date_key
from .vault import Vault

logger = logging.getLogger(__name__)

MOOD_LOGS_KEY = "moodLogs"
DIARY_LOGS_KEY = "diaryLogs"

DateLike = date | datetime | str


@dataclass(slots=True)
class MoodStore:
    """Owns the date-keyed mood and diary records of a single user.

    Both records are loaded by :meth:`initialize` and rewritten in full to
    the vault at the end of every mutating call. The in-memory records stay
    authoritative when a write fails; the failure is then raised to the
    caller as :class:`~mood_journal.storage.vault.PersistenceError`.
    """

    vault: Vault
    tz: tzinfo | None = None
    _moods: dict[str, MoodCategory] = field(init=False, default_factory=dict)
    _diaries: dict[str, str] = field(init=False, default_factory=dict)

    def initialize(self) -> None:
        """Load both records from the vault, substituting empty ones on failure."""
        self._moods = self._load_moods(self.vault.read(MOOD_LOGS_KEY))
        self._diaries = self._load_diaries(self.vault.read(DIARY_LOGS_KEY))
        logger.debug(
            "Loaded %d mood and %d diary entries", len(self._moods), len(self._diaries)
        )

    # Mood operations --------------------------------------------------
    def set_mood(self, when: DateLike, category: MoodCategory | str) -> str:
        """Record the mood for a day, replacing any earlier pick.

        Args:
            when: Any moment of the day the mood belongs to.
            category: Mood category or its name.

        Returns:
            The DateKey the mood was stored under.

        Raises:
            ValueError: If ``category`` is not a known mood.
            PersistenceError: If the vault write fails.

        """
        mood = MoodCategory.parse(category)
        key = date_key(when, self.tz)
        self._moods[key] = mood
        self._persist_moods()
        return key

    def get_mood(self, when: DateLike) -> MoodCategory | None:
        key = self._lookup_key(when)
        return self._moods.get(key) if key else None

    # Diary operations -------------------------------------------------
    def set_diary(self, when: DateLike, text: str) -> str:
        """Store the diary text for a day, replacing any earlier entry.

        Args:
            when: Any moment of the day the entry belongs to.
            text: Entry text; blank text is stored as given.

        Returns:
            The DateKey the entry was stored under.

        Raises:
            PersistenceError: If the vault write fails.

        """
        key = date_key(when, self.tz)
        self._diaries[key] = text
        self._persist_diaries()
        return key

    def get_diary(self, when: DateLike) -> str | None:
        key = self._lookup_key(when)
        return self._diaries.get(key) if key else None

    def clear_all(self) -> None:
        """Forget every mood and diary entry and drop both vault keys."""
        self._moods = {}
        self._diaries = {}
        self.vault.delete(MOOD_LOGS_KEY)
        self.vault.delete(DIARY_LOGS_KEY)
        logger.info("Cleared all journal data")

    # Clock ------------------------------------------------------------
    def now(self) -> datetime:
        """Current moment as an aware datetime in the store's zone."""
        return datetime.now(self.tz).astimezone(self.tz)

    def today(self) -> date:
        """Current calendar day in the store's zone."""
        return self.now().date()

    # Snapshots --------------------------------------------------------
    @property
    def mood_logs(self) -> Mapping[str, MoodCategory]:
        """Read-only copy of the mood record."""
        return MappingProxyType(dict(self._moods))

    @property
    def diary_logs(self) -> Mapping[str, str]:
        """Read-only copy of the diary record."""
        return MappingProxyType(dict(self._diaries))

    # Internal ---------------------------------------------------------
    def _lookup_key(self, when: Any) -> str | None:
        try:
            return date_key(when, self.tz)
        except (TypeError, ValueError):
            logger.debug("Unusable lookup date %r", when)
            return None

    def _persist_moods(self) -> None:
        payload = {key: mood.value for key, mood in self._moods.items()}
        self.vault.save(MOOD_LOGS_KEY, payload)

    def _persist_diaries(self) -> None:
        self.vault.save(DIARY_LOGS_KEY, dict(self._diaries))

    @staticmethod
    def _load_moods(raw: Any) -> dict[str, MoodCategory]:
        """Decode a persisted mood record, dropping malformed entries.

        Args:
            raw: Value read from the vault, possibly ``None`` or corrupt.

        Returns:
            Mapping of DateKey to :class:`MoodCategory`.

        """
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("Ignoring mood record of type %s", type(raw).__name__)
            return {}
        moods: dict[str, MoodCategory] = {}
        for key, name in raw.items():
            if parse_date_key(key) is None:
                logger.warning("Dropping mood entry with malformed date %r", key)
                continue
            try:
                moods[key] = MoodCategory.parse(name)
            except ValueError:
                logger.warning("Dropping unknown mood %r for %s", name, key)
        return moods

    @staticmethod
    def _load_diaries(raw: Any) -> dict[str, str]:
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("Ignoring diary record of type %s", type(raw).__name__)
            return {}
        diaries: dict[str, str] = {}
        for key, text in raw.items():
            if parse_date_key(key) is None or not isinstance(text, str):
                logger.warning("Dropping malformed diary entry for %r", key)
                continue
            diaries[key] = text
        return diaries


__all__ = ["MoodStore", "MOOD_LOGS_KEY", "DIARY_LOGS_KEY"]
