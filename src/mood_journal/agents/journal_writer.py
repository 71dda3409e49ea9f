"""Agent that writes mood picks and diary entries into the store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from mood_journal.event_bus import Event, EventBus
from mood_journal.storage import MoodCategory, MoodStore, PersistenceError, date_key

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JournalWriter:
    """Persists mood and diary saves and announces the stored DateKey."""

    bus: EventBus
    store: MoodStore

    def __post_init__(self) -> None:
        """Subscribe to mood and diary save requests."""
        self.bus.subscribe("mood.save", self.handle_mood)
        self.bus.subscribe("diary.save", self.handle_diary)

    async def handle_mood(self, event: Event) -> None:
        """Validate the mood payload and store it for its day.

        Args:
            event: Event with ``mood`` and an optional ``date``.

        """
        payload = event.payload
        try:
            mood = MoodCategory.parse(payload.get("mood"))
        except ValueError:
            logger.debug("Invalid mood in payload %s", payload)
            return
        when = self._resolve_date(payload)
        if when is None:
            return
        try:
            key = self.store.set_mood(when, mood)
        except PersistenceError as exc:
            await self._report_failure("mood", exc)
            return
        await self.bus.publish("mood.saved", {"date": key, "mood": mood.value})

    async def handle_diary(self, event: Event) -> None:
        """Store diary text for its day.

        Args:
            event: Event with ``text`` and an optional ``date``.

        """
        payload = event.payload
        text = payload.get("text")
        if not isinstance(text, str):
            logger.debug("Diary payload without text: %s", payload)
            return
        when = self._resolve_date(payload)
        if when is None:
            return
        try:
            key = self.store.set_diary(when, text)
        except PersistenceError as exc:
            await self._report_failure("diary", exc)
            return
        await self.bus.publish("diary.saved", {"date": key, "length": len(text)})

    def _resolve_date(self, payload: dict[str, Any]) -> str | None:
        """DateKey for the payload's ``date``, today when absent, ``None`` if invalid."""
        when = payload.get("date")
        if when is None:
            when = self.store.now()
        try:
            return date_key(when, self.store.tz)
        except (TypeError, ValueError):
            logger.debug("Unusable date %r", when)
            return None

    async def _report_failure(self, kind: str, exc: PersistenceError) -> None:
        logger.error("Could not persist %s entry: %s", kind, exc)
        await self.bus.publish("journal.error", {"kind": kind, "error": str(exc)})
