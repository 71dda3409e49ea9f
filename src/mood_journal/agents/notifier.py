"""Notifier agent turns journal events into user-facing messages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from mood_journal.event_bus import Event, EventBus
from mood_journal.storage import MoodCategory, MoodStore
from mood_journal.suggestions import generate_suggestions

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Notifier:
    """Builds ``journal.response`` messages from domain events."""

    bus: EventBus
    store: MoodStore

    def __post_init__(self) -> None:
        """Subscribe to events that require user-facing notifications."""
        self.bus.subscribe(
            (
                "mood.saved",
                "diary.saved",
                "delete.done",
                "journal.error",
                "suggestions.request",
            ),
            self.handle,
        )

    async def handle(self, event: Event) -> None:
        """Compose a response for ``event`` and publish it.

        Args:
            event: Event whose outcome should be reported to the user.

        """
        text = self._build_message(event.name, event.payload)
        if text is None:
            logger.debug("Nothing to report for %s", event.name)
            return
        await self.bus.publish(
            "journal.response",
            {
                "event": event.name,
                "text": text,
                "created_at": self.store.now().isoformat(),
            },
        )

    def _build_message(self, event_name: str, payload: dict[str, Any]) -> str | None:
        """Derive message text for a journal event.

        Args:
            event_name: Name of the domain event being processed.
            payload: Event payload with contextual data.

        Returns:
            Message text, or ``None`` when the event needs no reply.

        """
        if event_name == "mood.saved":
            mood = MoodCategory.parse(payload["mood"])
            return f"Mood Saved! {mood.emoji} {mood.value} on {payload['date']}"
        if event_name == "diary.saved":
            return f"✅ Entry Saved! ({payload['date']})"
        if event_name == "delete.done":
            return "All journal data has been deleted."
        if event_name == "journal.error":
            return "⚠️ Your changes may not survive a restart: " + payload.get("error", "")
        if event_name == "suggestions.request":
            suggestions = generate_suggestions(
                self.store.mood_logs,
                self.store.diary_logs,
                payload.get("now") or self.store.now(),
                tz=self.store.tz,
            )
            return "\n".join(suggestions)
        return None
