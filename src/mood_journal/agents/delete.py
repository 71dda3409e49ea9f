"""Agent that wipes the journal once the account behind it is deleted."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mood_journal.event_bus import Event, EventBus
from mood_journal.storage import MoodStore, PersistenceError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Delete:
    """Handles account deletion by clearing every stored record."""

    bus: EventBus
    store: MoodStore

    def __post_init__(self) -> None:
        """Subscribe to account deletion notices on the event bus."""
        self.bus.subscribe("account.deleted", self.handle)

    async def handle(self, event: Event) -> None:
        """Clear moods and diaries and acknowledge the deletion.

        Args:
            event: Account deletion notice; its payload is passed through.

        """
        try:
            self.store.clear_all()
        except PersistenceError as exc:
            logger.error("Journal data could not be removed: %s", exc)
            await self.bus.publish("journal.error", {"kind": "delete", "error": str(exc)})
            return
        await self.bus.publish("delete.done", dict(event.payload))
