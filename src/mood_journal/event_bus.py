"""In-process asyncio event bus connecting the front-end to journal agents."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, MutableMapping

logger = logging.getLogger(__name__)

WILDCARD = "*"

# Every event the journal agents and the CLI exchange.
JOURNAL_EVENTS = frozenset(
    {
        "mood.save",
        "mood.saved",
        "diary.save",
        "diary.saved",
        "account.deleted",
        "delete.done",
        "suggestions.request",
        "journal.error",
        "journal.response",
    }
)


@dataclass(slots=True)
class Event:
    """Named journal event with payload and metadata."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[Event], Awaitable[None] | None]


class EventBus:
    """Pub/sub bus delivering each event to its subscribers and to ``*`` listeners."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str | Iterable[str], handler: EventHandler) -> None:
        """Register ``handler`` for one event name or several."""
        names = [event_name] if isinstance(event_name, str) else list(event_name)
        if not names:
            raise ValueError("event_name must not be empty")
        for name in names:
            if name != WILDCARD and name not in JOURNAL_EVENTS:
                logger.warning("Subscribing to unknown journal event %s", name)
            logger.debug(
                "Subscribing %s to %s", getattr(handler, "__qualname__", repr(handler)), name
            )
            self._subscribers[name].append(handler)

    async def publish(
        self,
        event_name: str,
        payload: MutableMapping[str, Any] | None = None,
        metadata: MutableMapping[str, Any] | None = None,
    ) -> None:
        """Deliver an event and wait for every asynchronous handler to finish.

        Handler failures are logged and do not stop delivery to the others.
        """
        event = Event(
            name=event_name, payload=dict(payload or {}), metadata=dict(metadata or {})
        )
        handlers = [*self._subscribers.get(event_name, ()), *self._subscribers.get(WILDCARD, ())]
        if not handlers:
            logger.debug("No subscribers for event %s", event_name)
            return

        pending: list[Awaitable[None]] = []
        for handler in handlers:
            try:
                result = handler(event)
            except Exception:
                logger.exception("Handler %r failed on %s", handler, event_name)
                continue
            if inspect.isawaitable(result):
                pending.append(asyncio.ensure_future(result))
        if not pending:
            return
        for outcome in await asyncio.gather(*pending, return_exceptions=True):
            if isinstance(outcome, Exception):
                logger.error(
                    "Async handler failed on %s", event_name, exc_info=outcome
                )

    def clear(self) -> None:
        """Remove all subscribers."""
        self._subscribers.clear()
