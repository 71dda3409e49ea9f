"""Key-value vault persisting JSON-encodable values through a database adapter."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .adapters import DatabaseAdapter

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """Raised when a value cannot be written to or removed from the vault."""


@dataclass(slots=True)
class Vault:
    """Stores values under string keys, tolerating missing and corrupt data."""

    adapter: DatabaseAdapter

    def __post_init__(self) -> None:
        """Ensure the backing table is present."""
        self.adapter.ensure_schema()

    def save(self, key: str, value: Any) -> None:
        """Encode ``value`` as JSON and replace whatever is stored under ``key``.

        Args:
            key: Vault key.
            value: JSON-encodable value.

        Raises:
            PersistenceError: If encoding or the database write fails.

        """
        try:
            encoded = json.dumps(value, ensure_ascii=False, sort_keys=True)
            self.adapter.execute(
                """
                INSERT INTO vault (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT (key) DO UPDATE
                SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, encoded, datetime.now(UTC).isoformat()),
            )
        except Exception as exc:
            logger.warning("Failed to save vault key %s: %s", key, exc)
            raise PersistenceError(f"Could not save {key!r}") from exc

    def read(self, key: str) -> Any | None:
        """Return the decoded value for ``key`` or ``None`` if absent or unreadable."""
        try:
            row = self.adapter.fetchone("SELECT value FROM vault WHERE key=?", (key,))
        except Exception as exc:
            logger.warning("Failed to read vault key %s: %s", key, exc)
            return None
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except (TypeError, ValueError) as exc:
            logger.warning("Discarding undecodable vault value for %s: %s", key, exc)
            return None

    def delete(self, key: str) -> None:
        """Remove ``key`` from the vault; missing keys are ignored.

        Raises:
            PersistenceError: If the database delete fails.

        """
        try:
            self.adapter.execute("DELETE FROM vault WHERE key=?", (key,))
        except Exception as exc:
            logger.warning("Failed to delete vault key %s: %s", key, exc)
            raise PersistenceError(f"Could not delete {key!r}") from exc

    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        rows = self.adapter.fetchall("SELECT key FROM vault ORDER BY key")
        return [row[0] for row in rows]
