"""Database adapters backing the key-value vault on SQLite or PostgreSQL."""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

try:  # pragma: no cover - optional dependency
    import psycopg
except Exception:  # pragma: no cover - fallback when psycopg is unavailable
    psycopg = None  # type: ignore


class DatabaseAdapter(ABC):
    """Minimal DB-API wrapper used by the vault."""

    @abstractmethod
    def ensure_schema(self) -> None:
        """Create the ``vault`` table when it is missing."""

    @abstractmethod
    @contextmanager
    def cursor(self) -> Iterator[Any]:
        """Return a context-managed cursor that automatically commits or rolls back."""

    def execute(self, query: str, params: Sequence[Any] | None = None) -> Any:
        """Execute a statement returning the raw cursor.

        Args:
            query: SQL query to execute.
            params: Positional parameters to interpolate.

        Returns:
            Cursor returned by the underlying driver.

        """
        with self.cursor() as cur:
            cur.execute(self._normalize_query(query), params or [])
            return cur

    def fetchone(self, query: str, params: Sequence[Any] | None = None) -> Any:
        """Fetch a single row using the provided query.

        Args:
            query: SQL query to execute.
            params: Positional parameters to interpolate.

        Returns:
            First row returned by the query or ``None``.

        """
        with self.cursor() as cur:
            cur.execute(self._normalize_query(query), params or [])
            return cur.fetchone()

    def fetchall(self, query: str, params: Sequence[Any] | None = None) -> list[Any]:
        """Fetch all rows from the query result as a list.

        Args:
            query: SQL query to execute.
            params: Positional parameters to interpolate.

        Returns:
            List of rows returned by the query.

        """
        with self.cursor() as cur:
            cur.execute(self._normalize_query(query), params or [])
            rows = cur.fetchall()
        return list(rows)

    def close(self) -> None:
        """Release the underlying connection."""

    def _normalize_query(self, query: str) -> str:
        """Return a query string compatible with the underlying driver."""
        return query


class SQLiteAdapter(DatabaseAdapter):
    """SQLite implementation of :class:`DatabaseAdapter`."""

    def __init__(self, dsn: str) -> None:
        """Connect to SQLite and configure database pragmas.

        Args:
            dsn: Database path or special ``:memory:`` name.

        """
        self._connection = sqlite3.connect(dsn, detect_types=sqlite3.PARSE_DECLTYPES)
        self._connection.row_factory = sqlite3.Row
        self._connection.execute("PRAGMA journal_mode=WAL")

    def ensure_schema(self) -> None:
        """Create the key-value table used by the vault when it is missing."""
        with self.cursor() as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS vault (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a SQLite cursor, committing on success and rolling back on error."""
        cur = self._connection.cursor()
        try:
            yield cur
            self._connection.commit()
        except Exception:
            self._connection.rollback()
            raise
        finally:
            cur.close()

    def close(self) -> None:
        """Close the SQLite connection."""
        self._connection.close()


class PostgresAdapter(DatabaseAdapter):  # pragma: no cover - requires psycopg
    """PostgreSQL implementation of :class:`DatabaseAdapter`."""

    def __init__(self, dsn: str) -> None:
        """Create a PostgreSQL connection using ``psycopg``.

        Args:
            dsn: PostgreSQL connection string.

        Raises:
            RuntimeError: If ``psycopg`` is not installed.

        """
        if psycopg is None:  # pragma: no cover - runtime guard
            raise RuntimeError("psycopg is required for PostgresAdapter")
        self._dsn = dsn
        self._connection = psycopg.connect(dsn, autocommit=True)

    def ensure_schema(self) -> None:
        """Create the key-value table used by the vault when it is missing."""
        with self.cursor() as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS vault (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL
                )
                """
            )

    @contextmanager
    def cursor(self) -> Iterator[Any]:
        """Yield a PostgreSQL cursor for executing commands."""
        cur = self._connection.cursor()
        try:
            yield cur
        finally:
            cur.close()

    def close(self) -> None:
        """Close the PostgreSQL connection."""
        self._connection.close()

    def _normalize_query(self, query: str) -> str:
        """Convert SQLite-style placeholders into PostgreSQL compatible ones."""
        return query.replace("?", "%s")
