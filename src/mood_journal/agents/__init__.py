"""Event-driven agents that apply front-end requests to the journal store."""

from __future__ import annotations

from .delete import Delete
from .journal_writer import JournalWriter
from .notifier import Notifier

__all__ = ["JournalWriter", "Delete", "Notifier"]
