"""Mood Journal: local mood and diary store with derived statistics."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
