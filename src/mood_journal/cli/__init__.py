"""Command line front-end for the mood journal."""

from __future__ import annotations

from .__main__ import build_parser, create_vault, main

__all__ = ["build_parser", "create_vault", "main"]
