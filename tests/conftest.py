"""Pytest configuration and shared fixtures for the journal test suite."""

from __future__ import annotations

import asyncio
import inspect
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mood_journal.storage import MoodStore, SQLiteAdapter, Vault  # noqa: E402


class FixedScorer:
    """Sentiment double that always returns the configured score."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls: list[str] = []

    def score(self, text: str) -> float:
        self.calls.append(text)
        return self.value


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used across the test suite."""

    config.addinivalue_line(
        "markers", "asyncio: run test coroutine inside a dedicated event loop"
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute ``@pytest.mark.asyncio`` tests using ``asyncio`` event loops."""

    marker = pyfuncitem.get_closest_marker("asyncio")
    if marker is None:
        return None

    func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(func):
        return None

    loop = asyncio.new_event_loop()
    try:
        signature = inspect.signature(func)
        kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in signature.parameters
            if name in pyfuncitem.funcargs
        }
        loop.run_until_complete(func(**kwargs))
    finally:
        loop.close()

    return True


@pytest.fixture
def vault() -> Iterator[Vault]:
    """Vault over a private in-memory SQLite database."""

    adapter = SQLiteAdapter(":memory:")
    yield Vault(adapter)
    adapter.close()


@pytest.fixture
def store(vault: Vault) -> MoodStore:
    """Initialised store backed by the in-memory vault."""

    journal = MoodStore(vault)
    journal.initialize()
    return journal


@pytest.fixture
def scorer_factory() -> type[FixedScorer]:
    """Expose :class:`FixedScorer` so tests can pick their own score."""

    return FixedScorer
