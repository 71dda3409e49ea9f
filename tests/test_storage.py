"""Tests for the vault and the mood/diary store."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from mood_journal.storage import (
    DIARY_LOGS_KEY,
    MOOD_LOGS_KEY,
    MonthKey,
    MoodCategory,
    MoodStore,
    PersistenceError,
    SQLiteAdapter,
    Vault,
    date_key,
)


class BrokenAdapter(SQLiteAdapter):
    """SQLite adapter whose writes always fail."""

    def execute(self, query, params=None):  # type: ignore[override]
        raise OSError("disk full")


def test_same_calendar_day_collides(store: MoodStore) -> None:
    """Different times of one day resolve to the same entry."""

    store.set_mood(datetime(2024, 5, 3, 0, 1), MoodCategory.HAPPY)
    assert store.get_mood(datetime(2024, 5, 3, 23, 59)) is MoodCategory.HAPPY
    assert store.get_mood(date(2024, 5, 3)) is MoodCategory.HAPPY
    assert store.get_mood("2024-05-03") is MoodCategory.HAPPY
    assert store.get_mood(date(2024, 5, 4)) is None


def test_last_write_wins(store: MoodStore) -> None:
    """A second pick on the same day replaces the first."""

    store.set_mood("2024-05-03", "Sad")
    store.set_mood(datetime(2024, 5, 3, 18), MoodCategory.DELIGHTED)
    assert store.get_mood("2024-05-03") is MoodCategory.DELIGHTED
    assert store.mood_logs == {"2024-05-03": MoodCategory.DELIGHTED}


def test_diary_accepts_blank_text(store: MoodStore) -> None:
    """The store performs no length validation on diary text."""

    store.set_diary("2024-05-03", "")
    assert store.get_diary("2024-05-03") == ""
    store.set_diary("2024-05-03", "Went hiking.")
    assert store.get_diary(date(2024, 5, 3)) == "Went hiking."


def test_unknown_mood_is_rejected(store: MoodStore) -> None:
    """Only the five mood categories can be stored."""

    with pytest.raises(ValueError):
        store.set_mood("2024-05-03", "Ecstatic")
    assert store.mood_logs == {}


def test_persisted_layout_and_reload(store: MoodStore, vault: Vault) -> None:
    """Both records survive a reload with the same keys and values."""

    store.set_mood("2024-05-02", MoodCategory.AWFUL)
    store.set_mood("2024-05-01", MoodCategory.HAPPY)
    store.set_diary("2024-05-01", "Had a rough day.")

    assert vault.read(MOOD_LOGS_KEY) == {"2024-05-01": "Happy", "2024-05-02": "Awful"}
    assert vault.read(DIARY_LOGS_KEY) == {"2024-05-01": "Had a rough day."}

    reloaded = MoodStore(vault)
    reloaded.initialize()
    assert dict(reloaded.mood_logs) == dict(store.mood_logs)
    assert dict(reloaded.diary_logs) == dict(store.diary_logs)


def test_clear_all_removes_vault_entries(store: MoodStore, vault: Vault) -> None:
    """Clearing forgets everything and drops the underlying keys."""

    store.set_mood("2024-05-01", MoodCategory.SAD)
    store.set_diary("2024-05-01", "text")
    store.clear_all()

    assert store.get_mood("2024-05-01") is None
    assert store.get_diary("2024-05-01") is None
    assert vault.read(MOOD_LOGS_KEY) is None
    assert vault.read(DIARY_LOGS_KEY) is None
    assert vault.keys() == []

    fresh = MoodStore(vault)
    fresh.initialize()
    assert fresh.mood_logs == {}
    assert fresh.diary_logs == {}


def test_initialize_recovers_from_corrupt_data(vault: Vault) -> None:
    """Undecodable or wrongly shaped records load as empty."""

    vault.adapter.execute(
        "INSERT INTO vault (key, value, updated_at) VALUES (?, ?, ?)",
        (MOOD_LOGS_KEY, "{not json", "2024-05-01"),
    )
    vault.save(DIARY_LOGS_KEY, ["a", "list"])

    journal = MoodStore(vault)
    journal.initialize()
    assert journal.mood_logs == {}
    assert journal.diary_logs == {}


def test_initialize_drops_malformed_entries(vault: Vault) -> None:
    """Unknown moods and bad date keys are skipped, valid entries kept."""

    vault.save(
        MOOD_LOGS_KEY,
        {"2024-05-01": "Happy", "2024-05-02": "Meh", "May 3": "Sad"},
    )
    vault.save(DIARY_LOGS_KEY, {"2024-05-01": "ok", "2024-05-02": 7})

    journal = MoodStore(vault)
    journal.initialize()
    assert journal.mood_logs == {"2024-05-01": MoodCategory.HAPPY}
    assert journal.diary_logs == {"2024-05-01": "ok"}


def test_snapshots_are_read_only(store: MoodStore) -> None:
    """Callers cannot mutate the store through its snapshots."""

    store.set_mood("2024-05-01", MoodCategory.HAPPY)
    snapshot = store.mood_logs
    with pytest.raises(TypeError):
        snapshot["2024-05-02"] = MoodCategory.SAD  # type: ignore[index]
    store.set_mood("2024-05-02", MoodCategory.SAD)
    assert "2024-05-02" not in snapshot


def test_write_failure_keeps_memory_and_raises() -> None:
    """A failing vault surfaces PersistenceError but keeps the new value."""

    adapter = BrokenAdapter(":memory:")
    journal = MoodStore(Vault(adapter))
    journal.initialize()

    with pytest.raises(PersistenceError):
        journal.set_mood("2024-05-01", MoodCategory.NEUTRAL)
    assert journal.get_mood("2024-05-01") is MoodCategory.NEUTRAL


def test_file_backed_vault_round_trip(tmp_path: Path) -> None:
    """Data written through one connection is visible to the next."""

    db_path = str(tmp_path / "journal.db")
    first = MoodStore(Vault(SQLiteAdapter(db_path)))
    first.initialize()
    first.set_diary("2024-01-31", "Ünïcödé entry")
    first.vault.adapter.close()

    second = MoodStore(Vault(SQLiteAdapter(db_path)))
    second.initialize()
    assert second.get_diary("2024-01-31") == "Ünïcödé entry"


def test_date_key_uses_local_zone_for_aware_datetimes() -> None:
    """Aware timestamps are converted before truncation."""

    plus_two = timezone(timedelta(hours=2))
    late_utc = datetime(2024, 5, 3, 23, 30, tzinfo=UTC)
    assert date_key(late_utc, plus_two) == "2024-05-04"
    assert date_key(late_utc, UTC) == "2024-05-03"
    assert date_key("2024-05-03T08:00:00") == "2024-05-03"
    with pytest.raises(ValueError):
        date_key("yesterday")


def test_store_honours_configured_zone(vault: Vault) -> None:
    """A store configured with a zone keys aware timestamps in that zone."""

    journal = MoodStore(vault, tz=timezone(timedelta(hours=-5)))
    journal.initialize()
    key = journal.set_mood(datetime(2024, 5, 4, 2, 0, tzinfo=UTC), MoodCategory.SAD)
    assert key == "2024-05-03"


def test_store_clock_follows_configured_zone(vault: Vault) -> None:
    """The store's notion of today is the calendar day in its own zone."""

    far_east = timezone(timedelta(hours=14))
    journal = MoodStore(vault, tz=far_east)
    assert journal.now().utcoffset() == timedelta(hours=14)
    assert journal.today() == datetime.now(far_east).date()


def test_lookups_with_unusable_dates_return_none(store: MoodStore) -> None:
    """Reads never raise on malformed dates."""

    store.set_mood("2024-05-01", MoodCategory.HAPPY)
    store.set_diary("2024-05-01", "entry")
    assert store.get_mood("not-a-date") is None
    assert store.get_mood("2024-13-40") is None
    assert store.get_mood(None) is None
    assert store.get_diary(12345) is None
    assert store.get_diary("someday") is None
    assert store.get_mood("2024-05-01") is MoodCategory.HAPPY


def test_month_key_navigation_crosses_years() -> None:
    """Shifting months wraps correctly and labels stay unique per year."""

    january = MonthKey(2024, 1)
    assert january.shift(-1) == MonthKey(2023, 12)
    assert MonthKey(2023, 12).shift(1) == january
    assert january.shift(-13) == MonthKey(2022, 12)
    assert january.label == "January 2024"
    assert MonthKey(2023, 1) != january
    assert MonthKey(2023, 12) < january
    assert MonthKey.from_date_key("2024-02-29") == MonthKey(2024, 2)
    assert MonthKey.from_date_key("2024-02-30") is None


def test_mood_category_weights() -> None:
    """Weights run from Awful=1 to Delighted=5."""

    assert [category.weight for category in MoodCategory] == [5, 4, 3, 2, 1]
    assert MoodCategory.parse("delighted") is MoodCategory.DELIGHTED
    assert MoodCategory.parse("AWFUL") is MoodCategory.AWFUL
