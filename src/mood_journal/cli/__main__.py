"""Command line entry-point for the mood journal."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os

from mood_journal import __version__
from mood_journal.agents import Delete, JournalWriter, Notifier
from mood_journal.calendar_view import WEEKDAY_LABELS, build_calendar
from mood_journal.event_bus import Event, EventBus
from mood_journal.sentiment import SentimentScorer, TextBlobScorer, analyze_entry
from mood_journal.stats import counts_for_month, monthly_average, trend, trend_range
from mood_journal.storage import (
    DatabaseAdapter,
    MonthKey,
    MoodCategory,
    MoodStore,
    PostgresAdapter,
    SQLiteAdapter,
    Vault,
    date_key,
)

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_PATH = "mood_journal.db"
DEFAULT_DSN = os.getenv("MOOD_JOURNAL_DSN", f"sqlite:///{DEFAULT_SQLITE_PATH}")
BLANK_ENTRY_MESSAGE = "✍️ Please write something first."


def _month(text: str) -> MonthKey:
    try:
        return MonthKey.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {text!r}") from exc


def _day(text: str) -> str:
    try:
        return date_key(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Mood journal")
    parser.add_argument("--dsn", default=DEFAULT_DSN, help="Database DSN")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    parser.add_argument(
        "--version", action="version", version=f"mood-journal {__version__}"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    mood = commands.add_parser("mood", help="Record the mood of a day")
    mood.add_argument("mood", choices=[category.value for category in MoodCategory])
    mood.add_argument("--date", type=_day, help="Day as YYYY-MM-DD (default: today)")

    diary = commands.add_parser("diary", help="Write the diary entry of a day")
    diary.add_argument("text")
    diary.add_argument("--date", type=_day, help="Day as YYYY-MM-DD (default: today)")

    show = commands.add_parser("show", help="Show the mood and diary of a day")
    show.add_argument("--date", type=_day, help="Day as YYYY-MM-DD (default: today)")

    stats = commands.add_parser("stats", help="Mood counts and average for a month")
    stats.add_argument("--month", type=_month, help="Month as YYYY-MM")

    trend_cmd = commands.add_parser("trend", help="Six month average mood trend")
    trend_cmd.add_argument("--end", type=_month, help="Last month as YYYY-MM")

    commands.add_parser("suggest", help="Show smart suggestions")

    cal = commands.add_parser("calendar", help="Month calendar with mood emojis")
    cal.add_argument("--month", type=_month, help="Month as YYYY-MM")

    analyze = commands.add_parser("analyze", help="Analyse the sentiment of a text")
    analyze.add_argument("text")

    commands.add_parser("clear", help="Delete all journal data")
    return parser


def create_vault(dsn: str) -> Vault:
    """Instantiate the vault using a DSN string.

    Args:
        dsn: Database connection string supporting SQLite or PostgreSQL.

    Returns:
        Configured :class:`Vault` instance.

    """
    adapter: DatabaseAdapter
    if dsn.startswith("postgres"):
        adapter = PostgresAdapter(dsn)
    elif dsn.startswith("sqlite:///"):
        adapter = SQLiteAdapter(dsn.replace("sqlite:///", "", 1) or ":memory:")
    else:
        adapter = SQLiteAdapter(dsn)
    return Vault(adapter)


def bootstrap(bus: EventBus, store: MoodStore) -> None:
    """Wire journal agents and the console printer to the event bus.

    Args:
        bus: Shared event bus instance.
        store: Initialised mood store used by the agents.

    """
    JournalWriter(bus, store)
    Delete(bus, store)
    Notifier(bus, store)

    def print_response(event: Event) -> None:
        print(event.payload["text"])

    bus.subscribe("journal.response", print_response)


def render_stats(store: MoodStore, month: MonthKey) -> list[str]:
    counts = counts_for_month(store.mood_logs, month)
    lines = [month.label]
    lines.extend(
        f"{category.emoji} {category.value}: {counts[category]}"
        for category in MoodCategory
    )
    average = monthly_average(counts)
    lines.append("Average Mood: " + (f"{average:.2f}" if average is not None else "n/a"))
    return lines


def render_trend(store: MoodStore, end: MonthKey) -> list[str]:
    start, end = trend_range(end)
    points = trend(store.mood_logs, end)
    lines = [f"Graph Range: {start.label} - {end.label}"]
    lines.extend(f"{point.month.label}: {point.average:.2f}" for point in points)
    if points:
        lines.append(f"Latest Average Mood: {points[-1].average:.2f}")
    else:
        lines.append("No mood data in this range.")
    return lines


def render_calendar(store: MoodStore, month: MonthKey) -> list[str]:
    grid = build_calendar(store.mood_logs, store.diary_logs, month, today=store.today())
    lines = [month.label, " ".join(f"{label:>4}" for label in WEEKDAY_LABELS)]
    for week in grid.rows():
        cells = []
        for cell in week:
            if cell is None:
                cells.append("    ")
            else:
                marker = cell.emoji or ("*" if cell.has_diary else " ")
                cells.append(f"{cell.day:>2}{marker:>2}")
        lines.append(" ".join(cells))
    return lines


def render_analysis(text: str, scorer: SentimentScorer) -> str:
    result = analyze_entry(text, scorer)
    return result.message if result else BLANK_ENTRY_MESSAGE


async def async_main(args: argparse.Namespace, scorer: SentimentScorer | None = None) -> None:
    """Run one CLI command.

    Args:
        args: Parsed CLI arguments.
        scorer: Sentiment backend for ``analyze``; TextBlob when omitted.

    """
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    store = MoodStore(create_vault(args.dsn))
    store.initialize()
    bus = EventBus()
    bootstrap(bus, store)
    try:
        await dispatch(args, bus, store, scorer)
    finally:
        store.vault.adapter.close()


async def dispatch(
    args: argparse.Namespace,
    bus: EventBus,
    store: MoodStore,
    scorer: SentimentScorer | None,
) -> None:
    """Route one parsed command to the bus or to the read-side helpers."""
    when = getattr(args, "date", None)
    this_month = MonthKey.of(store.today())

    if args.command == "mood":
        await bus.publish("mood.save", {"date": when, "mood": args.mood})
    elif args.command == "diary":
        await bus.publish("diary.save", {"date": when, "text": args.text})
    elif args.command == "show":
        day = when or store.now()
        mood = store.get_mood(day)
        print(f"Mood: {mood.emoji} {mood.value}" if mood else "Mood: none")
        print(store.get_diary(day) or "No diary entry.")
    elif args.command == "stats":
        print("\n".join(render_stats(store, args.month or this_month)))
    elif args.command == "trend":
        print("\n".join(render_trend(store, args.end or this_month)))
    elif args.command == "suggest":
        await bus.publish("suggestions.request", {"now": store.now()})
    elif args.command == "calendar":
        print("\n".join(render_calendar(store, args.month or this_month)))
    elif args.command == "analyze":
        print(render_analysis(args.text, scorer or TextBlobScorer()))
    elif args.command == "clear":
        await bus.publish("account.deleted", {})
    else:  # pragma: no cover - argparse ensures command
        raise ValueError(f"Unsupported command {args.command}")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the async entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        asyncio.run(async_main(args))
    except KeyboardInterrupt:  # pragma: no cover - manual interruption
        logger.info("Interrupted by user")


if __name__ == "__main__":
    main()
