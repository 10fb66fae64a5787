"""Command-line interface for DailyDose.

Provides subcommands to show today's quote, pick a random one, browse the
history, and manage favorites.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass

from .config import DailyDoseConfig, config_from_env
from .logging import configure_logger
from .quotes import Quote, QuoteRepository, QuoteStore, ZenQuotesSource
from .viewmodel import HistoryViewModel, QuoteResult, QuoteViewModel


@dataclass
class App:
    """Wired-up components for one CLI invocation."""

    store: QuoteStore
    repository: QuoteRepository
    quotes: QuoteViewModel
    history: HistoryViewModel

    def close(self) -> None:
        self.store.close()


def build_app(config: DailyDoseConfig) -> App:
    """Construct the store, source, repository and view models."""
    assert config.db_path is not None
    store = QuoteStore(config.db_path)
    store.init_db()
    source = ZenQuotesSource(base_url=config.api_base_url, timeout=config.http_timeout)
    repository = QuoteRepository(store, source)
    quotes = QuoteViewModel(repository, event_logger=configure_logger(config.log_dir))
    return App(store, repository, quotes, HistoryViewModel(repository))


def _format_quote(quote: Quote) -> str:
    """Format a quote for display."""
    star = " \033[33m★\033[0m" if quote.is_favorite else ""
    return f"\n  “{quote.text}”\n    — {quote.author}{star}\n"


def _print_result(result: QuoteResult) -> int:
    if result.quote is not None:
        print(_format_quote(result.quote))
    if result.message:
        stream = sys.stdout if result.displayed else sys.stderr
        print(f"({result.message})", file=stream)
    return 0 if result.displayed else 1


def cmd_today(app: App, args: argparse.Namespace) -> int:
    """Show today's quote."""
    return _print_result(asyncio.run(app.quotes.load()))


def cmd_refresh(app: App, args: argparse.Namespace) -> int:
    """Fetch again, or show a different stored quote when offline."""
    app.quotes.current_quote.set(app.repository.get_latest_quote())
    return _print_result(asyncio.run(app.quotes.refresh()))


def cmd_random(app: App, args: argparse.Namespace) -> int:
    """Show a random stored quote other than the latest one."""
    app.quotes.current_quote.set(app.repository.get_latest_quote())
    return _print_result(asyncio.run(app.quotes.show_random()))


def cmd_history(app: App, args: argparse.Namespace) -> int:
    """List stored quotes, most recent first."""
    if args.favorites:
        app.history.toggle_favorite_filter()
    quotes = app.history.visible_quotes()

    if not quotes:
        print("No quotes found.")
        return 0

    print(f"\n{'ID':<6} {'Date':<12} {'Fav':<4} Quote")
    print("-" * 80)
    for quote in quotes:
        fav = "★" if quote.is_favorite else ""
        text = quote.text
        if len(text) > 50:
            text = text[:47] + "..."
        print(f"{quote.id:<6} {quote.date_fetched:<12} {fav:<4} {text} — {quote.author}")

    print(f"\nTotal: {len(quotes)} quote(s)")
    return 0


def cmd_favorite(app: App, args: argparse.Namespace) -> int:
    """Toggle the favorite flag of a quote."""
    quote = app.store.get(args.id)
    if quote is None:
        print(f"Error: Quote {args.id} not found", file=sys.stderr)
        return 1

    result = asyncio.run(app.quotes.toggle_favorite(quote))
    if not result.displayed:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1

    state = "added to" if result.quote and result.quote.is_favorite else "removed from"
    print(f"✓ Quote {args.id} {state} favorites")
    return 0


def cmd_delete(app: App, args: argparse.Namespace) -> int:
    """Delete a quote."""
    quote = app.store.get(args.id)
    if quote is None:
        print(f"Error: Quote {args.id} not found", file=sys.stderr)
        return 1

    if not asyncio.run(app.quotes.delete(quote)):
        print(f"Error: {app.quotes.message.value or 'Delete failed'}", file=sys.stderr)
        return 1
    print(f"✓ Deleted quote {args.id}")
    return 0


def cmd_clear(app: App, args: argparse.Namespace) -> int:
    """Delete every stored quote."""
    deleted = app.repository.delete_all_quotes()
    print(f"✓ Deleted {deleted} quote(s)")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dailydose",
        description="Your daily dose of motivation",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("today", help="Show today's quote")
    subparsers.add_parser("refresh", help="Fetch a new quote")
    subparsers.add_parser("random", help="Show a random stored quote")

    history_parser = subparsers.add_parser("history", help="List stored quotes")
    history_parser.add_argument(
        "-f", "--favorites", action="store_true", help="Only show favorites"
    )

    favorite_parser = subparsers.add_parser("favorite", help="Toggle a favorite")
    favorite_parser.add_argument("id", type=int, help="Quote ID")

    delete_parser = subparsers.add_parser("delete", help="Delete a quote")
    delete_parser.add_argument("id", type=int, help="Quote ID")

    subparsers.add_parser("clear", help="Delete all quotes")

    return parser


def run_cli(argv: list[str] | None = None, config: DailyDoseConfig | None = None) -> int:
    """Run the CLI with given arguments.

    Args:
        argv: Command-line arguments. Uses sys.argv[1:] if None.
        config: Configuration. Loaded from the environment if None.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "today": cmd_today,
        "refresh": cmd_refresh,
        "random": cmd_random,
        "history": cmd_history,
        "favorite": cmd_favorite,
        "delete": cmd_delete,
        "clear": cmd_clear,
    }

    command = args.command or "today"
    handler = commands.get(command)
    if handler is None:
        parser.print_help()
        return 1

    app = build_app(config or config_from_env())
    try:
        return handler(app, args)
    finally:
        app.close()
