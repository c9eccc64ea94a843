"""Helpers shared by the command modules."""

import logging
import sqlite3
import sys
import tomllib
from datetime import date, datetime
from typing import NoReturn

import pandas as pd
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from spendlog.config import Settings, get_settings
from spendlog.dates import date_preset
from spendlog.domain.query import ALL_CATEGORIES, Query
from spendlog.engine import Ledger
from spendlog.store.kv import SqliteKeyValueStore

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Send spendlog log records to stderr through rich."""
    logger = logging.getLogger("spendlog")
    logger.handlers.clear()
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{escape(message)}[/red]", style="bold")
    sys.exit(1)


def load_settings() -> Settings:
    """Resolve settings, exiting if the config file cannot be parsed."""
    try:
        return get_settings()
    except tomllib.TOMLDecodeError as e:
        fail(f"Config file is invalid: {e}")


def open_ledger(settings: Settings | None = None) -> Ledger:
    """Load the ledger from the configured database.

    Keys that could not be loaded are reported and reset to defaults.
    """
    settings = settings or load_settings()
    try:
        ledger = Ledger.load(SqliteKeyValueStore(settings.db_path))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    for problem in ledger.problems:
        console.print(f"[yellow]Warning: {escape(str(problem))}. Using defaults.[/yellow]")
    return ledger


def normalize_date(value: str) -> str:
    """Normalize a user-entered date to YYYY-MM-DD.

    ISO dates (YYYY-MM-DD) are taken as-is. Anything else goes through
    pandas.to_datetime with dayfirst, so European (DD/MM/YYYY) and other
    common formats are accepted.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    if not value or not value.strip():
        raise ValueError("empty date")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date().isoformat()
    except ValueError:
        pass
    return pd.to_datetime(value.strip(), dayfirst=True).strftime("%Y-%m-%d")


def parse_date_option(value: str | None, option: str) -> date | None:
    """Parse a --from/--to style option, exiting on bad input."""
    if value is None:
        return None
    try:
        return date.fromisoformat(normalize_date(value))
    except ValueError as e:
        fail(f"Invalid date for {option}: {e}")


def build_query(
    search: str | None = None,
    category: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    date_range: str | None = None,
    today: date | None = None,
) -> Query | None:
    """Build a Query from command-line filters.

    A named range sets both bounds; --from and --to override either one.

    Returns:
        The query, or None when no filter was given.
    """
    start: date | None = None
    end: date | None = None

    if date_range:
        try:
            start, end, label = date_preset(date_range, today or date.today())
        except ValueError as e:
            fail(str(e))
        console.print(f"[dim]Showing data for: {label}[/dim]")

    start = parse_date_option(date_from, "--from") or start
    end = parse_date_option(date_to, "--to") or end

    q = Query(
        search_text=search or "",
        category=category or ALL_CATEGORIES,
        date_from=start,
        date_to=end,
    )
    return None if q.is_empty else q


def format_money(amount: float, currency: str, include_sign: bool = False) -> str:
    """Format an amount for display (e.g. "₹1,234.50" or "-₹20.00")."""
    formatted = f"{escape(currency)}{abs(amount):,.2f}"
    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted
