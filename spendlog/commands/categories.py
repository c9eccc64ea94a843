"""Category commands for listing, adding, and removing categories."""

import sqlite3

import typer
from rich.markup import escape
from rich.table import Table

from spendlog.commands.common import console, fail, open_ledger
from spendlog.domain.errors import LedgerError
from spendlog.domain.models import TransactionType


def category_list_command(txn_type: str | None = None) -> None:
    """Show categories per type, marking the custom ones."""
    ledger = open_ledger()
    types = [txn_type] if txn_type else list(TransactionType.ALL)

    for current in types:
        if current not in TransactionType.ALL:
            fail(f"Unknown type '{current}' (expected expense or income)")
        table = Table(title=f"{current.title()} categories")
        table.add_column("Name", style="magenta")
        table.add_column("Kind", style="dim")
        for name in ledger.registry.categories_for(current):
            kind = "default" if ledger.registry.is_default(current, name) else "custom"
            table.add_row(escape(name), kind)
        console.print(table)


def category_add_command(name: str, txn_type: str = TransactionType.EXPENSE) -> None:
    """Add a custom category."""
    ledger = open_ledger()
    try:
        added = ledger.add_category(txn_type, name)
    except LedgerError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f'[green]✓[/green] Category "{escape(added)}" added!')


def category_remove_command(name: str, txn_type: str = TransactionType.EXPENSE, yes: bool = False) -> None:
    """Remove a custom category. Default categories are protected."""
    ledger = open_ledger()

    if txn_type in TransactionType.ALL and ledger.registry.is_default(txn_type, name):
        fail("You cannot delete default categories.")

    if not yes and not typer.confirm(
        f'Are you sure you want to delete the custom category "{name}"?', default=False
    ):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        ledger.remove_category(txn_type, name)
    except LedgerError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f'[green]✓[/green] Category "{escape(name)}" removed.')
