"""Transaction management commands (add, edit, delete, clear, list)."""

import sqlite3
from datetime import date

import typer
from rich.markup import escape
from rich.table import Table

from spendlog.commands.common import build_query, console, fail, format_money, load_settings, normalize_date, open_ledger
from spendlog.domain.errors import LedgerError
from spendlog.domain.models import TransactionType
from spendlog.domain.transactions import Transaction, TransactionInput
from spendlog.engine import Ledger


def check_category(ledger: Ledger, txn_type: str, category: str) -> None:
    """Exit unless the category is registered for the type."""
    if txn_type not in TransactionType.ALL:
        fail(f"Unknown type '{txn_type}' (expected expense or income)")
    if not ledger.registry.contains(txn_type, category.strip()):
        choices = ", ".join(ledger.registry.categories_for(txn_type))
        fail(f"Unknown {txn_type} category '{category}'. Choose one of: {choices}")


def resolve_date(value: str | None) -> str:
    if not value:
        return date.today().isoformat()
    try:
        return normalize_date(value)
    except ValueError as e:
        console.print(f"[red]Invalid date format: {escape(str(e))}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        raise typer.Exit(1) from e


def print_transaction(txn: Transaction, currency: str) -> None:
    console.print(f"  ID: {txn.id}")
    console.print(f"  Date: {txn.date}")
    console.print(f"  Description: {escape(txn.description)}")
    console.print(f"  Category: {escape(txn.category)} ({txn.type})")
    console.print(f"  Amount: {format_money(txn.amount, currency)}")


def add_command(
    description: str,
    amount: float,
    category: str,
    txn_type: str = TransactionType.EXPENSE,
    txn_date: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        description: Transaction description.
        amount: Positive amount; the type decides whether it adds or subtracts.
        category: Category name registered for the type.
        txn_type: "expense" or "income".
        txn_date: Transaction date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to today.
    """
    settings = load_settings()
    ledger = open_ledger(settings)
    check_category(ledger, txn_type, category)

    data = TransactionInput(
        description=description,
        amount=amount,
        category=category,
        date=resolve_date(txn_date),
        type=txn_type,
    )

    try:
        txn = ledger.add(data)
    except LedgerError as e:
        fail(f"Please fill in all fields correctly! {e}")
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print("[green]✓[/green] Transaction added:")
    print_transaction(txn, settings.currency)


def edit_command(
    transaction_id: int,
    description: str | None = None,
    amount: float | None = None,
    category: str | None = None,
    txn_type: str | None = None,
    txn_date: str | None = None,
) -> None:
    """Replace the fields of a transaction. Options left out keep their current value."""
    settings = load_settings()
    ledger = open_ledger(settings)

    current = ledger.find(transaction_id)
    if current is None:
        fail(f"Transaction {transaction_id} not found")

    new_type = txn_type or current.type
    new_category = category or current.category
    if txn_type or category:
        check_category(ledger, new_type, new_category)

    data = TransactionInput(
        description=description if description is not None else current.description,
        amount=amount if amount is not None else current.amount,
        category=new_category,
        date=resolve_date(txn_date) if txn_date else current.date,
        type=new_type,
    )

    try:
        txn = ledger.update(transaction_id, data)
    except LedgerError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Updated transaction {transaction_id}:")
    print_transaction(txn, settings.currency)


def delete_command(transaction_id: int, yes: bool = False) -> None:
    """Delete one transaction after confirmation."""
    ledger = open_ledger()

    txn = ledger.find(transaction_id)
    if txn is None:
        fail(f"Transaction {transaction_id} not found")

    if not yes and not typer.confirm(f'Are you sure you want to delete "{txn.description}"?', default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        ledger.remove(transaction_id)
    except LedgerError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print("[green]✓[/green] Transaction deleted successfully")


def clear_command(yes: bool = False) -> None:
    """Delete every transaction."""
    ledger = open_ledger()

    if not yes and not typer.confirm(
        "This will permanently delete all transactions. This action cannot be undone. Continue?",
        default=False,
    ):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        ledger.clear()
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print("[green]✓[/green] All data has been cleared.")


def render_transactions(transactions: list[Transaction], currency: str, title: str) -> None:
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            amount_display = f"[green]+{format_money(txn.amount, currency)}[/green]"
        else:
            amount_display = f"[red]-{format_money(txn.amount, currency)}[/red]"
        table.add_row(str(txn.id), txn.date, escape(txn.description), escape(txn.category), amount_display)

    console.print(table)


def list_command(
    search: str | None = None,
    category: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    date_range: str | None = None,
) -> None:
    """List transactions newest first, optionally filtered."""
    settings = load_settings()
    ledger = open_ledger(settings)
    q = build_query(search, category, date_from, date_to, date_range)
    transactions = ledger.view(q)

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    total = len(ledger.store)
    if q is None:
        title = f"Transactions (showing all {total})"
    else:
        title = f"Transactions (showing {len(transactions)} of {total})"
    render_transactions(transactions, settings.currency, title)
