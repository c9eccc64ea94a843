"""CLI entry point for spendlog."""

import typer

from spendlog.commands.admin import backup_command, config_command, init_command, restore_command, theme_command
from spendlog.commands.budget import budget_reset_command, budget_set_command, budget_show_command
from spendlog.commands.categories import category_add_command, category_list_command, category_remove_command
from spendlog.commands.common import setup_logging
from spendlog.commands.report import export_csv_command, export_pdf_command, summary_command
from spendlog.commands.transactions import (
    add_command,
    clear_command,
    delete_command,
    edit_command,
    list_command,
)

app = typer.Typer(
    name="spendlog",
    help="Spendlog - track your income and expenses",
    add_completion=False,
)
category_app = typer.Typer(help="Manage your categories.")
budget_app = typer.Typer(help="Manage your spending limit.")
export_app = typer.Typer(help="Export your transactions.")
app.add_typer(category_app, name="category")
app.add_typer(budget_app, name="budget")
app.add_typer(export_app, name="export")

SEARCH_HELP = "Only descriptions containing this text"
CATEGORY_HELP = "Only this category"
FROM_HELP = "Only on or after this date"
TO_HELP = "Only on or before this date"
RANGE_HELP = "Date range: this-month, last-month, last-30-days"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Spendlog - track your income and expenses."""
    setup_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize spendlog database and configuration."""
    init_command(force)


@app.command(name="config")
def config(
    currency: str = typer.Option(None, "--currency", help="Currency symbol to display"),
    db_path: str = typer.Option(None, "--db-path", help="Database file location"),
) -> None:
    """Show or change your configuration."""
    config_command(currency, db_path)


@app.command()
def add(
    description: str,
    amount: float,
    category: str = typer.Option(..., "--category", "-c", help="Category name"),
    txn_type: str = typer.Option("expense", "--type", "-t", help="expense or income"),
    txn_date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
) -> None:
    """Add a transaction."""
    add_command(description, amount, category, txn_type, txn_date)


@app.command()
def edit(
    transaction_id: int,
    description: str = typer.Option(None, "--description", help="New description"),
    amount: float = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    txn_type: str = typer.Option(None, "--type", "-t", help="expense or income"),
    txn_date: str = typer.Option(None, "--date", "-d", help="New date"),
) -> None:
    """Edit a transaction."""
    edit_command(transaction_id, description, amount, category, txn_type, txn_date)


@app.command()
def delete(
    transaction_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a transaction."""
    delete_command(transaction_id, yes)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete all of your transactions."""
    clear_command(yes)


@app.command(name="list")
def list_transactions(
    search: str = typer.Option(None, "--search", "-s", help=SEARCH_HELP),
    category: str = typer.Option(None, "--category", "-c", help=CATEGORY_HELP),
    date_from: str = typer.Option(None, "--from", help=FROM_HELP),
    date_to: str = typer.Option(None, "--to", help=TO_HELP),
    date_range: str = typer.Option(None, "--range", help=RANGE_HELP),
) -> None:
    """List your transactions, newest first."""
    list_command(search, category, date_from, date_to, date_range)


@app.command()
def summary(
    search: str = typer.Option(None, "--search", "-s", help=SEARCH_HELP),
    category: str = typer.Option(None, "--category", "-c", help=CATEGORY_HELP),
    date_from: str = typer.Option(None, "--from", help=FROM_HELP),
    date_to: str = typer.Option(None, "--to", help=TO_HELP),
    date_range: str = typer.Option(None, "--range", help=RANGE_HELP),
    series: bool = typer.Option(True, help="Show your balance over time"),
) -> None:
    """Show your balance, budget status, and spending breakdown."""
    summary_command(search, category, date_from, date_to, date_range, series)


@category_app.command(name="list")
def category_list(
    txn_type: str = typer.Option(None, "--type", "-t", help="expense or income (default: both)"),
) -> None:
    """List your categories."""
    category_list_command(txn_type)


@category_app.command(name="add")
def category_add(
    name: str,
    txn_type: str = typer.Option("expense", "--type", "-t", help="expense or income"),
) -> None:
    """Add a custom category."""
    category_add_command(name, txn_type)


@category_app.command(name="remove")
def category_remove(
    name: str,
    txn_type: str = typer.Option("expense", "--type", "-t", help="expense or income"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove a custom category."""
    category_remove_command(name, txn_type, yes)


@budget_app.command(name="set")
def budget_set(amount: str) -> None:
    """Set your monthly spending limit."""
    budget_set_command(amount)


@budget_app.command(name="reset")
def budget_reset() -> None:
    """Remove your spending limit."""
    budget_reset_command()


@budget_app.command(name="show")
def budget_show() -> None:
    """Show your spending against the limit."""
    budget_show_command()


@export_app.command(name="csv")
def export_csv(
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: expense_tracker_<date>.csv)"),
    search: str = typer.Option(None, "--search", "-s", help=SEARCH_HELP),
    category: str = typer.Option(None, "--category", "-c", help=CATEGORY_HELP),
    date_from: str = typer.Option(None, "--from", help=FROM_HELP),
    date_to: str = typer.Option(None, "--to", help=TO_HELP),
    date_range: str = typer.Option(None, "--range", help=RANGE_HELP),
) -> None:
    """Export your transactions to CSV."""
    export_csv_command(output, search, category, date_from, date_to, date_range)


@export_app.command(name="pdf")
def export_pdf(
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: expense_tracker_<date>.pdf)"),
    search: str = typer.Option(None, "--search", "-s", help=SEARCH_HELP),
    category: str = typer.Option(None, "--category", "-c", help=CATEGORY_HELP),
    date_from: str = typer.Option(None, "--from", help=FROM_HELP),
    date_to: str = typer.Option(None, "--to", help=TO_HELP),
    date_range: str = typer.Option(None, "--range", help=RANGE_HELP),
) -> None:
    """Export a PDF report of your transactions."""
    export_pdf_command(output, search, category, date_from, date_to, date_range)


@app.command()
def backup(
    output: str = typer.Option(None, "--output", "-o", help="Backup file (default: expense_tracker_backup.json)"),
) -> None:
    """Back up your transactions, categories, and budget limit."""
    backup_command(output)


@app.command()
def restore(
    backup_file: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Restore your data from a backup file."""
    restore_command(backup_file, yes)


@app.command()
def theme(
    name: str = typer.Argument(None, help="dark or light"),
) -> None:
    """Show or set your preferred theme."""
    theme_command(name)


if __name__ == "__main__":
    app()
