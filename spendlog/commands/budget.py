"""Budget commands for the global spending limit."""

import sqlite3
from datetime import date

from spendlog.commands.common import console, fail, format_money, load_settings, open_ledger
from spendlog.domain.budget import BudgetState, BudgetStatus
from spendlog.domain.errors import LedgerError

BAR_WIDTH = 30

STATE_COLORS = {
    BudgetState.OVER_BUDGET: "red",
    BudgetState.WARNING: "yellow",
    BudgetState.UNDER_WARNING_THRESHOLD: "cyan",
    BudgetState.NO_LIMIT: "dim",
}


def format_budget_status(status: BudgetStatus, currency: str) -> str:
    """One-line budget message with a progress bar, colored by state."""
    if status.state == BudgetState.NO_LIMIT:
        return "[dim italic]No monthly limit set[/dim italic]"

    color = STATE_COLORS[status.state]
    filled = int(status.percent_used / 100 * BAR_WIDTH)
    bar = f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (BAR_WIDTH - filled)}[/dim]"

    if status.state == BudgetState.OVER_BUDGET:
        text = f"⚠ Over Budget! ({status.raw_percent:.0f}%)"
    elif status.state == BudgetState.WARNING:
        text = f"⚠ Warning: {status.percent_used:.0f}% Used"
    else:
        text = f"Spending: {status.percent_used:.0f}%"

    return f"{bar} [{color}]{text}[/{color}]  Limit: {format_money(status.limit, currency)}"


def budget_set_command(amount: str) -> None:
    """Set the monthly spending limit."""
    settings = load_settings()
    ledger = open_ledger(settings)
    try:
        limit = ledger.set_budget_limit(amount)
    except LedgerError as e:
        fail(str(e))
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    console.print(f"[green]✓[/green] Budget limit set to {format_money(limit, settings.currency)}")


def budget_reset_command() -> None:
    """Remove the spending limit."""
    ledger = open_ledger()
    try:
        removed = ledger.reset_budget_limit()
    except sqlite3.Error as e:
        fail(f"Database error: {e}")

    if removed:
        console.print("[green]✓[/green] Budget limit removed")
    else:
        console.print("[yellow]No budget limit to reset![/yellow]")


def budget_show_command() -> None:
    """Show spending against the limit."""
    settings = load_settings()
    ledger = open_ledger(settings)
    summary = ledger.summary(date.today())
    console.print(format_budget_status(summary.budget, settings.currency))
