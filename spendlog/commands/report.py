"""Summary and export commands."""

import calendar
from datetime import date, datetime
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from spendlog.commands.budget import format_budget_status
from spendlog.commands.common import build_query, console, fail, format_money, load_settings, open_ledger
from spendlog.domain.errors import EmptyExport
from spendlog.domain.export import export_filename, format_csv
from spendlog.domain.report import BalancePoint, LedgerSummary
from spendlog.pdf import write_report

HISTOGRAM_WIDTH = 30


def histogram_bar_length(amount: float, max_amount: float, bar_width: int) -> int:
    """Scale an amount to a bar length in characters."""
    if max_amount <= 0:
        return 0
    return int(abs(amount) / max_amount * bar_width)


def render_breakdown(breakdown: dict[str, float], currency: str) -> None:
    if not breakdown:
        console.print("[dim]No expenses yet[/dim]\n")
        return

    console.print("[bold red]Expenses by category:[/bold red]\n")
    total = sum(breakdown.values())
    max_amount = max(breakdown.values())
    for category, amount in breakdown.items():
        bar = "█" * histogram_bar_length(amount, max_amount, HISTOGRAM_WIDTH)
        share = amount / total * 100 if total else 0
        console.print(f"  {escape(category):20} {format_money(amount, currency):>14} {share:5.1f}%  {bar}")
    console.print()


def render_series(series: list[BalancePoint], currency: str) -> None:
    if not series:
        return

    table = Table(title="Balance over time")
    table.add_column("Date", style="cyan")
    table.add_column("Balance", justify="right")
    for point in series:
        color = "red" if point.balance < 0 else "green"
        table.add_row(point.date, f"[{color}]{format_money(point.balance, currency)}[/{color}]")
    console.print(table)


def render_summary(summary: LedgerSummary, currency: str) -> None:
    totals = summary.totals
    balance_color = "red" if totals.balance < 0 else "green"
    console.print(f"[bold green]Income:[/bold green]  {format_money(totals.income, currency)}")
    console.print(f"[bold red]Expense:[/bold red] {format_money(totals.expense, currency)}")
    console.print(
        f"[bold cyan]Balance:[/bold cyan] [{balance_color}]{format_money(totals.balance, currency)}[/{balance_color}]"
    )
    console.print(format_budget_status(summary.budget, currency))
    console.print()

    monthly = summary.monthly
    console.print(f"[bold cyan]{calendar.month_name[monthly.month]} {monthly.year}[/bold cyan]")
    console.print(f"  Spent:         {format_money(monthly.total_expense, currency)}")
    console.print(f"  Daily average: {format_money(monthly.daily_average_expense, currency)}")
    console.print(f"  Top category:  {escape(monthly.top_category or '-')}")
    console.print()


def summary_command(
    search: str | None = None,
    category: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    date_range: str | None = None,
    series: bool = True,
) -> None:
    """Show totals, budget status, monthly summary, category breakdown, and balance trend.

    Figures cover every transaction unless a filter is given, in which case
    everything except the balance trend covers only the matching ones.
    """
    settings = load_settings()
    ledger = open_ledger(settings)
    q = build_query(search, category, date_from, date_to, date_range)
    summary = ledger.summary(date.today(), q)

    render_summary(summary, settings.currency)
    render_breakdown(summary.breakdown, settings.currency)
    if series:
        render_series(summary.series, settings.currency)


def export_csv_command(
    output: str | None = None,
    search: str | None = None,
    category: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    date_range: str | None = None,
) -> None:
    """Write the displayed transactions to a CSV file."""
    ledger = open_ledger()
    transactions = ledger.view(build_query(search, category, date_from, date_to, date_range))

    if not transactions:
        fail("No data available to export!")

    path = Path(output).expanduser() if output else Path(export_filename("csv", date.today()))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(format_csv(transactions, bom=True), encoding="utf-8")
    except OSError as e:
        fail(f"Export failed: {e}")

    console.print(f"[green]✓[/green] CSV file saved: {escape(str(path))} ({len(transactions)} rows)")


def export_pdf_command(
    output: str | None = None,
    search: str | None = None,
    category: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    date_range: str | None = None,
) -> None:
    """Write a PDF report with summary figures, charts, and the displayed transactions."""
    settings = load_settings()
    ledger = open_ledger(settings)
    q = build_query(search, category, date_from, date_to, date_range)
    transactions = ledger.view(q)
    summary = ledger.summary(date.today())

    path = Path(output).expanduser() if output else Path(export_filename("pdf", date.today()))
    try:
        write_report(path, summary, transactions, settings.currency, datetime.now())
    except EmptyExport as e:
        fail(f"{e}!")
    except OSError as e:
        fail(f"PDF failed: {e}")

    console.print(f"[green]✓[/green] PDF report saved: {escape(str(path))}")
