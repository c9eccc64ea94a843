"""PDF report: summary figures, charts, and the transaction table.

Every number comes from a LedgerSummary so the report matches the
dashboard exactly.
"""

import re
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from spendlog.domain.budget import BudgetState
from spendlog.domain.errors import EmptyExport
from spendlog.domain.report import LedgerSummary
from spendlog.domain.transactions import Transaction

PAGE_SIZE = (8.27, 11.69)  # A4 portrait, inches
ROWS_PER_PAGE = 35

BUDGET_COLORS = {
    BudgetState.OVER_BUDGET: "#e63946",
    BudgetState.WARNING: "#e9c46a",
    BudgetState.UNDER_WARNING_THRESHOLD: "#2a9d8f",
    BudgetState.NO_LIMIT: "#e0e0e0",
}
PIE_COLORS = ["#ff6b6b", "#4ecdc4", "#ffe66d", "#1a535c", "#ff9f1c", "#2a9d8f"]

_NON_PRINTABLE = re.compile(r"[^\x20-\x7E]")


def clean_text(value: object) -> str:
    """Drop characters outside printable ASCII (emoji, symbols the PDF font lacks).

    Dollar signs are escaped so matplotlib does not read them as mathtext.
    """
    return _NON_PRINTABLE.sub("", str(value)).replace("$", r"\$")


def money(amount: float, currency: str) -> str:
    # The core PDF fonts cannot draw most currency symbols
    symbol = clean_text(currency) or "Rs."
    return f"{symbol} {amount:,.2f}"


def budget_line(summary: LedgerSummary, currency: str) -> str:
    budget = summary.budget
    if budget.state == BudgetState.NO_LIMIT:
        return "No monthly limit set"
    limit = money(budget.limit, currency)
    if budget.state == BudgetState.OVER_BUDGET:
        return f"Over Budget! ({budget.raw_percent:.0f}%) - Limit: {limit}"
    if budget.state == BudgetState.WARNING:
        return f"Warning: {budget.percent_used:.0f}% Used - Limit: {limit}"
    return f"Spending: {budget.percent_used:.0f}% - Limit: {limit}"


def summary_page(summary: LedgerSummary, currency: str, generated: datetime) -> Figure:
    """First page: totals, budget, monthly summary, and both charts."""
    fig = plt.figure(figsize=PAGE_SIZE)
    fig.suptitle("Expense Tracker Report", fontsize=18, fontweight="bold", y=0.97)
    fig.text(0.5, 0.935, f"Generated {generated:%Y-%m-%d %H:%M}", ha="center", fontsize=9, color="#666")

    totals = summary.totals
    monthly = summary.monthly
    lines = [
        ("Total Income", money(totals.income, currency)),
        ("Total Expense", money(totals.expense, currency)),
        ("Balance", money(totals.balance, currency)),
        ("Budget", budget_line(summary, currency)),
        (
            f"This Month ({monthly.year}-{monthly.month:02d})",
            f"{money(monthly.total_expense, currency)} spent, "
            f"{money(monthly.daily_average_expense, currency)} per day, "
            f"top: {clean_text(monthly.top_category) if monthly.top_category else '-'}",
        ),
    ]
    for index, (label, value) in enumerate(lines):
        y = 0.89 - index * 0.03
        fig.text(0.08, y, label, fontsize=10, fontweight="bold")
        fig.text(0.38, y, value, fontsize=10)

    bar = fig.add_axes((0.08, 0.715, 0.84, 0.015))
    bar.barh([0], [100], color="#eeeeee")
    bar.barh([0], [summary.budget.percent_used], color=BUDGET_COLORS[summary.budget.state])
    bar.set_xlim(0, 100)
    bar.axis("off")

    pie = fig.add_axes((0.1, 0.38, 0.8, 0.3))
    pie.set_title("Expenses by Category", fontsize=12)
    if summary.breakdown:
        labels = [clean_text(name) for name in summary.breakdown]
        pie.pie(
            list(summary.breakdown.values()),
            labels=labels,
            colors=[PIE_COLORS[i % len(PIE_COLORS)] for i in range(len(labels))],
            autopct="%1.0f%%",
            wedgeprops={"width": 0.32, "edgecolor": "white", "linewidth": 2},
            textprops={"fontsize": 8},
        )
        pie.text(0, 0, money(totals.expense, currency), ha="center", va="center", fontsize=9, fontweight="bold")
    else:
        pie.text(0.5, 0.5, "No data", ha="center", va="center", fontsize=12, color="#999")
        pie.axis("off")
    pie.set_aspect("equal")

    line = fig.add_axes((0.1, 0.06, 0.84, 0.26))
    line.set_title("Balance Over Time", fontsize=12)
    if summary.series:
        x = list(range(len(summary.series)))
        y = [point.balance for point in summary.series]
        line.plot(x, y, color="#2a9d8f", linewidth=2, marker="o", markersize=3)
        line.fill_between(x, y, alpha=0.15, color="#2a9d8f")
        step = max(1, len(x) // 8)
        line.set_xticks(x[::step])
        line.set_xticklabels([summary.series[i].date for i in x[::step]], rotation=30, fontsize=7)
        line.grid(axis="y", color="#eeeeee")
    else:
        line.text(0.5, 0.5, "No data", ha="center", va="center", fontsize=12, color="#999")
        line.axis("off")

    return fig


def table_pages(transactions: Sequence[Transaction], currency: str) -> list[Figure]:
    """Transaction table split over as many pages as needed."""
    pages: list[Figure] = []
    for start in range(0, len(transactions), ROWS_PER_PAGE):
        chunk = transactions[start : start + ROWS_PER_PAGE]
        fig = plt.figure(figsize=PAGE_SIZE)
        ax = fig.add_axes((0.05, 0.05, 0.9, 0.88))
        ax.axis("off")
        ax.set_title("Transactions", fontsize=14, fontweight="bold", loc="left")

        rows = [
            [
                txn.date,
                clean_text(txn.description[:40]),
                clean_text(txn.category),
                txn.type.title(),
                ("+" if txn.type == "income" else "-") + money(txn.amount, currency),
            ]
            for txn in chunk
        ]
        table = ax.table(
            cellText=rows,
            colLabels=["Date", "Description", "Category", "Type", "Amount"],
            colWidths=[0.14, 0.38, 0.18, 0.1, 0.2],
            loc="upper center",
            cellLoc="left",
        )
        table.auto_set_font_size(False)
        table.set_fontsize(8)
        table.scale(1, 1.3)
        for (row, _), cell in table.get_celld().items():
            if row == 0:
                cell.set_facecolor("#2a9d8f")
                cell.set_text_props(color="white", fontweight="bold")
        pages.append(fig)
    return pages


def write_report(
    path: Path,
    summary: LedgerSummary,
    transactions: Sequence[Transaction],
    currency: str,
    generated: datetime,
) -> Path:
    """Write the PDF report.

    Args:
        path: Output file.
        summary: Figures for the summary page.
        transactions: Rows for the table, in display order.
        currency: Currency symbol.
        generated: Timestamp printed on the first page.

    Returns:
        The path written.

    Raises:
        EmptyExport: If there are no transactions to list.
    """
    if not transactions:
        raise EmptyExport("No transactions to download")

    path.parent.mkdir(parents=True, exist_ok=True)
    figures = [summary_page(summary, currency, generated), *table_pages(transactions, currency)]
    try:
        with PdfPages(path) as pdf:
            for fig in figures:
                pdf.savefig(fig)
    finally:
        for fig in figures:
            plt.close(fig)
    return path
