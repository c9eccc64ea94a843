"""Pure functions for summary figures and chart series.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Everything is recomputed from the full snapshot on each call.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from spendlog.domain.budget import BudgetStatus, compute_budget_status
from spendlog.domain.models import CategoryName, IsoDate, TransactionType
from spendlog.domain.query import sort_by_date_asc
from spendlog.domain.transactions import Transaction


@dataclass(frozen=True)
class Totals:
    """Immutable income, expense, and balance totals."""

    income: float
    expense: float
    balance: float


@dataclass(frozen=True)
class BalancePoint:
    """Cumulative balance at the end of a day."""

    date: IsoDate
    balance: float


@dataclass(frozen=True)
class MonthlySummary:
    """Immutable expense summary for one calendar month."""

    year: int
    month: int
    total_expense: float
    daily_average_expense: float
    top_category: CategoryName | None


@dataclass(frozen=True)
class LedgerSummary:
    """Everything the dashboard and the PDF report show, from one snapshot."""

    totals: Totals
    budget: BudgetStatus
    breakdown: dict[CategoryName, float]
    series: list[BalancePoint]
    monthly: MonthlySummary


def totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum income and expense amounts.

    Returns:
        Totals with balance = income - expense; all zeros for no transactions.
    """
    income = 0.0
    expense = 0.0
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return Totals(income=income, expense=expense, balance=income - expense)


def category_breakdown(transactions: Iterable[Transaction]) -> dict[CategoryName, float]:
    """Total expense amount per category.

    Keys appear in the order each category is first seen, walking the
    transactions oldest first (ties by id), so identical input always gives
    identical ordering.
    """
    breakdown: dict[CategoryName, float] = {}
    for txn in sort_by_date_asc(transactions):
        if txn.type != TransactionType.EXPENSE:
            continue
        breakdown[txn.category] = breakdown.get(txn.category, 0.0) + txn.amount
    return breakdown


def running_balance_series(transactions: Iterable[Transaction]) -> list[BalancePoint]:
    """Cumulative balance per date, oldest first.

    When several transactions share a date only the balance after the last
    of them is kept for that date.
    """
    by_date: dict[IsoDate, float] = {}
    running = 0.0
    for txn in sort_by_date_asc(transactions):
        running += txn.signed_amount
        by_date[txn.date] = running
    return [BalancePoint(date=day, balance=balance) for day, balance in by_date.items()]


def monthly_summary(transactions: Iterable[Transaction], month: int, year: int) -> MonthlySummary:
    """Summarize expenses for one calendar month.

    Args:
        transactions: Transactions to consider.
        month: Month number (1-12).
        year: Four digit year.

    Returns:
        MonthlySummary. The daily average divides by the number of distinct
        dates with an expense; top_category is None when there are none.
    """
    prefix = f"{year:04d}-{month:02d}-"
    monthly = [t for t in transactions if t.type == TransactionType.EXPENSE and t.date.startswith(prefix)]

    if not monthly:
        return MonthlySummary(year=year, month=month, total_expense=0.0, daily_average_expense=0.0, top_category=None)

    total = sum(t.amount for t in monthly)
    days = len({t.date for t in monthly})

    by_category = category_breakdown(monthly)
    # sorted() is stable, so equal sums keep first-seen order
    ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)

    return MonthlySummary(
        year=year,
        month=month,
        total_expense=total,
        daily_average_expense=total / days,
        top_category=ranked[0][0],
    )


def build_summary(
    transactions: Iterable[Transaction],
    budget_limit: float | None,
    today: date,
    aggregate_over: Iterable[Transaction] | None = None,
) -> LedgerSummary:
    """Compute every summary figure from one snapshot.

    Args:
        transactions: Every transaction in the store.
        budget_limit: Global spending limit (0 or None for no limit).
        today: Reference date for the monthly summary.
        aggregate_over: Optional filtered view. When given, totals, budget
            status, breakdown, and the monthly summary use it instead of the
            full set. The running balance series always covers everything.

    Returns:
        LedgerSummary.
    """
    everything = list(transactions)
    scope = everything if aggregate_over is None else list(aggregate_over)

    scope_totals = totals(scope)
    return LedgerSummary(
        totals=scope_totals,
        budget=compute_budget_status(scope_totals.expense, budget_limit),
        breakdown=category_breakdown(scope),
        series=running_balance_series(everything),
        monthly=monthly_summary(scope, today.month, today.year),
    )
