"""Pure functions for the global spending limit.

This module contains the functional core for budget operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test
"""

import math
from dataclasses import dataclass
from typing import Any

# Spending above this share of the limit (in percent) raises a warning
WARNING_THRESHOLD = 80.0


class BudgetState:
    """Possible outcomes of a budget check."""

    NO_LIMIT = "no-limit"
    UNDER_WARNING_THRESHOLD = "under-warning-threshold"
    WARNING = "warning"
    OVER_BUDGET = "over-budget"


@dataclass(frozen=True)
class BudgetStatus:
    """Immutable budget status.

    percent_used is capped at 100 for progress bars; raw_percent is not.
    """

    state: str
    percent_used: float
    raw_percent: float
    limit: float
    spent: float


def compute_budget_status(expense_total: float, limit: float | None) -> BudgetStatus:
    """Compare total spending against the limit.

    Args:
        expense_total: Sum of expense amounts.
        limit: Spending limit; None or a value <= 0 means no limit.

    Returns:
        BudgetStatus with the capped percentage and the resulting state.
    """
    if limit is None or limit <= 0:
        return BudgetStatus(
            state=BudgetState.NO_LIMIT,
            percent_used=0.0,
            raw_percent=0.0,
            limit=0.0,
            spent=expense_total,
        )

    raw_percent = expense_total / limit * 100
    percent_used = min(raw_percent, 100.0)

    if expense_total > limit:
        state = BudgetState.OVER_BUDGET
    elif percent_used > WARNING_THRESHOLD:
        state = BudgetState.WARNING
    else:
        state = BudgetState.UNDER_WARNING_THRESHOLD

    return BudgetStatus(
        state=state,
        percent_used=percent_used,
        raw_percent=raw_percent,
        limit=limit,
        spent=expense_total,
    )


def parse_budget_limit(value: Any) -> float:
    """Parse a stored or entered budget limit.

    Args:
        value: Number or numeric string. None and "" mean no limit.

    Returns:
        The limit, with 0.0 meaning no limit.

    Raises:
        ValueError: If the value is not a finite, non-negative number.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"Invalid budget limit: {value!r}")
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        value = float(value.strip())
    if not isinstance(value, (int, float)):
        raise ValueError(f"Invalid budget limit: {value!r}")
    try:
        limit = float(value)
    except OverflowError as e:
        raise ValueError(f"Budget limit is too large: {value!r}") from e
    if not math.isfinite(limit) or limit < 0:
        raise ValueError(f"Budget limit must be a positive number, got {value!r}")
    return limit
