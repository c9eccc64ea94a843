"""Date utilities for spendlog.

Pure functions for date range calculations and formatting.
"""

import calendar
from datetime import date, timedelta

DATE_PRESETS = ("this-month", "last-month", "last-30-days")


def month_bounds(year: int, month: int) -> tuple[date, date, str]:
    """Calculate the first day, last day, and label of a month.

    Args:
        year: Four digit year.
        month: Month number (1-12).

    Returns:
        Tuple of (first_day, last_day, label) where label is e.g. "January 2025".

    Raises:
        ValueError: If the month number is out of range.
    """
    last_day = calendar.monthrange(year, month)[1]
    first = date(year, month, 1)
    return first, date(year, month, last_day), first.strftime("%B %Y")


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def date_preset(name: str, today: date) -> tuple[date, date, str]:
    """Resolve a named date range relative to today.

    Args:
        name: One of "this-month", "last-month", "last-30-days".
        today: The reference date.

    Returns:
        Tuple of (date_from, date_to, label), both bounds inclusive.

    Raises:
        ValueError: If the preset name is unknown.
    """
    if name == "this-month":
        first, last, _ = month_bounds(today.year, today.month)
        return first, last, "This Month"
    if name == "last-month":
        first, last, _ = month_bounds(*previous_month(today.year, today.month))
        return first, last, "Last Month"
    if name == "last-30-days":
        return today - timedelta(days=30), today, "Last 30 Days"
    raise ValueError(f"Unknown date range '{name}' (expected one of: {', '.join(DATE_PRESETS)})")
