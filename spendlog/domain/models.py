"""Domain type definitions for spendlog.

These NewTypes provide semantic clarity and help with type checking:
- Amount: Currency magnitude, always positive (direction comes from the type)
- IsoDate: Calendar date in YYYY-MM-DD format
- CategoryName: Name of a transaction category
- Description: Transaction description text
"""

from typing import NewType

# Amounts are magnitudes; income adds to the balance and expenses subtract
Amount = NewType("Amount", float)

# Dates are always in YYYY-MM-DD format (e.g., "2025-01-31")
IsoDate = NewType("IsoDate", str)

# Category name for transaction categories
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)


class TransactionType:
    """The closed set of transaction types."""

    EXPENSE = "expense"
    INCOME = "income"

    ALL = (EXPENSE, INCOME)
