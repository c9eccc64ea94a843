"""Domain models and types for spendlog.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from spendlog.domain.models import Amount, CategoryName, Description, IsoDate, TransactionType

__all__ = ["Amount", "CategoryName", "Description", "IsoDate", "TransactionType"]
