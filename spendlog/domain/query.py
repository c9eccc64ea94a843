"""Filter and sort transactions for display.

Pure functions; the store is never reordered or mutated by a query.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from spendlog.domain.transactions import Transaction

ALL_CATEGORIES = "all"


@dataclass(frozen=True)
class Query:
    """Active filters. Produced by the shell, used once per recomputation."""

    search_text: str = ""
    category: str = ALL_CATEGORIES
    date_from: date | None = None
    date_to: date | None = None

    @property
    def is_empty(self) -> bool:
        return (
            not self.search_text.strip()
            and self.category == ALL_CATEGORIES
            and self.date_from is None
            and self.date_to is None
        )


def matches(txn: Transaction, q: Query) -> bool:
    """Check whether a transaction passes every filter in the query."""
    needle = q.search_text.strip().lower()
    if needle and needle not in txn.description.lower():
        return False
    if q.category != ALL_CATEGORIES and txn.category != q.category:
        return False
    # ISO dates compare correctly as strings
    if q.date_from is not None and txn.date < q.date_from.isoformat():
        return False
    if q.date_to is not None and txn.date > q.date_to.isoformat():
        return False
    return True


def sort_by_date_desc(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Newest first; transactions on the same date are ordered by id, highest first."""
    return sorted(transactions, key=lambda t: (t.date, t.id), reverse=True)


def sort_by_date_asc(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Oldest first; transactions on the same date are ordered by id, lowest first."""
    return sorted(transactions, key=lambda t: (t.date, t.id))


def query(transactions: Iterable[Transaction], q: Query) -> list[Transaction]:
    """Filter transactions and sort the survivors newest first.

    Args:
        transactions: Any collection of transactions (the store or a view).
        q: Filters to apply.

    Returns:
        A new list, sorted by date descending then id descending.
    """
    return sort_by_date_desc(t for t in transactions if matches(t, q))
