"""The ledger: transactions, categories, and budget limit behind one object.

Ledger is the explicit context every command works through. It is loaded
once from a key-value store, persists the affected key after each
mutation, and tells subscribers what changed so they can recompute
whatever they display.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from spendlog.domain.backup import Backup, build_backup, parse_backup, parse_backup_text
from spendlog.domain.budget import parse_budget_limit
from spendlog.domain.errors import CorruptPersistedState, InvalidInput
from spendlog.domain.models import CategoryName
from spendlog.domain.query import Query, query, sort_by_date_desc
from spendlog.domain.report import LedgerSummary, build_summary
from spendlog.domain.transactions import Transaction, TransactionInput, TransactionStore, transaction_to_dict
from spendlog.store.kv import KeyValueStore
from spendlog.store.state import (
    THEMES,
    LoadedState,
    load_state,
    save_budget_limit,
    save_categories,
    save_theme,
    save_transactions,
)

logger = logging.getLogger(__name__)

# Events passed to ledger subscribers
TRANSACTIONS_CHANGED = "transactions"
CATEGORIES_CHANGED = "categories"
BUDGET_CHANGED = "budget"
THEME_CHANGED = "theme"

LedgerListener = Callable[[str], None]


class Ledger:
    """Engine context owning the store, the category registry, and the budget limit."""

    def __init__(self, kv: KeyValueStore, state: LoadedState | None = None) -> None:
        state = state or LoadedState()
        self.kv = kv
        self.store = TransactionStore(state.transactions)
        self.registry = state.registry
        self.budget_limit = state.budget_limit
        self.theme = state.theme
        self.problems: list[CorruptPersistedState] = list(state.problems)
        self._listeners: list[LedgerListener] = []
        self.store.subscribe(self._on_store_change)

    @classmethod
    def load(cls, kv: KeyValueStore) -> "Ledger":
        """Read persisted state and build a ledger. Never fails on bad stored data."""
        return cls(kv, load_state(kv))

    def subscribe(self, listener: LedgerListener) -> Callable[[], None]:
        """Register a listener called with the name of whatever changed.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _on_store_change(self, action: str) -> None:
        logger.debug("Store %s; saving %d transactions", action, len(self.store))
        save_transactions(self.kv, self.store.all())
        self._emit(TRANSACTIONS_CHANGED)

    # Transactions

    @property
    def transactions(self) -> list[Transaction]:
        return self.store.all()

    def find(self, txn_id: int) -> Transaction | None:
        return self.store.find_by_id(txn_id)

    def add(self, data: TransactionInput) -> Transaction:
        txn = self.store.add(data)
        logger.info("Added transaction %d (%s %.2f)", txn.id, txn.type, txn.amount)
        return txn

    def update(self, txn_id: int, data: TransactionInput) -> Transaction:
        txn = self.store.update(txn_id, data)
        logger.info("Updated transaction %d", txn_id)
        return txn

    def remove(self, txn_id: int) -> Transaction:
        txn = self.store.remove(txn_id)
        logger.info("Deleted transaction %d", txn_id)
        return txn

    def clear(self) -> None:
        count = len(self.store)
        self.store.clear()
        logger.info("Cleared %d transactions", count)

    # Categories

    def add_category(self, txn_type: str, name: str) -> CategoryName:
        category = self.registry.add_custom(txn_type, name)
        save_categories(self.kv, self.registry)
        self._emit(CATEGORIES_CHANGED)
        return category

    def remove_category(self, txn_type: str, name: str) -> None:
        self.registry.remove_custom(txn_type, name)
        save_categories(self.kv, self.registry)
        self._emit(CATEGORIES_CHANGED)

    # Budget and theme

    def set_budget_limit(self, value: Any) -> float:
        """Set the global spending limit.

        Raises:
            InvalidInput: If the value is not a positive number.
        """
        try:
            limit = parse_budget_limit(value)
        except ValueError as e:
            raise InvalidInput(["budgetLimit"], str(e)) from e
        if limit <= 0:
            raise InvalidInput(["budgetLimit"], "Budget limit must be greater than zero")
        self.budget_limit = limit
        save_budget_limit(self.kv, limit)
        self._emit(BUDGET_CHANGED)
        return limit

    def reset_budget_limit(self) -> bool:
        """Remove the spending limit.

        Returns:
            False if there was no limit to remove.
        """
        if self.budget_limit <= 0:
            return False
        self.budget_limit = 0.0
        save_budget_limit(self.kv, 0.0)
        self._emit(BUDGET_CHANGED)
        return True

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise InvalidInput(["theme"], f"Theme must be one of: {', '.join(THEMES)}")
        self.theme = theme
        save_theme(self.kv, theme)
        self._emit(THEME_CHANGED)

    # Derived views

    def view(self, q: Query | None = None) -> list[Transaction]:
        """The display list: every transaction newest first, or the query result."""
        if q is None:
            return sort_by_date_desc(self.store.all())
        return query(self.store.all(), q)

    def summary(self, today: date, q: Query | None = None) -> LedgerSummary:
        """Summary figures over the full store, or over the query result when given."""
        everything = self.store.all()
        aggregate_over = query(everything, q) if q is not None else None
        return build_summary(everything, self.budget_limit, today, aggregate_over=aggregate_over)

    # Backup and restore

    def backup(self, now: datetime) -> dict[str, Any]:
        return build_backup(self.store.all(), self.registry, self.budget_limit, now)

    def restore(self, data: Any) -> Backup:
        """Replace the ledger with a decoded backup object, all or nothing.

        Raises:
            MalformedBackup: If the backup fails validation. Nothing changes.
        """
        backup = parse_backup(data)
        self._apply(data["transactions"], backup)
        return backup

    def restore_text(self, text: str) -> Backup:
        """Replace the ledger with backup JSON text, all or nothing."""
        backup = parse_backup_text(text)
        self._apply([transaction_to_dict(t) for t in backup.transactions], backup)
        return backup

    def _apply(self, records: list[Any], backup: Backup) -> None:
        self.store.replace_all(records)
        if backup.categories is not None:
            self.registry = backup.categories
            save_categories(self.kv, self.registry)
            self._emit(CATEGORIES_CHANGED)
        if backup.budget_limit is not None:
            self.budget_limit = backup.budget_limit
            save_budget_limit(self.kv, self.budget_limit)
            self._emit(BUDGET_CHANGED)
        logger.info("Restored %d transactions", len(self.store))
