"""Storage layer - provides persistence for the application.

This module re-exports the public storage functions for easy importing.
"""

from spendlog.store.kv import KeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from spendlog.store.schema import database_exists, get_db_path, init_database
from spendlog.store.state import (
    LoadedState,
    load_state,
    save_budget_limit,
    save_categories,
    save_theme,
    save_transactions,
)

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Backends
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqliteKeyValueStore",
    # State
    "LoadedState",
    "load_state",
    "save_budget_limit",
    "save_categories",
    "save_theme",
    "save_transactions",
]
