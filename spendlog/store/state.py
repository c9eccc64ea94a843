"""Load and save ledger state through a key-value store.

Each key is read once at startup. Bad data under a key never stops the
ledger from starting: the key falls back to its default and the problem is
logged and reported back to the caller.
"""

import json
import logging
from dataclasses import dataclass, field

from spendlog.domain.budget import parse_budget_limit
from spendlog.domain.categories import CategoryRegistry
from spendlog.domain.errors import CorruptPersistedState, MalformedBackup
from spendlog.domain.transactions import Transaction, parse_records, transaction_to_dict
from spendlog.store.kv import KeyValueStore

logger = logging.getLogger(__name__)

TRANSACTIONS_KEY = "transactions"
CATEGORIES_KEY = "customCategories"
BUDGET_LIMIT_KEY = "budgetLimit"
THEME_KEY = "theme"

THEMES = ("light", "dark")
DEFAULT_THEME = "light"


@dataclass
class LoadedState:
    """State read from storage, plus any keys that had to be reset."""

    transactions: list[Transaction] = field(default_factory=list)
    registry: CategoryRegistry = field(default_factory=CategoryRegistry)
    budget_limit: float = 0.0
    theme: str = DEFAULT_THEME
    problems: list[CorruptPersistedState] = field(default_factory=list)


def _corrupt(state: LoadedState, key: str, reason: str) -> None:
    problem = CorruptPersistedState(key, reason)
    logger.warning("%s; falling back to default", problem)
    state.problems.append(problem)


def load_state(kv: KeyValueStore) -> LoadedState:
    """Read every ledger key, falling back to defaults for unusable data.

    Args:
        kv: The persistence collaborator.

    Returns:
        LoadedState; problems lists the keys that were reset.
    """
    state = LoadedState()

    raw = kv.get(TRANSACTIONS_KEY)
    if raw:
        try:
            state.transactions = parse_records(json.loads(raw))
        except json.JSONDecodeError as e:
            _corrupt(state, TRANSACTIONS_KEY, f"invalid JSON ({e.msg})")
        except ValueError as e:
            _corrupt(state, TRANSACTIONS_KEY, f"invalid JSON ({e})")
        except MalformedBackup as e:
            _corrupt(state, TRANSACTIONS_KEY, str(e))

    raw = kv.get(CATEGORIES_KEY)
    if raw:
        try:
            state.registry = CategoryRegistry.from_mapping(json.loads(raw))
        except json.JSONDecodeError as e:
            _corrupt(state, CATEGORIES_KEY, f"invalid JSON ({e.msg})")
        except ValueError as e:
            _corrupt(state, CATEGORIES_KEY, str(e))

    raw = kv.get(BUDGET_LIMIT_KEY)
    if raw:
        try:
            state.budget_limit = parse_budget_limit(raw)
        except ValueError as e:
            _corrupt(state, BUDGET_LIMIT_KEY, str(e))

    raw = kv.get(THEME_KEY)
    if raw:
        if raw in THEMES:
            state.theme = raw
        else:
            _corrupt(state, THEME_KEY, f"unknown theme {raw!r}")

    logger.debug(
        "Loaded %d transactions, budget limit %s, theme %s",
        len(state.transactions),
        state.budget_limit,
        state.theme,
    )
    return state


def save_transactions(kv: KeyValueStore, transactions: list[Transaction]) -> None:
    kv.set(TRANSACTIONS_KEY, json.dumps([transaction_to_dict(t) for t in transactions], ensure_ascii=False))


def save_categories(kv: KeyValueStore, registry: CategoryRegistry) -> None:
    kv.set(CATEGORIES_KEY, json.dumps(registry.to_mapping(), ensure_ascii=False))


def save_budget_limit(kv: KeyValueStore, limit: float) -> None:
    """Write the limit, or remove the key when there is no limit."""
    if limit > 0:
        kv.set(BUDGET_LIMIT_KEY, str(limit))
    else:
        kv.remove(BUDGET_LIMIT_KEY)


def save_theme(kv: KeyValueStore, theme: str) -> None:
    kv.set(THEME_KEY, theme)
