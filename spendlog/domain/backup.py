"""Backup file format: build and validate full-ledger snapshots.

A backup is a JSON object:

    {
      "transactions": [...],
      "categories": {"expense": [...], "income": [...]},
      "budgetLimit": "1500",
      "lastBackup": "2025-01-31T18:20:00+00:00"
    }

Only "transactions" is required. Parsing validates everything before the
caller commits anything.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from spendlog.domain.budget import parse_budget_limit
from spendlog.domain.categories import CategoryRegistry
from spendlog.domain.errors import MalformedBackup
from spendlog.domain.transactions import Transaction, parse_records, transaction_to_dict


@dataclass(frozen=True)
class Backup:
    """Validated backup contents.

    categories and budget_limit are None when the backup does not carry them.
    """

    transactions: list[Transaction]
    categories: CategoryRegistry | None
    budget_limit: float | None
    last_backup: str | None


def build_backup(
    transactions: Iterable[Transaction],
    registry: CategoryRegistry,
    budget_limit: float,
    now: datetime,
) -> dict[str, Any]:
    """Build the backup object for the current ledger."""
    return {
        "transactions": [transaction_to_dict(t) for t in transactions],
        "categories": registry.to_mapping(),
        "budgetLimit": str(budget_limit) if budget_limit > 0 else None,
        "lastBackup": now.isoformat(),
    }


def parse_backup(data: Any) -> Backup:
    """Validate a decoded backup object.

    Raises:
        MalformedBackup: If the object has no transactions list, or any part
            it does carry is ill-shaped.
    """
    if not isinstance(data, dict):
        raise MalformedBackup("Backup must be a JSON object")
    if not isinstance(data.get("transactions"), list):
        raise MalformedBackup("Backup has no 'transactions' list")

    transactions = parse_records(data["transactions"])

    registry = None
    if data.get("categories") is not None:
        try:
            registry = CategoryRegistry.from_mapping(data["categories"])
        except ValueError as e:
            raise MalformedBackup(f"Backup categories are invalid: {e}") from e

    budget_limit = None
    # An empty or zero limit in a backup leaves the current limit alone
    if data.get("budgetLimit"):
        try:
            budget_limit = parse_budget_limit(data["budgetLimit"])
        except ValueError as e:
            raise MalformedBackup(f"Backup budget limit is invalid: {e}") from e

    last_backup = data.get("lastBackup")
    return Backup(
        transactions=transactions,
        categories=registry,
        budget_limit=budget_limit,
        last_backup=last_backup if isinstance(last_backup, str) else None,
    )


def parse_backup_text(text: str) -> Backup:
    """Decode and validate backup JSON text.

    Raises:
        MalformedBackup: If the text is not JSON or fails validation.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedBackup(f"Backup is not valid JSON: {e}") from e
    return parse_backup(data)


def dump_backup(backup: dict[str, Any]) -> str:
    return json.dumps(backup, indent=2, ensure_ascii=False)
