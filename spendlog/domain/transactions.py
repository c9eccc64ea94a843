"""Transaction records and the transaction store.

This module contains the functional core for transaction operations:
- Validation of raw input into well-formed records
- Monotonic id allocation
- The in-memory store with create/update/delete/replace operations
- Change notification for whoever renders or persists the store

No I/O happens here; persistence subscribes to the store from the outside.
"""

import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any

from spendlog.domain.errors import InvalidInput, MalformedBackup, NotFound
from spendlog.domain.models import Amount, CategoryName, Description, IsoDate, TransactionType

ChangeListener = Callable[[str], None]

RECORD_FIELDS = ("id", "description", "amount", "category", "date", "type")


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data."""

    id: int
    description: Description
    amount: Amount
    category: CategoryName
    date: IsoDate
    type: str

    @property
    def signed_amount(self) -> float:
        """Effect of this transaction on the balance."""
        return self.amount if self.type == TransactionType.INCOME else -self.amount


@dataclass(frozen=True)
class TransactionInput:
    """Raw transaction fields as entered, before validation."""

    description: Any
    amount: Any
    category: Any
    date: Any
    type: Any = TransactionType.EXPENSE


@dataclass(frozen=True)
class ValidFields:
    """Validated, normalized transaction fields (everything except the id)."""

    description: Description
    amount: Amount
    category: CategoryName
    date: IsoDate
    type: str


def parse_iso_date(value: Any) -> IsoDate | None:
    """Normalize a date value to YYYY-MM-DD.

    Args:
        value: A date, datetime, or YYYY-MM-DD string.

    Returns:
        The ISO date string, or None if the value is not a real calendar date.
    """
    if isinstance(value, datetime):
        return IsoDate(value.date().isoformat())
    if isinstance(value, date):
        return IsoDate(value.isoformat())
    if not isinstance(value, str):
        return None
    try:
        return IsoDate(datetime.strptime(value.strip(), "%Y-%m-%d").date().isoformat())
    except ValueError:
        return None


def parse_amount(value: Any) -> Amount | None:
    """Parse an amount, accepting numbers and numeric strings.

    Returns:
        The amount as a float, or None if it is not a finite number above zero.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    try:
        amount = float(value)
    except OverflowError:
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return Amount(amount)


def validate_input(data: TransactionInput) -> ValidFields:
    """Validate raw input and return normalized fields.

    Args:
        data: Raw transaction input.

    Returns:
        ValidFields with trimmed text, float amount, and ISO date.

    Raises:
        InvalidInput: Listing every field that failed.
    """
    failed: list[str] = []

    description = data.description.strip() if isinstance(data.description, str) else ""
    if not description:
        failed.append("description")

    amount = parse_amount(data.amount)
    if amount is None:
        failed.append("amount")

    category = data.category.strip() if isinstance(data.category, str) else ""
    if not category:
        failed.append("category")

    iso_date = parse_iso_date(data.date)
    if iso_date is None:
        failed.append("date")

    if data.type not in TransactionType.ALL:
        failed.append("type")

    if failed:
        raise InvalidInput(failed)

    assert amount is not None and iso_date is not None
    return ValidFields(
        description=Description(description),
        amount=amount,
        category=CategoryName(category),
        date=iso_date,
        type=data.type,
    )


def build_transaction(txn_id: int, data: TransactionInput) -> Transaction:
    """Validate input and build a transaction with the given id."""
    fields = validate_input(data)
    return Transaction(
        id=txn_id,
        description=fields.description,
        amount=fields.amount,
        category=fields.category,
        date=fields.date,
        type=fields.type,
    )


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Convert a transaction to a JSON-ready dictionary."""
    return {
        "id": txn.id,
        "description": txn.description,
        "amount": txn.amount,
        "category": txn.category,
        "date": txn.date,
        "type": txn.type,
    }


def transaction_from_dict(record: Any) -> Transaction:
    """Build a transaction from a stored or imported record.

    Args:
        record: Mapping with the fields of a transaction.

    Returns:
        The validated transaction.

    Raises:
        ValueError: If the record is not a mapping, has a bad id, or fails validation.
    """
    if not isinstance(record, Mapping):
        raise ValueError("record is not an object")

    raw_id = record.get("id")
    if isinstance(raw_id, float) and raw_id.is_integer():
        raw_id = int(raw_id)
    if isinstance(raw_id, bool) or not isinstance(raw_id, int):
        raise ValueError(f"record has an invalid id: {raw_id!r}")

    data = TransactionInput(
        description=record.get("description"),
        amount=record.get("amount"),
        category=record.get("category"),
        date=record.get("date"),
        type=record.get("type"),
    )
    try:
        return build_transaction(raw_id, data)
    except InvalidInput as e:
        raise ValueError(f"record {raw_id} is invalid: {', '.join(e.fields)}") from e


def parse_records(records: Any) -> list[Transaction]:
    """Validate a sequence of records as a whole.

    Raises:
        MalformedBackup: If the input is not a list, any record is invalid,
            or two records share an id.
    """
    if not isinstance(records, list):
        raise MalformedBackup("transactions must be a list")

    parsed: list[Transaction] = []
    seen: set[int] = set()
    for index, record in enumerate(records):
        try:
            txn = transaction_from_dict(record)
        except ValueError as e:
            raise MalformedBackup(f"transaction #{index + 1}: {e}") from e
        if txn.id in seen:
            raise MalformedBackup(f"transaction #{index + 1}: duplicate id {txn.id}")
        seen.add(txn.id)
        parsed.append(txn)
    return parsed


class IdAllocator:
    """Monotonic id counter; an id is never handed out twice."""

    def __init__(self, last: int = 0) -> None:
        self._last = last

    @property
    def last(self) -> int:
        return self._last

    def next(self) -> int:
        self._last += 1
        return self._last

    def advance_past(self, value: int) -> None:
        """Make sure future ids are greater than value."""
        if value > self._last:
            self._last = value


class TransactionStore:
    """The collection of transactions owned by the ledger.

    The store has no meaningful order; consumers sort what they display.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._items: dict[int, Transaction] = {}
        self._ids = IdAllocator()
        self._listeners: list[ChangeListener] = []
        for txn in transactions:
            if txn.id in self._items:
                raise MalformedBackup(f"duplicate id {txn.id}")
            self._items[txn.id] = txn
            self._ids.advance_past(txn.id)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items.values()))

    def all(self) -> list[Transaction]:
        """Return a snapshot of every transaction."""
        return list(self._items.values())

    def find_by_id(self, txn_id: int) -> Transaction | None:
        return self._items.get(txn_id)

    def add(self, data: TransactionInput) -> Transaction:
        """Validate and insert a new transaction.

        Raises:
            InvalidInput: If any field fails validation. Nothing is inserted.
        """
        fields = validate_input(data)
        txn = Transaction(id=self._ids.next(), **vars(fields))
        self._items[txn.id] = txn
        self._notify("add")
        return txn

    def update(self, txn_id: int, data: TransactionInput) -> Transaction:
        """Replace every mutable field of an existing transaction.

        Raises:
            NotFound: If no transaction has this id.
            InvalidInput: If any field fails validation.
        """
        current = self._items.get(txn_id)
        if current is None:
            raise NotFound(f"Transaction {txn_id} not found")
        fields = validate_input(data)
        updated = replace(current, **vars(fields))
        self._items[txn_id] = updated
        self._notify("update")
        return updated

    def remove(self, txn_id: int) -> Transaction:
        """Remove a transaction and return it.

        Raises:
            NotFound: If no transaction has this id (including one already removed).
        """
        txn = self._items.pop(txn_id, None)
        if txn is None:
            raise NotFound(f"Transaction {txn_id} not found")
        self._notify("remove")
        return txn

    def clear(self) -> None:
        self._items.clear()
        self._notify("clear")

    def replace_all(self, records: Any) -> None:
        """Replace the whole store from raw records, all or nothing.

        Raises:
            MalformedBackup: If any record is ill-shaped. The store is untouched.
        """
        parsed = parse_records(records)
        self._items = {txn.id: txn for txn in parsed}
        for txn in parsed:
            self._ids.advance_past(txn.id)
        self._notify("replace")

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event)
