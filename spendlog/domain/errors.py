"""Errors raised by the ledger engine.

All of them are recoverable: the operation that raised left the ledger
unchanged, and the caller decides how to report it.
"""


class LedgerError(Exception):
    """Base class for ledger errors."""


class InvalidInput(LedgerError):
    """One or more fields failed validation."""

    def __init__(self, fields: list[str], message: str | None = None) -> None:
        self.fields = list(fields)
        super().__init__(message or f"Invalid value for: {', '.join(self.fields)}")


class NotFound(LedgerError):
    """A transaction id or category name does not exist."""


class DuplicateError(LedgerError):
    """A category with the same name already exists for the type."""


class ProtectedCategoryError(LedgerError):
    """Default categories cannot be removed."""


class MalformedBackup(LedgerError):
    """Restore or import data is unparseable or ill-shaped."""


class CorruptPersistedState(LedgerError):
    """A persisted key holds data that cannot be loaded."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Stored '{key}' is unreadable: {reason}")


class EmptyExport(LedgerError):
    """There are no transactions to export."""
