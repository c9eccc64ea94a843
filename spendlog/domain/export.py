"""CSV formatting for exports."""

from collections.abc import Iterable
from datetime import date

from spendlog.domain.transactions import Transaction

CSV_HEADER = ("id", "date", "description", "category", "type", "amount")

BOM = "\ufeff"


def quote_description(description: str) -> str:
    """Wrap in double quotes, doubling any quote inside."""
    return '"' + description.replace('"', '""') + '"'


def quote_field(value: str) -> str:
    """Quote a field only when it holds a separator, a quote, or a line break."""
    if any(ch in value for ch in ',"\r\n'):
        return quote_description(value)
    return value


def format_amount(amount: float) -> str:
    """Render an amount without a trailing .0 for whole numbers."""
    return str(int(amount)) if float(amount).is_integer() else repr(float(amount))


def format_csv(transactions: Iterable[Transaction], bom: bool = False) -> str:
    """Render transactions as CSV, one row each, in the order given.

    Args:
        transactions: Rows to write, already in display order.
        bom: Prefix a UTF-8 byte order mark so spreadsheet apps detect the encoding.

    Returns:
        CSV text with rows separated by newlines.
    """
    lines = [",".join(CSV_HEADER)]
    for txn in transactions:
        row = (
            str(txn.id),
            txn.date,
            quote_description(txn.description),
            quote_field(txn.category),
            txn.type,
            format_amount(txn.amount),
        )
        lines.append(",".join(row))
    content = "\n".join(lines)
    return BOM + content if bom else content


def export_filename(extension: str, today: date) -> str:
    """Default export file name, e.g. expense_tracker_2025-01-31.csv."""
    return f"expense_tracker_{today.isoformat()}.{extension}"
