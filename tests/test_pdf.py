"""Tests for spendlog.pdf."""

from datetime import date, datetime
from pathlib import Path

import pytest

from spendlog.domain.errors import EmptyExport
from spendlog.domain.report import build_summary
from spendlog.domain.transactions import Transaction
from spendlog.pdf import clean_text, write_report

TRANSACTIONS = [
    Transaction(id=i, description=f"Item {i} 🍕", amount=10.0 * i, category="Food", date=f"2024-01-{i:02d}", type="expense")
    for i in range(1, 41)
]


class TestCleanText:
    """Tests for clean_text."""

    def test_strips_non_ascii(self) -> None:
        """Should drop emoji and currency symbols."""
        assert clean_text("Pizza 🍕 ₹") == "Pizza  "

    def test_escapes_dollar_signs(self) -> None:
        """Should escape dollars so they print literally."""
        assert clean_text("Deal $5") == r"Deal \$5"


class TestWriteReport:
    """Tests for write_report."""

    def test_writes_pdf(self, tmp_path: Path) -> None:
        """Should produce a PDF file spanning more than one table page."""
        summary = build_summary(TRANSACTIONS, 500, date(2024, 1, 31))
        path = tmp_path / "report.pdf"

        write_report(path, summary, TRANSACTIONS, "₹", datetime(2024, 2, 1, 9, 30))

        assert path.read_bytes().startswith(b"%PDF")

    def test_empty_raises(self, tmp_path: Path) -> None:
        """Should refuse to write a report with no transactions."""
        summary = build_summary([], 0, date(2024, 1, 31))

        with pytest.raises(EmptyExport):
            write_report(tmp_path / "report.pdf", summary, [], "₹", datetime(2024, 2, 1))

        assert not (tmp_path / "report.pdf").exists()

    def test_dollar_text_and_currency(self, tmp_path: Path) -> None:
        """Should write descriptions and currency symbols containing dollars."""
        txns = [Transaction(id=1, description="Deal $^$ today", amount=5.0, category="Food", date="2024-01-02", type="expense")]
        summary = build_summary(txns, 100, date(2024, 1, 31))
        path = tmp_path / "report.pdf"

        write_report(path, summary, txns, "$", datetime(2024, 2, 1))

        assert path.read_bytes().startswith(b"%PDF")
