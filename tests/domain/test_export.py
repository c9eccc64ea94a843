"""Tests for spendlog.domain.export."""

from datetime import date

from spendlog.domain.export import BOM, export_filename, format_amount, format_csv, quote_description, quote_field
from spendlog.domain.transactions import Transaction


class TestFormatCsv:
    """Tests for format_csv."""

    def test_header_and_rows_in_given_order(self) -> None:
        """Should write the header then one row per transaction."""
        txns = [
            Transaction(id=2, description="Salary", amount=900.0, category="Part-Time Job", date="2024-01-02", type="income"),
            Transaction(id=1, description="Lunch", amount=12.5, category="Food", date="2024-01-01", type="expense"),
        ]

        assert format_csv(txns).split("\n") == [
            "id,date,description,category,type,amount",
            '2,2024-01-02,"Salary",Part-Time Job,income,900',
            '1,2024-01-01,"Lunch",Food,expense,12.5',
        ]

    def test_category_with_comma_stays_in_its_column(self) -> None:
        """Should quote a category that contains a comma."""
        txn = Transaction(id=3, description="Flat", amount=800.0, category="Rent, shared", date="2024-01-03", type="expense")

        assert format_csv([txn]).split("\n")[1] == '3,2024-01-03,"Flat","Rent, shared",expense,800'

    def test_bom_prefix(self) -> None:
        """Should start with a byte order mark when asked."""
        assert format_csv([], bom=True) == BOM + "id,date,description,category,type,amount"
        assert not format_csv([]).startswith(BOM)


class TestQuoteDescription:
    """Tests for quote_description."""

    def test_doubles_inner_quotes(self) -> None:
        """Should escape embedded quotes by doubling them."""
        assert quote_description('Pens "gel", blue') == '"Pens ""gel"", blue"'


class TestFormatAmount:
    """Tests for format_amount."""

    def test_whole_and_fractional(self) -> None:
        """Should drop .0 only for whole amounts."""
        assert format_amount(100.0) == "100"
        assert format_amount(0.25) == "0.25"


class TestExportFilename:
    """Tests for export_filename."""

    def test_uses_date(self) -> None:
        """Should embed today's ISO date."""
        assert export_filename("csv", date(2025, 1, 31)) == "expense_tracker_2025-01-31.csv"


class TestQuoteField:
    """Tests for quote_field."""

    def test_plain_value_is_bare(self) -> None:
        """Should leave values without separators unquoted."""
        assert quote_field("Food") == "Food"

    def test_quote_is_doubled(self) -> None:
        """Should quote and double embedded quotes."""
        assert quote_field('Say "hi"') == '"Say ""hi"""'
