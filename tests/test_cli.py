"""End-to-end tests for the spendlog CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from spendlog.cli import app
from spendlog.commands.common import normalize_date

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and data directories at a temporary location."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


def add_lunch(amount: str = "50", day: str = "2024-01-05") -> None:
    result = runner.invoke(app, ["add", "Lunch", amount, "--category", "Food", "--date", day])
    assert result.exit_code == 0, result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_config_and_database(self, isolated_home: Path) -> None:
        """Should write the config file and the database."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0, result.output
        assert (isolated_home / "config" / "spendlog" / "config.toml").exists()
        assert (isolated_home / "data" / "spendlog" / "spendlog.db").exists()

    def test_refuses_to_overwrite(self) -> None:
        """Should fail without --force when a config exists."""
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1


class TestTransactions:
    """Tests for add, list, edit, and delete."""

    def test_add_then_list(self) -> None:
        """Should show the new transaction in the list."""
        add_lunch()

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Lunch" in result.output

    def test_unknown_category_is_rejected(self) -> None:
        """Should refuse categories that are not registered for the type."""
        result = runner.invoke(app, ["add", "Rent", "800", "--category", "Rent"])

        assert result.exit_code == 1
        assert "Unknown expense category" in result.output

    def test_non_positive_amount_is_rejected(self) -> None:
        """Should refuse a zero amount."""
        result = runner.invoke(app, ["add", "Lunch", "0", "--category", "Food"])

        assert result.exit_code == 1

    def test_edit_changes_amount(self) -> None:
        """Should replace the amount and keep the other fields."""
        add_lunch()

        result = runner.invoke(app, ["edit", "1", "--amount", "75"])

        assert result.exit_code == 0, result.output
        assert "75.00" in result.output
        assert "Lunch" in result.output

    def test_delete_missing_id(self) -> None:
        """Should fail for an unknown id."""
        result = runner.invoke(app, ["delete", "99", "--yes"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete_asks_for_confirmation(self) -> None:
        """Should keep the transaction when the prompt is declined."""
        add_lunch()

        result = runner.invoke(app, ["delete", "1"], input="n\n")

        assert "Cancelled" in result.output
        assert "Lunch" in runner.invoke(app, ["list"]).output

    def test_list_with_search_filter(self) -> None:
        """Should only show matching descriptions."""
        add_lunch()
        runner.invoke(app, ["add", "Bus pass", "20", "--category", "Travel", "--date", "2024-01-06"])

        result = runner.invoke(app, ["list", "--search", "bus"])

        assert "Bus pass" in result.output
        assert "Lunch" not in result.output

    def test_unknown_range_is_rejected(self) -> None:
        """Should fail on an unknown date range name."""
        result = runner.invoke(app, ["list", "--range", "next-year"])

        assert result.exit_code == 1

    def test_iso_date_is_stored_as_given(self) -> None:
        """Should keep day and month of an ISO date in place."""
        result = runner.invoke(app, ["add", "Lunch", "50", "--category", "Food", "--date", "2024-01-05"])

        assert result.exit_code == 0, result.output
        assert "Date: 2024-01-05" in result.output

    def test_iso_bounds_filter_the_right_month(self) -> None:
        """Should apply --from/--to as year-month-day."""
        add_lunch(day="2024-01-05")

        result = runner.invoke(app, ["list", "--from", "2024-01-01", "--to", "2024-01-31"])

        assert "Lunch" in result.output

    def test_bracketed_description_is_shown_literally(self) -> None:
        """Should print descriptions containing brackets without treating them as markup."""
        added = runner.invoke(app, ["add", "Snacks [/b]", "10", "--category", "Food"])
        listed = runner.invoke(app, ["list"])

        assert added.exit_code == 0, added.output
        assert "Snacks [/b]" in added.output
        assert listed.exit_code == 0, listed.output
        assert "Snacks [/b]" in listed.output


class TestNormalizeDate:
    """Tests for normalize_date."""

    def test_iso_input_is_unchanged(self) -> None:
        """Should not swap day and month for YYYY-MM-DD input."""
        assert normalize_date("2024-01-05") == "2024-01-05"
        assert normalize_date(" 2024-12-01 ") == "2024-12-01"

    def test_day_first_input(self) -> None:
        """Should read slash dates as day/month/year."""
        assert normalize_date("05/01/2024") == "2024-01-05"

    def test_invalid_input(self) -> None:
        """Should raise ValueError for text that is not a date."""
        with pytest.raises(ValueError):
            normalize_date("someday")


class TestSummary:
    """Tests for the summary command."""

    def test_unfiltered_covers_everything(self) -> None:
        """Should total every transaction without filter options."""
        add_lunch()
        runner.invoke(app, ["add", "Bus", "20", "--category", "Travel", "--date", "2024-01-06"])

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0, result.output
        assert "Expense: ₹70.00" in result.output

    def test_filter_options_scope_the_totals(self) -> None:
        """Should total only the matching transactions when a filter is given."""
        add_lunch()
        runner.invoke(app, ["add", "Bus", "20", "--category", "Travel", "--date", "2024-01-06"])

        result = runner.invoke(app, ["summary", "--category", "Travel"])

        assert result.exit_code == 0, result.output
        assert "Expense: ₹20.00" in result.output
        assert "-₹70.00" in result.output


class TestBudget:
    """Tests for the budget commands."""

    def test_over_budget_message(self) -> None:
        """Should report spending over the limit."""
        runner.invoke(app, ["budget", "set", "200"])
        add_lunch(amount="250")

        result = runner.invoke(app, ["budget", "show"])

        assert "Over Budget!" in result.output

    def test_reset_without_limit(self) -> None:
        """Should say there is nothing to reset."""
        result = runner.invoke(app, ["budget", "reset"])

        assert "No budget limit to reset!" in result.output

    def test_invalid_limit(self) -> None:
        """Should reject a non-numeric limit."""
        result = runner.invoke(app, ["budget", "set", "lots"])

        assert result.exit_code == 1


class TestCategories:
    """Tests for the category commands."""

    def test_add_custom_then_use_it(self) -> None:
        """Should accept transactions in a newly added category."""
        runner.invoke(app, ["category", "add", "Rent"])

        result = runner.invoke(app, ["add", "Room", "800", "--category", "Rent"])

        assert result.exit_code == 0, result.output

    def test_default_category_is_protected(self) -> None:
        """Should refuse to remove a default category."""
        result = runner.invoke(app, ["category", "remove", "Food", "--yes"])

        assert result.exit_code == 1
        assert "cannot delete default categories" in result.output

    def test_bracketed_category_name(self) -> None:
        """Should list custom names containing brackets literally."""
        assert runner.invoke(app, ["category", "add", "Rent [flat]"]).exit_code == 0

        result = runner.invoke(app, ["category", "list", "--type", "expense"])

        assert result.exit_code == 0, result.output
        assert "Rent [flat]" in result.output


class TestExportBackup:
    """Tests for export, backup, and restore."""

    def test_export_csv(self, isolated_home: Path) -> None:
        """Should write a BOM-prefixed CSV of the transactions."""
        add_lunch()
        output = isolated_home / "out.csv"

        result = runner.invoke(app, ["export", "csv", "--output", str(output)])

        assert result.exit_code == 0, result.output
        raw = output.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        assert '"Lunch"' in raw.decode("utf-8-sig")

    def test_export_csv_with_no_data(self, isolated_home: Path) -> None:
        """Should fail when there is nothing to export."""
        result = runner.invoke(app, ["export", "csv", "--output", str(isolated_home / "out.csv")])

        assert result.exit_code == 1
        assert not (isolated_home / "out.csv").exists()

    def test_backup_then_restore(self, isolated_home: Path) -> None:
        """Should bring back cleared transactions."""
        add_lunch()
        backup_file = isolated_home / "backup.json"
        assert runner.invoke(app, ["backup", "--output", str(backup_file)]).exit_code == 0
        runner.invoke(app, ["clear", "--yes"])

        result = runner.invoke(app, ["restore", str(backup_file), "--yes"])

        assert result.exit_code == 0, result.output
        assert "Lunch" in runner.invoke(app, ["list"]).output

    def test_restore_malformed_backup(self, isolated_home: Path) -> None:
        """Should fail and keep the current data."""
        add_lunch()
        bad = isolated_home / "bad.json"
        bad.write_text(json.dumps({"categories": {}}), encoding="utf-8")

        result = runner.invoke(app, ["restore", str(bad), "--yes"])

        assert result.exit_code == 1
        assert "Invalid Backup File" in result.output
        assert "Lunch" in runner.invoke(app, ["list"]).output


class TestTheme:
    """Tests for the theme command."""

    def test_set_and_show(self) -> None:
        """Should remember the chosen theme."""
        assert runner.invoke(app, ["theme", "dark"]).exit_code == 0

        assert "dark" in runner.invoke(app, ["theme"]).output

    def test_unknown_theme(self) -> None:
        """Should reject themes other than light and dark."""
        assert runner.invoke(app, ["theme", "neon"]).exit_code == 1
