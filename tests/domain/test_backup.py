"""Tests for spendlog.domain.backup."""

import json
from datetime import datetime, timezone

import pytest

from spendlog.domain.backup import build_backup, dump_backup, parse_backup, parse_backup_text
from spendlog.domain.categories import CategoryRegistry
from spendlog.domain.errors import MalformedBackup
from spendlog.domain.transactions import Transaction

NOW = datetime(2025, 1, 31, 18, 20, tzinfo=timezone.utc)

TXN = Transaction(id=7, description='Pens "gel"', amount=45.0, category="Stationery", date="2025-01-30", type="expense")


class TestBuildBackup:
    """Tests for build_backup."""

    def test_contains_every_section(self) -> None:
        """Should carry transactions, categories, limit, and timestamp."""
        registry = CategoryRegistry({"expense": ["Rent"]})

        data = build_backup([TXN], registry, 1500.0, NOW)

        assert data["transactions"][0]["id"] == 7
        assert "Rent" in data["categories"]["expense"]
        assert data["budgetLimit"] == "1500.0"
        assert data["lastBackup"] == "2025-01-31T18:20:00+00:00"

    def test_no_limit_is_null(self) -> None:
        """Should write null when there is no limit."""
        assert build_backup([], CategoryRegistry(), 0.0, NOW)["budgetLimit"] is None

    def test_dump_then_parse_restores_contents(self) -> None:
        """Should read back what it wrote."""
        registry = CategoryRegistry({"income": ["Tutoring"]})

        backup = parse_backup_text(dump_backup(build_backup([TXN], registry, 250.0, NOW)))

        assert backup.transactions == [TXN]
        assert backup.categories is not None
        assert backup.categories.custom() == {"expense": [], "income": ["Tutoring"]}
        assert backup.budget_limit == 250.0
        assert backup.last_backup == NOW.isoformat()


class TestParseBackup:
    """Tests for parse_backup."""

    def test_missing_transactions_is_malformed(self) -> None:
        """Should reject backups without a transactions list."""
        with pytest.raises(MalformedBackup):
            parse_backup({"categories": {}})

    def test_non_object_is_malformed(self) -> None:
        """Should reject anything that is not an object."""
        with pytest.raises(MalformedBackup):
            parse_backup([])

    def test_optional_sections_may_be_absent(self) -> None:
        """Should leave categories and limit unset when not present."""
        backup = parse_backup({"transactions": []})

        assert backup.transactions == []
        assert backup.categories is None
        assert backup.budget_limit is None

    def test_falsy_budget_limit_is_ignored(self) -> None:
        """Should treat an empty or zero limit as absent."""
        assert parse_backup({"transactions": [], "budgetLimit": ""}).budget_limit is None
        assert parse_backup({"transactions": [], "budgetLimit": 0}).budget_limit is None

    def test_bad_budget_limit_is_malformed(self) -> None:
        """Should reject a non-numeric limit."""
        with pytest.raises(MalformedBackup):
            parse_backup({"transactions": [], "budgetLimit": "lots"})

    def test_bad_categories_are_malformed(self) -> None:
        """Should reject categories that are not an object of lists."""
        with pytest.raises(MalformedBackup):
            parse_backup({"transactions": [], "categories": {"expense": "Food"}})

    def test_bad_record_is_malformed(self) -> None:
        """Should reject the whole backup if one record is invalid."""
        record = {"id": 1, "description": "", "amount": 5, "category": "Food", "date": "2024-01-01", "type": "expense"}

        with pytest.raises(MalformedBackup):
            parse_backup({"transactions": [record]})

    def test_invalid_json_is_malformed(self) -> None:
        """Should wrap JSON errors."""
        with pytest.raises(MalformedBackup, match="not valid JSON"):
            parse_backup_text("{not json")

    def test_dump_is_indented_json(self) -> None:
        """Should write human-readable JSON."""
        text = dump_backup({"transactions": []})

        assert json.loads(text) == {"transactions": []}
        assert "\n  " in text

    def test_oversized_amount_is_malformed(self) -> None:
        """Should reject amounts too large for a float."""
        text = '{"transactions": [{"id": 1, "description": "Bus", "amount": 1' + "0" * 400 + ', "category": "Travel", "date": "2024-01-01", "type": "expense"}]}'

        with pytest.raises(MalformedBackup):
            parse_backup_text(text)

    def test_oversized_integer_literal_is_malformed(self) -> None:
        """Should reject integers beyond the JSON decoder's digit limit."""
        with pytest.raises(MalformedBackup):
            parse_backup_text('{"transactions": [], "budgetLimit": 1' + "0" * 5000 + "}")
