"""Tests for spendlog.dates pure functions."""

from datetime import date

import pytest

from spendlog.dates import date_preset, month_bounds, previous_month


class TestMonthBounds:
    """Tests for month_bounds."""

    def test_january_bounds(self) -> None:
        """Should calculate bounds for January."""
        first, last, label = month_bounds(2025, 1)

        assert first == date(2025, 1, 1)
        assert last == date(2025, 1, 31)
        assert label == "January 2025"

    def test_february_non_leap_year(self) -> None:
        """Should handle February in non-leap year."""
        _, last, _ = month_bounds(2025, 2)

        assert last == date(2025, 2, 28)

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        _, last, _ = month_bounds(2024, 2)

        assert last == date(2024, 2, 29)

    def test_thirty_day_month(self) -> None:
        """Should handle 30-day months."""
        _, last, label = month_bounds(2025, 4)

        assert last == date(2025, 4, 30)
        assert label == "April 2025"

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_bounds(2025, 13)


class TestPreviousMonth:
    """Tests for previous_month."""

    def test_mid_year(self) -> None:
        """Should step back one month within a year."""
        assert previous_month(2025, 6) == (2025, 5)

    def test_january_crosses_year(self) -> None:
        """Should wrap January to December of the previous year."""
        assert previous_month(2025, 1) == (2024, 12)


class TestDatePreset:
    """Tests for date_preset."""

    def test_this_month(self) -> None:
        """Should cover the whole current month."""
        start, end, label = date_preset("this-month", date(2024, 2, 10))

        assert start == date(2024, 2, 1)
        assert end == date(2024, 2, 29)
        assert label == "This Month"

    def test_last_month_crosses_year(self) -> None:
        """Should cover December when today is in January."""
        start, end, label = date_preset("last-month", date(2025, 1, 15))

        assert start == date(2024, 12, 1)
        assert end == date(2024, 12, 31)
        assert label == "Last Month"

    def test_last_30_days(self) -> None:
        """Should end today and start 30 days earlier."""
        start, end, _ = date_preset("last-30-days", date(2025, 3, 31))

        assert start == date(2025, 3, 1)
        assert end == date(2025, 3, 31)

    def test_unknown_preset_raises_valueerror(self) -> None:
        """Should reject unknown names."""
        with pytest.raises(ValueError, match="Unknown date range"):
            date_preset("next-year", date(2025, 1, 1))
