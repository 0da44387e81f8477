"""
Unit tests for date and numeric helpers.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from disciplinetx.core.utils import (
    days_in_month,
    iter_dates,
    month_bounds,
    normalize_date,
    parse_decimal,
    percent,
    round_half_up,
)


class TestDates:
    """Test date key helpers."""

    def test_normalize_date(self):
        assert normalize_date("2024-3-1") == "2024-03-01"
        assert normalize_date(date(2024, 3, 1)) == "2024-03-01"
        assert normalize_date(datetime(2024, 3, 1, 15, 30)) == "2024-03-01"

    @pytest.mark.parametrize("value", ["", "2024-02-30", "01/03/2024", "yesterday"])
    def test_malformed_dates_raise(self, value):
        with pytest.raises(ValueError):
            normalize_date(value)

    def test_iter_dates_inclusive(self):
        """Range crosses a leap day and includes both ends."""
        assert list(iter_dates("2024-02-28", "2024-03-01")) == [
            "2024-02-28",
            "2024-02-29",
            "2024-03-01",
        ]

    def test_iter_dates_reversed_is_empty(self):
        assert list(iter_dates("2024-03-02", "2024-03-01")) == []

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2024, 12) == 31

        with pytest.raises(ValueError):
            days_in_month(2024, 13)

    def test_month_bounds(self):
        assert month_bounds(2024, 4) == ("2024-04-01", "2024-04-30")

    @pytest.mark.parametrize("value", [None, 20240301, 3.5])
    def test_non_date_values_raise(self, value):
        """Non-string, non-date values are malformed dates."""
        with pytest.raises(ValueError):
            normalize_date(value)


class TestNumbers:
    """Test decimal parsing and rounding."""

    def test_parse_decimal(self):
        assert parse_decimal("-50.25") == Decimal("-50.25")
        assert parse_decimal(" 12 ") == Decimal("12")
        assert parse_decimal("+.5") == Decimal("0.5")
        assert parse_decimal(7) == Decimal(7)
        assert parse_decimal(0.1) == Decimal("0.1")

    def test_thousands_separators(self):
        assert parse_decimal("1,250.50") == Decimal("1250.50")
        assert parse_decimal("-12,500") == Decimal("-12500")

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "abc", "12abc", "nan", "inf", "1_000", "1,5", "-5,0", "12,34.5"],
    )
    def test_parse_decimal_rejects(self, value):
        assert parse_decimal(value) is None

    def test_round_half_up(self):
        """Halves round away from zero, unlike round()."""
        assert round_half_up(12.5) == 13
        assert round_half_up(2.5) == 3
        assert round_half_up(0.125, 2) == 0.13
        assert round_half_up(-2.5) == -3

    def test_percent(self):
        assert percent(1, 3) == 33
        assert percent(2, 3) == 67
        assert percent(1, 8) == 13
        assert percent(5, 0) == 0

    def test_percent_is_exact(self):
        """29/200 is exactly 14.5%, which rounds up."""
        assert percent(29, 200) == 15
        assert percent(Decimal("0.125"), 1) == 13

    def test_round_half_up_decimal(self):
        assert round_half_up(Decimal("0.805"), 2) == 0.81
        assert round_half_up(Decimal("-0.005"), 2) == -0.01
