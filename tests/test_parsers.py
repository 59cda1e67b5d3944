"""Tests for amount, rate and date parsing."""

import pytest
from datetime import date
from decimal import Decimal

from loanledger.utils.amount_parser import parse_amount, parse_rate
from loanledger.utils.date_parser import parse_date


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1500", Decimal("1500.00")),
            ("1,500.50", Decimal("1500.50")),
            ("₱2,000", Decimal("2000.00")),
            ("PHP 750.25", Decimal("750.25")),
            ("750.25 php", Decimal("750.25")),
            ("-250", Decimal("-250.00")),
            ("10.005", Decimal("10.01")),
        ],
    )
    def test_valid_amounts(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "NaN"])
    def test_invalid_amounts(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)


class TestParseRate:
    """Tests for parse_rate."""

    def test_percent(self):
        assert parse_rate("2%") == Decimal("0.02")

    def test_fraction(self):
        assert parse_rate("0.015") == Decimal("0.015")

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_rate("two percent")


class TestParseDate:
    """Tests for parse_date."""

    TODAY = date(2024, 3, 14)  # a Thursday

    def test_absolute(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    def test_relative_days(self):
        assert parse_date("today", today=self.TODAY) == self.TODAY
        assert parse_date("Yesterday", today=self.TODAY) == date(2024, 3, 13)
        assert parse_date("tomorrow", today=self.TODAY) == date(2024, 3, 15)
        assert parse_date("3 days ago", today=self.TODAY) == date(2024, 3, 11)

    def test_last_weekday(self):
        assert parse_date("last friday", today=self.TODAY) == date(2024, 3, 8)
        # Same weekday as today goes back a full week
        assert parse_date("last thursday", today=self.TODAY) == date(2024, 3, 7)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")
