"""Tests for amount and date parsing utilities."""

from datetime import date
from decimal import Decimal

import pytest

from bankledger.utils.amount_parser import parse_amount
from bankledger.utils.date_parser import parse_date

TODAY = date(2024, 3, 15)  # a Friday


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("123.45", Decimal("123.45")),
            ("$1,234.56", Decimal("1234.56")),
            (" 10 ", Decimal("10")),
            ("-5", Decimal("-5")),
        ],
    )
    def test_valid_amounts(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "inf"])
    def test_invalid_amounts(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)


class TestParseDate:
    """Tests for parse_date."""

    def test_absolute_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("today", date(2024, 3, 15)),
            ("Yesterday", date(2024, 3, 14)),
            ("this week", date(2024, 3, 11)),
            ("this month", date(2024, 3, 1)),
            ("this year", date(2024, 1, 1)),
            ("last week", date(2024, 3, 4)),
            ("last month", date(2024, 2, 1)),
            ("last year", date(2023, 1, 1)),
        ],
    )
    def test_relative_dates(self, text, expected):
        assert parse_date(text, today=TODAY) == expected

    def test_invalid_date(self):
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date("not a date at all")
