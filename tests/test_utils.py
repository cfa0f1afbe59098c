"""Tests for parsing utilities."""

from datetime import date
from decimal import Decimal

import pytest

from churchregister.utils.amount_parser import parse_amount, parse_optional_amount
from churchregister.utils.csv_line import split_csv_line
from churchregister.utils.date_parser import parse_date, parse_statement_date


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("50.00", Decimal("50.00")),
            (" 50 ", Decimal("50")),
            ("£1,234.56", Decimal("1234.56")),
            ("-12.50", Decimal("-12.50")),
            ("(12.50)", Decimal("-12.50")),
        ],
    )
    def test_valid_amounts(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "abc", "NaN", "Infinity", "1e30", "1" + "0" * 28, "10000000000000000"],
    )
    def test_invalid_amounts_raise(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)

    def test_largest_storable_amount(self):
        assert parse_amount("9,999,999,999,999,999.99") == Decimal("9999999999999999.99")

    def test_optional_amount_returns_none_for_bad_input(self):
        assert parse_optional_amount(None) is None
        assert parse_optional_amount("") is None
        assert parse_optional_amount("n/a") is None
        assert parse_optional_amount("10.5") == Decimal("10.5")
        assert parse_optional_amount("1e30") is None


class TestParseDate:
    """Tests for day-first date parsing."""

    def test_day_first(self):
        assert parse_date("02/01/2024") == date(2024, 1, 2)

    def test_textual_month(self):
        assert parse_date("15 Mar 2024") == date(2024, 3, 15)

    def test_iso_date(self):
        assert parse_date("2024-03-15") == date(2024, 3, 15)

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_date("not a date")

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            parse_date("  ")

    @pytest.mark.parametrize("text", ["12", "Jan", "Jan 2024", "15 Mar", "2024"])
    def test_incomplete_dates_raise(self, text):
        with pytest.raises(ValueError):
            parse_date(text)

    def test_statement_date_falls_back_to_min(self):
        assert parse_statement_date("31/02/2024") == date.min
        assert parse_statement_date("") == date.min
        assert parse_statement_date("12") == date.min
        assert parse_statement_date("01/02/2024") == date(2024, 2, 1)


class TestSplitCsvLine:
    """Tests for quote-aware line splitting."""

    def test_plain_fields(self):
        assert split_csv_line("a,b,c") == ["a", "b", "c"]

    def test_quoted_comma_does_not_split(self):
        assert split_csv_line('01/01/2024,"Smith, J",50.00') == ["01/01/2024", "Smith, J", "50.00"]

    def test_empty_fields_kept(self):
        assert split_csv_line("a,,c,") == ["a", "", "c", ""]

    def test_fields_not_trimmed(self):
        assert split_csv_line(" a , b ") == [" a ", " b "]
