"""Utility functions for churchregister."""

from churchregister.utils.date_parser import parse_date, parse_statement_date
from churchregister.utils.amount_parser import parse_amount, parse_optional_amount
from churchregister.utils.csv_line import split_csv_line

__all__ = [
    "parse_date",
    "parse_statement_date",
    "parse_amount",
    "parse_optional_amount",
    "split_csv_line",
]
