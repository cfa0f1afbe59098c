"""Date parsing utilities."""

import re
from datetime import date, datetime
from dateutil import parser as date_parser

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Two defaults that differ in every field; a complete date parses the same
# under both.
FIELD_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Day-first (British) ordering is used for ambiguous numeric dates, so
    "01/02/2024" is 1 February 2024. Textual forms such as "15 Jan 2024" and
    ISO dates are accepted as well. Day, month and year must all be present;
    missing fields are never filled in from today.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip()
    if not date_str:
        raise ValueError("Empty date string")

    # dateutil would read ISO dates as year-day-month when dayfirst is set
    if ISO_DATE.match(date_str):
        return date.fromisoformat(date_str)

    try:
        first, second = (
            date_parser.parse(date_str, dayfirst=True, default=default).date()
            for default in FIELD_DEFAULTS
        )
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

    if first != second:
        raise ValueError(f"Incomplete date '{date_str}': day, month and year are required")
    return first


def parse_statement_date(date_str: str) -> date:
    """Parse a statement date, falling back to date.min when unparsable."""
    try:
        return parse_date(date_str)
    except ValueError:
        return date.min
