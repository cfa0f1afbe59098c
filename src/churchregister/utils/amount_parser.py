"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Optional

MAX_AMOUNT = Decimal("1e16")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Amounts are read culture-invariant ('.' is the decimal point). Values that
    do not fit a money column (16 integer digits) are rejected. Handles:
    - "123.45"
    - "£123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥¤]", "", amount_str)

    # Remove thousands separators
    amount_str = amount_str.replace(",", "")

    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if abs(amount) >= MAX_AMOUNT:
        raise ValueError(f"Amount out of range '{amount_str}'")

    return -amount if is_negative else amount


def parse_optional_amount(amount_str: Optional[str]) -> Optional[Decimal]:
    """Parse an amount, returning None for blank or unparsable input."""
    if amount_str is None or not amount_str.strip():
        return None
    try:
        return parse_amount(amount_str)
    except ValueError:
        return None
