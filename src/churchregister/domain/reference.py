"""Payment reference extraction from bank transaction descriptions."""

import re
from typing import Optional

from churchregister.domain.entities import MAX_REFERENCE_LENGTH

REFERENCE_MARKER = re.compile(re.escape(" REF "), re.IGNORECASE)

# Checked in this order; the first token present wins even if a later token
# occurs earlier in the text.
TRAILING_TOKENS = (
    " VIA ",
    " ONLINE BANKING",
    " MOBILE APP",
    " ON ",
    " AT ",
)

_TRAILING_PATTERNS = tuple(re.compile(re.escape(token), re.IGNORECASE) for token in TRAILING_TOKENS)


def extract_reference(description: Optional[str]) -> str:
    """Extract the payer's reference from a bank transaction description.

    The reference is the text after the first " REF " marker, cut at the
    first trailing token found (see TRAILING_TOKENS) and limited to
    MAX_REFERENCE_LENGTH characters. Matching is case-insensitive.

    Examples:
        >>> extract_reference("SMITH J REF ABC123 VIA MOBILE APP")
        'ABC123'
        >>> extract_reference("CARD PAYMENT")
        ''

    Args:
        description: Raw description from the bank statement

    Returns:
        Extracted reference, or an empty string if there is none
    """
    if not description or not description.strip():
        return ""

    marker = REFERENCE_MARKER.search(description)
    if marker is None:
        return ""

    reference = description[marker.end():].strip()

    for pattern in _TRAILING_PATTERNS:
        token = pattern.search(reference)
        if token is not None and token.start() > 0:
            reference = reference[:token.start()].strip()
            break

    return reference[:MAX_REFERENCE_LENGTH]
