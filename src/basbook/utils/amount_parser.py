"""Amount parsing utilities.

All amounts leave this module as integer cents. Decimal is used for the
dollars-to-cents conversion so that binary floating point never touches money.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")
_PLAIN_NUMBER = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")
_SIGNED_NUMBER = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")

_WHOLE = Decimal("1")


def _to_cents(amount: Decimal) -> int:
    """Convert a dollar Decimal to integer cents, rounding half-up."""
    return int((amount * 100).quantize(_WHOLE, rounding=ROUND_HALF_UP))


def parse_currency(amount_str: Optional[str]) -> Optional[int]:
    """Parse a currency string into integer cents.

    Handles various formats:
    - "123.45"
    - "$1,234.56"
    - "-$50.00" / "-50.00"
    - "(50.00)" (negative in parentheses)
    - "1000"

    Args:
        amount_str: Amount string

    Returns:
        Amount in cents, or None if the string is empty or not numeric.
        None means "absent", callers must not treat it as zero.
    """
    if amount_str is None or not amount_str.strip():
        return None

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1].strip()

    if amount_str.startswith("-"):
        is_negative = True
        amount_str = amount_str[1:]

    # Remove currency symbols and thousands separators
    amount_str = _CURRENCY_SYMBOLS.sub("", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    # "-$50" leaves the sign after the symbol on some exports ("$-50")
    if amount_str.startswith("-"):
        is_negative = True
        amount_str = amount_str[1:].strip()

    if not _PLAIN_NUMBER.match(amount_str):
        return None

    try:
        cents = _to_cents(Decimal(amount_str))
    except InvalidOperation:
        return None
    return -cents if is_negative else cents


def parse_simple_cents(amount_str: Optional[str]) -> int:
    """Parse an invoice amount into cents, treating anything unparseable as 0.

    Only "$", "," and whitespace are stripped. Used for income spreadsheets,
    where a blank or garbled cell means zero rather than a dropped row.
    """
    if not amount_str:
        return 0

    cleaned = re.sub(r"[$,\s]", "", amount_str)
    if not _SIGNED_NUMBER.match(cleaned):
        return 0

    try:
        return _to_cents(Decimal(cleaned))
    except InvalidOperation:
        return 0


def parse_percentage(value: Optional[str]) -> int:
    """Parse a business-use percentage into an integer 0..100.

    Handles "50", "50%", "0.5" (bare fraction) and "". Empty or unparseable
    input means full business use (100).
    """
    if value is None or not value.strip():
        return 100

    value = value.strip()
    has_percent_sign = value.endswith("%")
    value = value.rstrip("%").strip()

    try:
        number = Decimal(value)
    except InvalidOperation:
        return 100
    if not number.is_finite():
        return 100

    if not has_percent_sign and 0 < number <= 1:
        number = number * 100

    number = max(Decimal(0), min(Decimal(100), number))
    return int(number.quantize(_WHOLE, rounding=ROUND_HALF_UP))
