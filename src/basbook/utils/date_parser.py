"""Date parsing utilities.

Bank exports in Australia are day-first. Only numeric formats are accepted by
``parse_date``; ``parse_invoice_date`` additionally falls back to dateutil for
hand-typed invoice spreadsheets.
"""

import re
from datetime import date
from typing import Optional

from dateutil import parser as date_parser

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_DASH_DATE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        # e.g. 31/02/2025
        return None


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a bank-export date string.

    Supports, in priority order:
    - "2025-07-15" (ISO)
    - "15/07/2025", "5/7/2025" (day-first)
    - "15-07-2025", "5-7-2025" (day-first)

    Args:
        date_str: Date string

    Returns:
        Date object, or None if the string matches no supported format or the
        day/month is out of range.
    """
    if date_str is None:
        return None

    date_str = date_str.strip()
    if not date_str:
        return None

    match = _ISO_DATE.match(date_str)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return _build_date(year, month, day)

    for pattern in (_SLASH_DATE, _DASH_DATE):
        match = pattern.match(date_str)
        if match:
            day, month, year = (int(part) for part in match.groups())
            return _build_date(year, month, day)

    return None


def parse_invoice_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a date typed into an invoice spreadsheet.

    Tries the strict formats of ``parse_date`` first, then lets dateutil read
    anything else day-first ("15 July 2025", "15.07.2025").

    Returns:
        Date object, or None if the value cannot be read as a date
    """
    if date_str is None or not date_str.strip():
        return None

    parsed = parse_date(date_str)
    if parsed is not None:
        return parsed

    try:
        return date_parser.parse(date_str.strip(), dayfirst=True).date()
    except (ValueError, OverflowError):
        return None
