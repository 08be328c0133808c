"""Tests for date parsers."""

import pytest
from datetime import date

from basbook.utils.date_parser import parse_date, parse_invoice_date


def test_parse_iso_date():
    """Test parsing ISO dates."""
    assert parse_date("2025-07-15") == date(2025, 7, 15)


def test_parse_day_first_slash_date():
    """Slash dates are day-first."""
    assert parse_date("15/07/2025") == date(2025, 7, 15)
    assert parse_date("5/7/2025") == date(2025, 7, 5)
    assert parse_date("03/04/2025") == date(2025, 4, 3)


def test_parse_day_first_dash_date():
    """Dash dates with a trailing year are day-first."""
    assert parse_date("15-07-2025") == date(2025, 7, 15)


def test_parse_date_strips_whitespace():
    """Surrounding whitespace is ignored."""
    assert parse_date("  2025-07-15 ") == date(2025, 7, 15)


@pytest.mark.parametrize(
    "value",
    [None, "", "31/02/2025", "2025-13-01", "32/01/2025", "July 15", "2025/07/15", "15.07.2025"],
)
def test_parse_date_rejects_invalid(value):
    """Unsupported formats and impossible dates return None."""
    assert parse_date(value) is None


def test_parse_invoice_date_uses_strict_formats_first():
    """Numeric dates are read day-first."""
    assert parse_invoice_date("03/04/2025") == date(2025, 4, 3)


def test_parse_invoice_date_falls_back_to_dateutil():
    """Hand-typed dates are read with dateutil."""
    assert parse_invoice_date("15 July 2025") == date(2025, 7, 15)
    assert parse_invoice_date("15.07.2025") == date(2025, 7, 15)


@pytest.mark.parametrize("value", [None, "", "   ", "not a date"])
def test_parse_invoice_date_invalid(value):
    """Unreadable invoice dates return None."""
    assert parse_invoice_date(value) is None
