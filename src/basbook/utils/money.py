"""GST and money helpers.

All amounts are integer cents. Decimal is used internally and every result
is rounded half-up back to whole cents.
"""

from decimal import Decimal, ROUND_HALF_UP

# Australian GST rate (10%)
GST_RATE = Decimal("0.10")

# Divisor for backing GST out of a GST-inclusive total (1 + 10% => 11)
GST_DIVISOR = Decimal("11")


def _round_cents(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def add_amounts(amount_a_cents: int, amount_b_cents: int) -> int:
    """Add two amounts in cents (e.g. subtotal + GST)."""
    return _round_cents(Decimal(amount_a_cents) + Decimal(amount_b_cents))


def add_gst(subtotal_cents: int) -> int:
    """Return the GST-inclusive total for a GST-exclusive subtotal.

    Example:
        add_gst(10000) -> 11000
    """
    subtotal = Decimal(subtotal_cents)
    return _round_cents(subtotal + subtotal * GST_RATE)


def calc_gst_from_total(total_cents: int) -> int:
    """Return the GST component of a GST-inclusive total (total / 11).

    Example:
        calc_gst_from_total(11000) -> 1000
    """
    return _round_cents(Decimal(total_cents) / GST_DIVISOR)


def calc_subtotal_from_total(total_cents: int) -> int:
    """Return the GST-exclusive part of a GST-inclusive total."""
    return total_cents - calc_gst_from_total(total_cents)


def format_cents(cents: int) -> str:
    """Format cents for display, e.g. 10050 -> "$100.50".

    Negative amounts render as "-$12.34". Display only, never parse this back.
    """
    dollars = Decimal(abs(cents)) / 100
    sign = "-" if cents < 0 else ""
    return f"{sign}${dollars:,.2f}"
