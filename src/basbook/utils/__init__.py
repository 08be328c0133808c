"""Utility functions for basbook."""

from basbook.utils.date_parser import parse_date, parse_invoice_date
from basbook.utils.amount_parser import parse_currency, parse_percentage, parse_simple_cents
from basbook.utils.money import calc_gst_from_total, format_cents
from basbook.utils.fuzzy import normalize_client_name, normalize_provider_name, similarity

__all__ = [
    "parse_date",
    "parse_invoice_date",
    "parse_currency",
    "parse_percentage",
    "parse_simple_cents",
    "calc_gst_from_total",
    "format_cents",
    "normalize_client_name",
    "normalize_provider_name",
    "similarity",
]
