"""Utility functions for khata."""

from khata.utils.date_parser import parse_date, get_range_bounds
from khata.utils.amount_parser import parse_amount, coerce_amount
from khata.utils.currency import format_amount, get_currency_symbol

__all__ = [
    "parse_date",
    "get_range_bounds",
    "parse_amount",
    "coerce_amount",
    "format_amount",
    "get_currency_symbol",
]
