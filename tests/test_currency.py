"""Tests for currency formatting."""

from decimal import Decimal

import pytest

from khata.utils.currency import format_amount, get_currency_symbol


@pytest.mark.parametrize(
    "amount, currency, expected",
    [
        (1000, "BDT", "৳1,000"),
        (100000, "BDT", "৳1,00,000"),
        (12345678.5, "BDT", "৳1,23,45,678.5"),
        (999, "BDT", "৳999"),
        (1234.5, "USD", "$1,234.5"),
        (Decimal("1234567.25"), "USD", "$1,234,567.25"),
        (1234.5, "EUR", "€1.234,5"),
        (0, "EUR", "€0"),
        (Decimal("1000.00"), "USD", "$1,000"),
    ],
)
def test_format_amount(amount, currency, expected):
    assert format_amount(amount, currency) == expected


def test_format_amount_defaults_to_bdt():
    assert format_amount(50) == "৳50"


def test_format_negative_amount():
    assert format_amount(-1500, "USD") == "-$1,500"


def test_format_amount_rounds_to_two_places():
    assert format_amount(10.456, "USD") == "$10.46"


@pytest.mark.parametrize("value", [None, "not a number", float("nan")])
def test_format_missing_amount(value):
    assert format_amount(value) == "—"


def test_currency_symbol_fallback():
    assert get_currency_symbol("USD") == "$"
    assert get_currency_symbol("XYZ") == "৳"
    assert get_currency_symbol(None) == "৳"
