"""Currency display helpers."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CURRENCY_SYMBOLS = {"BDT": "৳", "USD": "$", "EUR": "€"}
DEFAULT_SYMBOL = "৳"
MISSING = "—"


def get_currency_symbol(currency: str | None) -> str:
    """Return the display symbol for a currency code, BDT's when unknown."""
    return CURRENCY_SYMBOLS.get(currency or "", DEFAULT_SYMBOL)


def _group_western(digits: str, sep: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return sep.join(groups)


def _group_south_asian(digits: str) -> str:
    # Last three digits, then pairs: 1,00,00,000
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_amount(amount, currency: str = "BDT") -> str:
    """Format an amount with currency symbol and digit grouping.

    Shows at most two fraction digits and drops trailing zeros, so
    ``format_amount(1000)`` is ``"৳1,000"`` and ``format_amount(1234.5, "EUR")``
    is ``"€1.234,5"``. Missing or non-numeric amounts render as an em dash.
    """
    if amount is None or isinstance(amount, bool):
        return MISSING
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return MISSING
    if not value.is_finite():
        return MISSING

    value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")
    fraction = fraction.rstrip("0")

    if currency == "EUR":
        grouped, decimal_sep = _group_western(whole, "."), ","
    elif currency == "USD":
        grouped, decimal_sep = _group_western(whole, ","), "."
    else:
        grouped, decimal_sep = _group_south_asian(whole), "."

    text = grouped + (decimal_sep + fraction if fraction else "")
    return f"{sign}{get_currency_symbol(currency)}{text}"
