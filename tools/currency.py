"""Currency formatting for display."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
CURRENCY_SYMBOL = "$"

# Optional single minus, optional symbol, then digits (commas allowed) with an optional fraction
_CURRENCY_PATTERN = re.compile(r"(-?)\$?(\d[\d,]*(?:\.\d+)?|\.\d+)")


def to_cents(value: Union[Decimal, int, float, str]) -> Decimal:
    """Quantize a value to two decimal places, rounding half up.

    Raises:
        ValueError: If the value is not a finite number that fits in cents.
    """
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Invalid currency amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid currency amount: {value!r}")
    return amount


def format_currency(value: Union[Decimal, int, float, str]) -> str:
    """Format a value as dollars with thousands separators.

    Examples:
        1234.5 -> "$1,234.50"
        -100 -> "-$100.00"

    Raises:
        ValueError: If the value cannot be represented in cents.
    """
    amount = to_cents(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"


def parse_currency(text: str) -> Decimal:
    """Parse text produced by format_currency back into a Decimal.

    Plain numbers ("12.3") are accepted too.

    Raises:
        ValueError: If the text is not a currency amount.
    """
    match = _CURRENCY_PATTERN.fullmatch(text.strip())
    if not match:
        raise ValueError(f"Invalid currency amount: {text!r}")

    sign, digits = match.groups()
    amount = to_cents(digits.replace(",", ""))
    return -amount if sign else amount
