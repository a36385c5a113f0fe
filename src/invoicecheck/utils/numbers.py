"""Tolerant parsing of currency-like tokens."""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

# Decimal alternative first so "1234.56" is not cut at the point
_DIGITS_RE = re.compile(r"\d*\.\d+|\d+")
_CURRENCY_CHARS = "£$€ "


def parse_amount(value: Any) -> Decimal:
    """
    Parse a currency-like token into a signed Decimal.

    Thousands separators and currency symbols are stripped, a value wrapped in
    parentheses or prefixed with a minus sign is negative. Anything without
    digits normalizes to zero instead of raising.

    Args:
        value: Token to parse (string, number or None)

    Returns:
        Parsed amount, Decimal("0") when nothing numeric is present
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value

    text = str(value).strip().replace(",", "")
    if not text:
        return Decimal("0")

    bracketed = text.startswith("(") and text.endswith(")")
    negative = bracketed or text.strip("()").lstrip(_CURRENCY_CHARS).startswith("-")

    match = _DIGITS_RE.search(text)
    if not match:
        return Decimal("0")

    try:
        amount = Decimal(match.group())
    except InvalidOperation:
        return Decimal("0")

    return -amount if negative else amount


def format_money(value: Decimal) -> str:
    """Format an amount with two decimal places."""
    return f"{value:.2f}"


def format_quantity(value: Decimal) -> str:
    """Format a quantity or rate, whole values without decimals."""
    if value == value.to_integral_value():
        return str(int(value))
    return f"{value.normalize():f}"
