"""
Helpers for smallest-unit token amounts.

Amounts travel as decimal strings so values above 2**53 keep every digit.
Nothing here goes through float.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any


def is_raw_amount(value: Any) -> bool:
    """True for a non-empty string of ASCII digits."""
    return isinstance(value, str) and value.isascii() and value.isdigit()


def raw_amount(value: Any, default: str) -> str:
    """
    Coerce an upstream amount field into a smallest-unit string.

    `None` falls back to `default`. Integers are accepted as-is; anything that
    is not a plain integer raises ValueError.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"invalid token amount: {value!r}")
    if isinstance(value, int):
        value = str(value)
    if not is_raw_amount(value):
        raise ValueError(f"invalid token amount: {value!r}")
    return value


def decimal_str(value: Any, default: str = "0") -> str:
    """
    Render a JSON number or numeric string as a plain decimal string (no exponent).

    Numeric strings are kept as sent. Anything that is not a finite number
    ("N/A", "", "NaN", a list) falls back to `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    text = value.strip() if isinstance(value, str) else str(value)
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return default
    if not parsed.is_finite():
        return default
    return text if isinstance(value, str) else format(parsed, "f")


def format_amount(raw: str, decimals: int) -> str:
    """
    Format a smallest-unit amount for display.

    Example: format_amount("1500000000", 9) -> "1.5"
    """
    if not raw or raw == "0":
        return "0"
    if decimals <= 0:
        return raw
    padded = raw.rjust(decimals + 1, "0")
    int_part = padded[:-decimals] or "0"
    frac_part = padded[-decimals:].rstrip("0")
    return f"{int_part}.{frac_part}" if frac_part else int_part


def to_raw_amount(human: str, decimals: int) -> str:
    """
    Convert a human-readable amount into smallest units, truncating any
    precision beyond `decimals`.

    Example: to_raw_amount("1", 9) -> "1000000000"
    """
    try:
        value = Decimal(human.strip())
    except InvalidOperation as e:
        raise ValueError(f"not a number: {human!r}") from e
    if not value.is_finite() or value < 0:
        raise ValueError(f"amount must be a non-negative number, got {human!r}")
    scaled = (value * (Decimal(10) ** decimals)).quantize(Decimal(1), rounding=ROUND_DOWN)
    return str(int(scaled))
