# src/parts_quote_tool/numeric.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def parse_decimal_or_zero(value: Any) -> Decimal:
    """
    Lenient number parsing used for every price and quantity in the tool.

    Anything that is not a finite number ("", None, "abc", "NaN") becomes 0.
    Currency symbols, thousands separators and surrounding blanks are ignored.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        value = repr(value)

    s = str(value).replace("$", "").replace(",", "").strip()
    if not s:
        return ZERO
    try:
        d = Decimal(s)
    except InvalidOperation:
        return ZERO
    return d if d.is_finite() else ZERO


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def coerce_quantity(value: Any) -> int:
    # fractional input is truncated, negatives and junk become 0
    q = parse_decimal_or_zero(value)
    if q <= 0:
        return 0
    return int(q.to_integral_value(rounding=ROUND_DOWN))


def format_amount(amount: Decimal, symbol: str = "") -> str:
    return f"{symbol}{round_money(amount):.2f}"


def looks_decimal(value: str) -> bool:
    """True for strings like "12.5" that the table shows with two places."""
    if not isinstance(value, str) or "." not in value:
        return False
    try:
        return Decimal(value.strip()).is_finite()
    except InvalidOperation:
        return False


def format_cell(value: str) -> str:
    if looks_decimal(value):
        return f"{round_money(Decimal(value.strip())):.2f}"
    return value
