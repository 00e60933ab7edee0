from decimal import Decimal

from parts_quote_tool.numeric import (
    coerce_quantity,
    format_amount,
    format_cell,
    parse_decimal_or_zero,
    round_money,
)


def test_parse_decimal_or_zero():
    assert parse_decimal_or_zero("10.50") == Decimal("10.50")
    assert parse_decimal_or_zero(" $1,234.5 ") == Decimal("1234.5")
    assert parse_decimal_or_zero(3) == Decimal(3)
    assert parse_decimal_or_zero(2.5) == Decimal("2.5")
    assert parse_decimal_or_zero("abc") == 0
    assert parse_decimal_or_zero("") == 0
    assert parse_decimal_or_zero(None) == 0
    assert parse_decimal_or_zero("NaN") == 0
    assert parse_decimal_or_zero("inf") == 0


def test_round_money_is_half_up():
    assert round_money(Decimal("2.675")) == Decimal("2.68")
    assert round_money(Decimal("2.665")) == Decimal("2.67")
    assert round_money(Decimal("3")) == Decimal("3.00")


def test_coerce_quantity():
    assert coerce_quantity("3") == 3
    assert coerce_quantity("2.9") == 2
    assert coerce_quantity("-4") == 0
    assert coerce_quantity("xyz") == 0
    assert coerce_quantity(None) == 0


def test_formatting():
    assert format_amount(Decimal("31.5"), "$") == "$31.50"
    assert format_cell("12.5") == "12.50"
    assert format_cell("12") == "12"
    assert format_cell("A.B") == "A.B"
