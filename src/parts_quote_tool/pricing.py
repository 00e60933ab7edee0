# src/parts_quote_tool/pricing.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, List, Sequence

from .catalog import CatalogStore
from .models import LIST_PRICE, DisplayRow, MissingRecordError, QuoteSnapshot
from .numeric import parse_decimal_or_zero, round_money
from .selection import PriceOverrideMap, SelectionSet

log = logging.getLogger(__name__)

DEFAULT_QUANTITY = 1


def apply_discount(subtotal: Decimal, discount_percent: Decimal) -> Decimal:
    """
    subtotal * (1 - discount_percent / 100), without clamping.

    A negative percentage acts as a surcharge; the input field is what keeps
    users inside 0..100.
    """
    return subtotal * (1 - discount_percent / 100)


def line_price(list_price: Any, quantity: int) -> Decimal:
    return round_money(parse_decimal_or_zero(list_price) * quantity)


def _resolve_row(catalog: CatalogStore, overrides: PriceOverrideMap, part_no: str) -> DisplayRow:
    rec = catalog.get(part_no)
    if rec is None:
        raise MissingRecordError(part_no)

    ovr = overrides.get(part_no)
    if ovr is not None:
        return DisplayRow(record=rec, quantity=ovr.quantity, final_price=ovr.final_price)

    return DisplayRow(
        record=rec,
        quantity=DEFAULT_QUANTITY,
        final_price=line_price(rec.get(LIST_PRICE), DEFAULT_QUANTITY),
    )


def project(catalog: CatalogStore, selection: SelectionSet, overrides: PriceOverrideMap) -> List[DisplayRow]:
    """
    Rows to show (or export) for the current selection, in selection order.

    Parts without a catalog record are logged and left out.
    An empty list means there is nothing to show.
    """
    rows: List[DisplayRow] = []
    for part_no in selection.to_sequence():
        try:
            rows.append(_resolve_row(catalog, overrides, part_no))
        except MissingRecordError as e:
            log.warning("Dropping row: %s", e)
    return rows


def subtotal(rows: Sequence[DisplayRow]) -> Decimal:
    return round_money(sum((r.final_price for r in rows), Decimal("0")))


def snapshot(rows: Sequence[DisplayRow], discount_percent: Any = 0) -> QuoteSnapshot:
    pct = parse_decimal_or_zero(discount_percent)
    sub = subtotal(rows)
    return QuoteSnapshot(
        rows=list(rows),
        subtotal=sub,
        discount_percent=pct,
        final_total=round_money(apply_discount(sub, pct)),
    )
