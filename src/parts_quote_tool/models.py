# src/parts_quote_tool/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List

PART_NO = "Part No"
LIST_PRICE = "CUBIX LP"
QUANTITY = "Quantity"
PRICE = "Price"

# A catalog row: field name -> raw string value, in file column order
CatalogRecord = Dict[str, str]


class QuoteToolError(Exception):
    """Base class for errors raised by the quote tool."""


class SchemaError(QuoteToolError):
    """The catalog input is missing the required key field."""


class MissingRecordError(QuoteToolError, LookupError):
    """A selected part has no matching catalog record."""

    def __init__(self, part_no: str):
        super().__init__(f"No catalog record for part '{part_no}'")
        self.part_no = part_no


class CatalogSourceError(QuoteToolError):
    """The catalog file or URL could not be read."""


@dataclass(frozen=True)
class PriceOverride:
    quantity: int
    final_price: Decimal


@dataclass(frozen=True)
class DisplayRow:
    # Catalog data (passed through untouched)
    record: CatalogRecord
    # Resolved data
    quantity: int
    final_price: Decimal

    @property
    def part_no(self) -> str:
        return self.record.get(PART_NO, "")

    def value(self, column: str) -> str:
        if column == QUANTITY:
            return str(self.quantity)
        if column in (PRICE, "Final Price"):
            return f"{self.final_price:.2f}"
        return self.record.get(column, "")


@dataclass(frozen=True)
class QuoteSummary:
    subtotal: Decimal
    discount_percent: Decimal
    final_total: Decimal


@dataclass(frozen=True)
class QuoteSnapshot:
    rows: List[DisplayRow] = field(default_factory=list)
    subtotal: Decimal = Decimal("0.00")
    discount_percent: Decimal = Decimal("0")
    final_total: Decimal = Decimal("0.00")

    @property
    def summary(self) -> QuoteSummary:
        return QuoteSummary(self.subtotal, self.discount_percent, self.final_total)

    def is_empty(self) -> bool:
        return not self.rows
