# src/parts_quote_tool/selection.py
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from .models import PriceOverride
from .numeric import ZERO, coerce_quantity, parse_decimal_or_zero, round_money


class SelectionSet:
    """Ordered set of chosen part numbers. Knows nothing about the catalog."""

    def __init__(self):
        # dict keeps insertion order and gives O(1) membership
        self._parts: Dict[str, None] = {}

    def add(self, part_no: str) -> None:
        self._parts.setdefault(part_no, None)

    def remove(self, part_no: str) -> None:
        self._parts.pop(part_no, None)

    def contains(self, part_no: str) -> bool:
        return part_no in self._parts

    __contains__ = contains

    def to_sequence(self) -> List[str]:
        return list(self._parts)

    def clear(self) -> None:
        self._parts.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_sequence())

    def __len__(self) -> int:
        return len(self._parts)


class PriceOverrideMap:
    """
    User-edited quantity and price per part.

    clear() has to be called whenever the part leaves the selection,
    otherwise a re-added part would come back with its old quantity.
    """

    def __init__(self):
        self._entries: Dict[str, PriceOverride] = {}

    def set(self, part_no: str, quantity: Any, final_price: Any) -> PriceOverride:
        price = parse_decimal_or_zero(final_price)
        if price < ZERO:
            price = ZERO
        entry = PriceOverride(quantity=coerce_quantity(quantity), final_price=round_money(price))
        self._entries[part_no] = entry
        return entry

    def clear(self, part_no: str) -> None:
        self._entries.pop(part_no, None)

    def clear_all(self) -> None:
        self._entries.clear()

    def get(self, part_no: str) -> Optional[PriceOverride]:
        return self._entries.get(part_no)

    def __contains__(self, part_no: object) -> bool:
        return part_no in self._entries

    def __len__(self) -> int:
        return len(self._entries)
