# src/parts_quote_tool/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from . import config
from .catalog import CatalogStore
from .csv_writer import export_csv, sanitize_file_name
from .models import LIST_PRICE, DisplayRow, QuoteSnapshot
from .numeric import coerce_quantity
from .pricing import line_price, project, snapshot
from .selection import PriceOverrideMap, SelectionSet

log = logging.getLogger(__name__)

RowsListener = Callable[[List[DisplayRow]], None]


# ---------- actions (one per user gesture) ----------

@dataclass(frozen=True)
class Search:
    query: str


@dataclass(frozen=True)
class AddPart:
    part_no: str


@dataclass(frozen=True)
class RemovePart:
    part_no: str


@dataclass(frozen=True)
class SetQuantity:
    part_no: str
    raw_quantity: Any


@dataclass(frozen=True)
class Checkout:
    discount_percent: Any = 0


@dataclass(frozen=True)
class SetDiscount:
    discount_percent: Any


@dataclass(frozen=True)
class Reset:
    pass


class QuoteSession:
    """
    All state for one quote: catalog, selection and per-part overrides.

    The front-end owns one of these and sends it actions through dispatch().
    Every action is applied, the rows are re-projected and listeners are
    told about the new rows before dispatch() returns.
    """

    def __init__(self, catalog: Optional[CatalogStore] = None,
                 suggestion_limit: int = config.SUGGESTION_LIMIT):
        self.catalog: Optional[CatalogStore] = None
        self.selection = SelectionSet()
        self.overrides = PriceOverrideMap()
        self.suggestion_limit = suggestion_limit
        self.current_snapshot: Optional[QuoteSnapshot] = None
        self._listeners: List[RowsListener] = []
        if catalog is not None:
            self.load(catalog)

    @property
    def ready(self) -> bool:
        return self.catalog is not None

    def load(self, catalog: CatalogStore) -> None:
        self.catalog = catalog
        self.selection.clear()
        self.overrides.clear_all()
        self.current_snapshot = None
        self._notify()

    def subscribe(self, listener: RowsListener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> List[DisplayRow]:
        rows = self.rows()
        if self.current_snapshot is not None:
            # an open checkout follows every edit, keeping its discount
            self.current_snapshot = snapshot(rows, self.current_snapshot.discount_percent)
        for listener in self._listeners:
            listener(rows)
        return rows

    # ---------- queries ----------

    def rows(self) -> List[DisplayRow]:
        if not self.ready:
            return []
        return project(self.catalog, self.selection, self.overrides)

    def suggestions(self, query: str) -> List[str]:
        if not self.ready:
            return []
        return self.catalog.find_by_prefix(
            query, excluding=self.selection.to_sequence(), limit=self.suggestion_limit
        )

    # ---------- mutations ----------

    def add_part(self, part_no: str) -> List[DisplayRow]:
        if self.ready and part_no in self.catalog:
            self.selection.add(part_no)
        else:
            log.debug("Ignoring unknown part %r", part_no)
        return self._notify()

    def remove_part(self, part_no: str) -> List[DisplayRow]:
        # selection and override always leave together
        self.selection.remove(part_no)
        self.overrides.clear(part_no)
        return self._notify()

    def set_quantity(self, part_no: str, raw_quantity: Any) -> List[DisplayRow]:
        if self.ready and part_no in self.selection:
            qty = coerce_quantity(raw_quantity)
            rec = self.catalog.get(part_no) or {}
            self.overrides.set(part_no, qty, line_price(rec.get(LIST_PRICE), qty))
        return self._notify()

    def reset(self) -> List[DisplayRow]:
        self.selection.clear()
        self.overrides.clear_all()
        self.current_snapshot = None
        return self._notify()

    # ---------- checkout / export ----------

    def checkout(self, discount_percent: Any = 0) -> QuoteSnapshot:
        self.current_snapshot = snapshot(self.rows(), discount_percent)
        return self.current_snapshot

    def set_discount(self, discount_percent: Any) -> QuoteSnapshot:
        self.current_snapshot = snapshot(self.rows(), discount_percent)
        return self.current_snapshot

    def export(self, file_name: Optional[str] = None, quote: Optional[QuoteSnapshot] = None,
               columns: Optional[Sequence[str]] = None, include_summary: bool = True) -> Tuple[str, str]:
        """
        Returns:
          - the sanitized file name ("quantities.csv" when left blank)
          - the CSV text
        """
        quote = quote or self.current_snapshot or self.checkout()
        text = export_csv(
            quote.rows,
            quote.summary if include_summary else None,
            columns or config.EXPORT_COLUMNS,
        )
        return sanitize_file_name(file_name, config.DEFAULT_EXPORT_NAME), text

    # ---------- dispatcher ----------

    def dispatch(self, action: Any) -> Any:
        if isinstance(action, Search):
            return self.suggestions(action.query)
        if isinstance(action, AddPart):
            return self.add_part(action.part_no)
        if isinstance(action, RemovePart):
            return self.remove_part(action.part_no)
        if isinstance(action, SetQuantity):
            return self.set_quantity(action.part_no, action.raw_quantity)
        if isinstance(action, Checkout):
            return self.checkout(action.discount_percent)
        if isinstance(action, SetDiscount):
            return self.set_discount(action.discount_percent)
        if isinstance(action, Reset):
            return self.reset()
        raise TypeError(f"Unknown action: {action!r}")
