# src/parts_quote_tool/catalog.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from .models import LIST_PRICE, PART_NO, CatalogRecord, SchemaError
from .numeric import parse_decimal_or_zero

log = logging.getLogger(__name__)


class CatalogStore:
    """
    Read-only product catalog keyed by "Part No".

    Build it with CatalogStore.load(); it is never changed afterwards.
    """

    def __init__(self, records: Sequence[CatalogRecord], headers: Sequence[str]):
        self._records: List[CatalogRecord] = list(records)
        self._by_part: Dict[str, CatalogRecord] = {r[PART_NO]: r for r in self._records}
        self._headers = tuple(headers)

    @classmethod
    def load(cls, raw_records: Iterable[Mapping[str, Any]],
             fields: Optional[Sequence[str]] = None) -> "CatalogStore":
        records: List[CatalogRecord] = []
        seen = set()
        duplicates = 0

        for i, raw in enumerate(raw_records, start=1):
            if PART_NO not in raw:
                raise SchemaError(
                    f"Catalog row {i} has no '{PART_NO}' field. Fields: {list(raw.keys())}"
                )
            rec = {str(k): "" if v is None else str(v) for k, v in raw.items()}
            key = rec[PART_NO]
            if key in seen:
                duplicates += 1
                continue  # first occurrence wins
            seen.add(key)
            records.append(rec)

        if fields is not None:
            headers = [str(f) for f in fields]
            if PART_NO not in headers:
                raise SchemaError(f"Catalog has no '{PART_NO}' column. Fields: {headers}")
        elif records:
            headers = list(records[0].keys())
        else:
            headers = []

        log.info("Catalog loaded: %d parts (%d duplicate rows dropped)", len(records), duplicates)
        return cls(records, headers)

    @property
    def headers(self) -> tuple:
        return self._headers

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CatalogRecord]:
        return iter(self._records)

    def __contains__(self, part_no: object) -> bool:
        return part_no in self._by_part

    def get(self, part_no: str) -> Optional[CatalogRecord]:
        return self._by_part.get(part_no)

    def list_price(self, part_no: str) -> Decimal:
        rec = self.get(part_no)
        if rec is None:
            return Decimal("0")
        return parse_decimal_or_zero(rec.get(LIST_PRICE))

    def find_by_prefix(self, query: str, excluding: Iterable[str] = (), limit: int = 10) -> List[str]:
        """
        Part numbers starting with `query` (case-insensitive), in catalog order.

        An empty query gives no suggestions at all rather than the whole catalog.
        """
        q = (query or "").strip().lower()
        if not q or limit <= 0:
            return []

        skip = set(excluding)
        matches: List[str] = []
        for rec in self._records:
            part_no = rec[PART_NO]
            if not part_no or part_no in skip:
                continue
            if part_no.lower().startswith(q):
                matches.append(part_no)
                if len(matches) >= limit:
                    break
        return matches
