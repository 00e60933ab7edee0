# src/parts_quote_tool/csv_writer.py
from __future__ import annotations

import csv
import io
import logging
import re
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Sequence

from .models import DisplayRow, QuoteSummary

log = logging.getLogger(__name__)

DEFAULT_EXPORT_COLUMNS = ("Part No", "CUBIX LP", "Quantity", "Price")
DEFAULT_FILE_NAME = "quantities"
CRLF = "\r\n"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_\-]")


def _percent_text(pct: Decimal) -> str:
    return f"{pct.normalize():f}"


def _summary_lines(summary: QuoteSummary, width: int) -> List[List[str]]:
    # label under the second-to-last column, value under the last one
    pad = [""] * max(width - 2, 0)
    return [
        pad + ["Total", f"{summary.subtotal:.2f}"],
        pad + ["Discount %", _percent_text(summary.discount_percent)],
        pad + ["Final Total", f"{summary.final_total:.2f}"],
    ]


def export_csv(rows: Sequence[DisplayRow], summary: Optional[QuoteSummary] = None,
               columns: Sequence[str] = DEFAULT_EXPORT_COLUMNS) -> str:
    """
    Quote rows as CSV text.

    Header line is the plain column names; every data field is quoted
    (numbers too) with embedded quotes doubled. Lines end with CRLF.
    """
    buf = io.StringIO(newline="")
    buf.write(",".join(columns) + CRLF)

    w = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator=CRLF)
    for row in rows:
        w.writerow([row.value(c) for c in columns])

    if summary is not None:
        w.writerows(_summary_lines(summary, len(columns)))

    return buf.getvalue()


def sanitize_file_name(name: Optional[str], default: str = DEFAULT_FILE_NAME) -> str:
    if not name or not name.strip():
        name = default
    return _UNSAFE_CHARS.sub("_", name) + ".csv"


def save_csv(text: str, directory: str | Path, file_name: Optional[str]) -> Path:
    path = Path(directory) / sanitize_file_name(file_name)
    # newline="" keeps the CRLF line endings as written
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    log.info("Quote saved to %s", path)
    return path
