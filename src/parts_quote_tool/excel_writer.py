# src/parts_quote_tool/excel_writer.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font

from . import config
from .models import LIST_PRICE, PRICE, QUANTITY, QuoteSnapshot
from .numeric import parse_decimal_or_zero

log = logging.getLogger(__name__)

# columns written as numbers instead of text
NUMERIC_COLUMNS = {LIST_PRICE, "SMC LP", PRICE, "Final Price"}
MONEY_FORMAT = "#,##0.00"


def generate_quote_workbook(quote: QuoteSnapshot, output_path: str | Path,
                            columns: Sequence[str] = config.EXPORT_COLUMNS) -> Path:
    """Writes the quote to a single-sheet .xlsx with the totals underneath."""
    output_path = Path(output_path)
    log.info("Generating quote workbook: %s", output_path)

    wb = Workbook()
    sheet = wb.active
    sheet.title = "Quote"

    bold = Font(bold=True)
    for col, name in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=col, value=name)
        cell.font = bold

    current_row = 2
    for row in quote.rows:
        for col, name in enumerate(columns, start=1):
            cell = sheet.cell(row=current_row, column=col)
            if name == QUANTITY:
                cell.value = row.quantity
            elif name in NUMERIC_COLUMNS:
                cell.value = float(parse_decimal_or_zero(row.value(name)))
                cell.number_format = MONEY_FORMAT
            else:
                cell.value = row.value(name)
        current_row += 1

    # Totals sit under the last two columns, same as the CSV export
    label_col = max(len(columns) - 1, 1)
    value_col = label_col + 1
    totals = [
        ("Total", float(quote.subtotal), MONEY_FORMAT),
        ("Discount %", float(quote.discount_percent), "0.##"),
        ("Final Total", float(quote.final_total), MONEY_FORMAT),
    ]
    for label, value, fmt in totals:
        sheet.cell(row=current_row, column=label_col, value=label).font = bold
        cell = sheet.cell(row=current_row, column=value_col, value=value)
        cell.number_format = fmt
        current_row += 1

    for col, name in enumerate(columns, start=1):
        sheet.column_dimensions[sheet.cell(row=1, column=col).column_letter].width = max(12, len(name) + 4)

    wb.save(output_path)
    log.info("Quote workbook saved (%d rows)", len(quote.rows))
    return output_path
