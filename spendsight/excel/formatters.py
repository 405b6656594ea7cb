"""
Cell-level formatting for the projection workbook.
"""
from __future__ import annotations

from openpyxl.cell.cell import Cell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from spendsight.excel.styles import (
    CELL_BORDER, CELL_FONT, CENTER, HEADER_BORDER, HEADER_FILL, HEADER_FONT,
    LEFT, RIGHT, ROW_FILLS, STRIPE_FILL, TOTAL_BORDER, TOTAL_FILL, TOTAL_FONT,
)

NUMBER_FORMATS = {
    "currency": '"$"#,##0.00;[Red]-"$"#,##0.00',
    "signed": '+"$"#,##0.00;-"$"#,##0.00;"$"0.00',
    "percent": '0.0"%"',   # values are already 0-100
    "number": "#,##0",
    "date": "yyyy-mm-dd",
}
NUMERIC_KINDS = {"currency", "signed", "percent", "number"}


def style_header(cell: Cell) -> None:
    cell.font = HEADER_FONT
    cell.fill = HEADER_FILL
    cell.alignment = CENTER
    cell.border = HEADER_BORDER


def style_value(cell: Cell, kind: str, *, total: bool = False, highlight: str | None = None) -> None:
    """Font, border, alignment, number format and fill for one table cell."""
    cell.font = TOTAL_FONT if total else CELL_FONT
    cell.border = TOTAL_BORDER if total else CELL_BORDER
    cell.alignment = RIGHT if kind in NUMERIC_KINDS else LEFT
    if kind in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[kind]

    if total:
        cell.fill = TOTAL_FILL
    elif highlight in ROW_FILLS:
        cell.fill = ROW_FILLS[highlight]
    elif cell.row % 2 == 0:
        cell.fill = STRIPE_FILL


def fit_columns(ws: Worksheet, lo: int = 10, hi: int = 45) -> None:
    """Width each column to its longest rendered value, within [lo, hi]."""
    widths: dict[int, int] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is not None:
                widths[cell.column] = max(widths.get(cell.column, 0), len(str(cell.value)))
    for col, width in widths.items():
        ws.column_dimensions[get_column_letter(col)].width = min(max(width + 2, lo), hi)
