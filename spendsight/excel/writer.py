"""
ExcelWriter — builds the styled projection workbook: title block, KPI cards
and tables of row dicts.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from spendsight.excel.formatters import NUMBER_FORMATS, fit_columns, style_header, style_value
from spendsight.excel.styles import (
    CENTER, KPI_FONTS, KPI_LABEL_FONT, SECTION_FONT, SUBTITLE_FONT, TITLE_FONT,
)

ColSpec = tuple[str, str, str]  # (key, kind, label)
Kpi = tuple[float, str, str]    # (value, label, kind)


class ExcelWriter:
    """One workbook; sheets are added in display order."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self.wb.remove(self.wb.active)

    def add_sheet(self, title: str) -> Worksheet:
        return self.wb.create_sheet(title=title)

    def write_title(self, ws: Worksheet, title: str, subtitle: str, width: int = 6) -> int:
        """Merged title + subtitle on rows 1-2. Returns the next free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            cell = ws.cell(row=row, column=1, value=text)
            cell.font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    def write_kpis(self, ws: Worksheet, row: int, kpis: Iterable[Kpi], spacing: int = 2) -> int:
        """Big value over a small label, left to right.

        ``signed`` KPIs are green when >= 0 and red otherwise.
        """
        for i, (value, label, kind) in enumerate(kpis):
            col = 1 + i * spacing
            if kind == "signed":
                tone = "up" if value >= 0 else "down"
            else:
                tone = "neutral"
            cell = ws.cell(row=row, column=col, value=value)
            cell.font = KPI_FONTS[tone]
            cell.alignment = CENTER
            cell.number_format = NUMBER_FORMATS.get(kind, "General")

            label_cell = ws.cell(row=row + 1, column=col, value=label)
            label_cell.font = KPI_LABEL_FONT
            label_cell.alignment = CENTER
        return row + 3

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        rows: list[dict],
        highlight_fn: Optional[Callable[[dict], Optional[str]]] = None,
        total_label: Optional[str] = None,
    ) -> int:
        """Header row, one row per dict, optional summed total row.

        Returns the row after the last one written.
        """
        for col, (_, _, label) in enumerate(columns, 1):
            style_header(ws.cell(row=start_row, column=col, value=label))

        row = start_row + 1
        for data in rows:
            hl = highlight_fn(data) if highlight_fn else None
            for col, (key, kind, _) in enumerate(columns, 1):
                style_value(ws.cell(row=row, column=col, value=data.get(key)), kind, highlight=hl)
            row += 1

        if total_label and rows:
            for col, (key, kind, _) in enumerate(columns, 1):
                if col == 1:
                    value, kind = total_label, "text"
                elif kind in ("currency", "number"):
                    value = sum(r.get(key) or 0 for r in rows)
                else:
                    value = None
                style_value(ws.cell(row=row, column=col, value=value), kind, total=True)
            row += 1

        fit_columns(ws)
        ws.freeze_panes = f"A{start_row + 1}"
        return row

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
