"""
Colors, fonts, fills and borders for the projection workbook.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# Palette: blue for the actual balance, green for the projected one
NAVY = "1A365D"
SAVINGS_GREEN = "2F855A"
RED = "C53030"
MUTED = "666666"
STRIPE = "F7FAFC"
TOTAL_BG = "EBF8FF"
CREDIT_BG = "F0FFF4"
DEBIT_BG = "FFF5F5"


def _font(size: int, color: str = "000000", **kw) -> Font:
    return Font(name="Calibri", size=size, color=color, **kw)


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, edge: str = "thin") -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side, top=Side(style=edge, color=color), bottom=Side(style=edge, color=color))


TITLE_FONT = _font(24, NAVY, bold=True)
SUBTITLE_FONT = _font(12, MUTED, italic=True)
SECTION_FONT = _font(14, NAVY, bold=True)
HEADER_FONT = _font(11, "FFFFFF", bold=True)
CELL_FONT = _font(10)
TOTAL_FONT = _font(10, bold=True)
KPI_FONTS = {
    "neutral": _font(28, NAVY, bold=True),
    "up": _font(28, SAVINGS_GREEN, bold=True),
    "down": _font(28, RED, bold=True),
}
KPI_LABEL_FONT = _font(10, MUTED)

HEADER_FILL = _fill(NAVY)
STRIPE_FILL = _fill(STRIPE)
TOTAL_FILL = _fill(TOTAL_BG)
ROW_FILLS = {"credit": _fill(CREDIT_BG), "debit": _fill(DEBIT_BG)}

CELL_BORDER = _box("CCCCCC")
HEADER_BORDER = _box(NAVY)
TOTAL_BORDER = _box("999999", edge="medium")

CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
