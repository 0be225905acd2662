from __future__ import annotations

import calendar
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

Color = Tuple[int, int, int]

DEFAULT_TYPE_COLORS: Dict[str, Color] = {
    "Work": (147, 197, 253),
    "Personal": (134, 239, 172),
    "Holiday": (252, 165, 165),
}
UNKNOWN_TYPE_COLOR: Color = (229, 231, 235)


def month_grid(year: int, month: int) -> List[Optional[date]]:
    """Cells of a Sunday-first month view: leading None padding, then each day."""
    first_weekday, days_in_month = calendar.monthrange(year, month)
    # calendar uses Monday == 0
    leading = (first_weekday + 1) % 7
    cells: List[Optional[date]] = [None] * leading
    cells.extend(date(year, month, d) for d in range(1, days_in_month + 1))
    return cells


def month_label(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def style_for_type(event_type: str, palette: Dict[str, Sequence[int]] | None = None) -> Color:
    colors = palette if palette is not None else DEFAULT_TYPE_COLORS
    value = colors.get(event_type)
    if value is None:
        return UNKNOWN_TYPE_COLOR
    r, g, b = value
    return (int(r), int(g), int(b))
