from __future__ import annotations
from datetime import date
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple
from PIL import Image, ImageDraw, ImageFont

from .models import day_key
from .month import WEEKDAY_NAMES, month_grid, month_label, style_for_type

PADDING = 40
MARKER = 12
MARKER_GAP = 4
HEADER_H = 90
WEEKDAY_ROW_H = 50
GRID_ROWS = 6

EVENT_FILL = (239, 68, 68)
TODAY_FILL = (187, 247, 208)
SELECTED_FILL = (59, 130, 246)
BORDER = (156, 163, 175)

def _load_font(size: int) -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()

def cell_box(index: int, canvas_w: int, canvas_h: int) -> Tuple[int, int, int, int]:
    """Pixel box of grid cell ``index`` (row-major, Sunday first)."""
    top = PADDING + HEADER_H + WEEKDAY_ROW_H
    cell_w = (canvas_w - 2 * PADDING) // 7
    cell_h = (canvas_h - top - PADDING) // GRID_ROWS
    row, col = divmod(index, 7)
    x0 = PADDING + col * cell_w
    y0 = top + row * cell_h
    return x0, y0, x0 + cell_w, y0 + cell_h

def _cell_fill(day: date, event_days: set, today: Optional[date], selected: Optional[date]):
    # Days with events win over the selection, which wins over "today".
    if day_key(day) in event_days:
        return EVENT_FILL, "white"
    if selected is not None and day == selected:
        return SELECTED_FILL, "white"
    if today is not None and day == today:
        return TODAY_FILL, "black"
    return "white", "black"

def render_month(
    canvas_w: int,
    canvas_h: int,
    year: int,
    month: int,
    event_days: Iterable[str],
    today: Optional[date] = None,
    selected: Optional[date] = None,
    day_types: Optional[Mapping[str, Sequence[str]]] = None,
    palette: Optional[Dict[str, Sequence[int]]] = None,
) -> Image.Image:
    img = Image.new("RGB", (canvas_w, canvas_h), "white")
    d = ImageDraw.Draw(img)

    font_header = _load_font(48)
    font_weekday = _load_font(26)
    font_day = _load_font(30)
    marked = set(event_days)

    label = month_label(year, month)
    label_w = d.textlength(label, font=font_header)
    d.text(((canvas_w - label_w) / 2, PADDING), label, fill="black", font=font_header)

    weekday_y = PADDING + HEADER_H
    for col, name in enumerate(WEEKDAY_NAMES):
        x0, _, x1, _ = cell_box(col, canvas_w, canvas_h)
        name_w = d.textlength(name, font=font_weekday)
        d.text((x0 + (x1 - x0 - name_w) / 2, weekday_y + 10), name, fill="black", font=font_weekday)

    for idx, day in enumerate(month_grid(year, month)):
        box = cell_box(idx, canvas_w, canvas_h)
        if day is None:
            d.rectangle(box, outline=BORDER, width=1)
            continue
        fill, text_fill = _cell_fill(day, marked, today, selected)
        d.rectangle(box, fill=fill, outline=BORDER, width=1)
        d.text((box[0] + 10, box[1] + 8), str(day.day), fill=text_fill, font=font_day)
        _draw_type_markers(d, box, (day_types or {}).get(day_key(day), []), palette)

    return img

def _draw_type_markers(
    draw: ImageDraw.ImageDraw,
    box: Tuple[int, int, int, int],
    types: Sequence[str],
    palette: Optional[Dict[str, Sequence[int]]],
) -> None:
    # One small swatch per event, left to right, clipped to the cell width.
    x0, _, x1, y1 = box
    fits = max(0, (x1 - x0 - 30) // (MARKER + MARKER_GAP))
    for i, event_type in enumerate(list(types)[:fits]):
        left = x0 + 10 + i * (MARKER + MARKER_GAP)
        top = y1 - 10 - MARKER
        draw.rectangle((left, top, left + MARKER, top + MARKER), fill=style_for_type(event_type, palette), outline="black")
