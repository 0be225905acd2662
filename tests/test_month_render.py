from datetime import date

from daycal.month import UNKNOWN_TYPE_COLOR, month_grid, month_label, shift_month, style_for_type
from daycal.render import EVENT_FILL, SELECTED_FILL, TODAY_FILL, cell_box, render_month


def test_month_grid_pads_to_sunday_start():
    # February 1st 2026 is a Sunday, March 1st 2026 is a Sunday, August 1st 2026 is a Saturday.
    assert month_grid(2026, 2)[0] == date(2026, 2, 1)
    assert len(month_grid(2026, 2)) == 28

    august = month_grid(2026, 8)
    assert august[:6] == [None] * 6
    assert august[6] == date(2026, 8, 1)
    assert august[-1] == date(2026, 8, 31)


def test_month_label_and_navigation():
    assert month_label(2026, 2) == "February 2026"
    assert shift_month(2026, 1, -1) == (2025, 12)
    assert shift_month(2026, 12, 1) == (2027, 1)
    assert shift_month(2026, 5, 0) == (2026, 5)


def test_unknown_event_types_use_default_style():
    assert style_for_type("Work") != UNKNOWN_TYPE_COLOR
    assert style_for_type("Birthday") == UNKNOWN_TYPE_COLOR
    assert style_for_type("Gym", {"Gym": [1, 2, 3]}) == (1, 2, 3)


def _pixel_near_cell_corner(img, index):
    x0, y0, x1, y1 = cell_box(index, img.width, img.height)
    return img.getpixel((x1 - 6, y1 - 6))


def test_render_month_highlights_event_today_and_selected_days():
    # August 2026 starts on a Saturday, so day N sits in cell N + 5.
    img = render_month(
        canvas_w=700,
        canvas_h=600,
        year=2026,
        month=8,
        event_days=["2026-08-03", "2026-08-10", "2026-09-01"],
        today=date(2026, 8, 4),
        selected=date(2026, 8, 10),
    )

    assert img.size == (700, 600)
    assert _pixel_near_cell_corner(img, 3 + 5) == EVENT_FILL
    assert _pixel_near_cell_corner(img, 4 + 5) == TODAY_FILL
    # Events take precedence over the selection.
    assert _pixel_near_cell_corner(img, 10 + 5) == EVENT_FILL
    assert _pixel_near_cell_corner(img, 11 + 5) == (255, 255, 255)


def test_render_month_marks_selected_day():
    img = render_month(700, 600, 2026, 2, event_days=[], selected=date(2026, 2, 14))

    assert _pixel_near_cell_corner(img, 13) == SELECTED_FILL


def test_render_month_draws_one_swatch_per_event_type():
    img = render_month(
        700,
        600,
        2026,
        2,
        event_days=["2026-02-02"],
        day_types={"2026-02-02": ["Work", "Birthday"]},
        palette={"Work": [10, 20, 30]},
    )

    x0, _, _, y1 = cell_box(1, 700, 600)
    assert img.getpixel((x0 + 16, y1 - 16)) == (10, 20, 30)
    assert img.getpixel((x0 + 32, y1 - 16)) == UNKNOWN_TYPE_COLOR
