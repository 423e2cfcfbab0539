from typing import List, Optional, Sequence

from app.schemas.timetable import MergedCell, Sheet, WeekGrid
from app.utils.timeslots import (
    CORNER_LABEL, DAY_LABELS, DAYS, SECTIONS_PER_DAY, period_label, sheet_title
)

TEACHER_SEPARATOR = "、"

MIN_COLUMN_WIDTH = 15
WIDTH_FACTOR = 1.2
HEADER_ROW_HEIGHT = 25
LINE_HEIGHT = 22

HEADERS = [CORNER_LABEL] + DAY_LABELS


def format_cell(cell: Optional[MergedCell]) -> str:
    if cell is None:
        return ""
    return f"{cell.class_name}\n{cell.classroom_name}\n{TEACHER_SEPARATOR.join(cell.teachers)}"


def line_width(line: str) -> int:
    # 全形字（code point > 255）算 2 格
    return sum(2 if ord(ch) > 255 else 1 for ch in line)


def display_width(text: str) -> int:
    """Width of the longest line of `text`."""
    return max(line_width(line) for line in (text or "").split("\n"))


def line_count(text: str) -> int:
    return len((text or "").split("\n"))


def column_width(texts: Sequence[str]) -> float:
    widest = max((display_width(t) for t in texts), default=0)
    return max(MIN_COLUMN_WIDTH, widest * WIDTH_FACTOR)


def row_height(texts: Sequence[str], header: bool = False) -> float:
    if header:
        return HEADER_ROW_HEIGHT
    lines = max([1] + [line_count(t) for t in texts])
    return lines * LINE_HEIGHT


def week_rows(grid: WeekGrid, week: int) -> List[List[str]]:
    days = grid.get(week, {})
    rows = [list(HEADERS)]
    for idx in range(SECTIONS_PER_DAY):
        row = [period_label(idx)]
        for day in DAYS:
            slots = days.get(day)
            row.append(format_cell(slots[idx] if slots else None))
        rows.append(row)
    return rows


def render_week(grid: WeekGrid, week: int) -> Sheet:
    rows = week_rows(grid, week)
    columns = list(zip(*rows))
    return Sheet(
        week=week,
        title=sheet_title(week),
        rows=rows,
        column_widths=[column_width(col) for col in columns],
        row_heights=[row_height(r, header=(i == 0)) for i, r in enumerate(rows)],
    )


def render(grid: WeekGrid, max_week: int) -> List[Sheet]:
    """One sheet per week, 1..max_week, weeks without meetings included."""
    return [render_week(grid, week) for week in range(1, max_week + 1)]
