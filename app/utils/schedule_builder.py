"""
Raw timetable JSON -> WeekGrid.

    {"data": [{"monday": [{"weeks": "1,2", "className": ..., ...}], ...}, ...]}

The index of each record in `data` is the section (period) index.
Building is a fold: the input is flattened into placements
(week, day, section, meeting) which are merged one at a time into a grid.
"""
import json
import logging
from functools import reduce
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from app.schemas.timetable import (
    CourseMeeting, MergedCell, Placement, SectionSchedule, WeekGrid
)
from app.utils.errors import EmptyInputError, MalformedInputError, MalformedJSONError
from app.utils.timeslots import DAYS, SECTIONS_PER_DAY, parse_weeks

logger = logging.getLogger("app.schedule_builder")

REQUIRED_FIELDS = ("weeks", "className", "classroomName", "teacherName")

EMPTY_DAY = (None,) * SECTIONS_PER_DAY


def _reject_constant(name: str):
    # NaN / Infinity 不是合法 JSON
    raise ValueError(f"invalid JSON constant: {name}")


def load_payload(text: Optional[str]) -> Any:
    if text is None or not text.strip():
        raise EmptyInputError()
    try:
        return json.loads(text.strip(), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.info("JSON parse failed: %s", e)
        raise MalformedJSONError() from e


def to_text(value: Any) -> str:
    # [1, 2] -> "1,2"
    if isinstance(value, list):
        return ",".join(to_text(v) for v in value)
    return str(value)


def to_meeting(raw: Any) -> Optional[CourseMeeting]:
    # 四個欄位缺一（或空值）就略過
    if not isinstance(raw, dict):
        return None
    if any(not raw.get(f) for f in REQUIRED_FIELDS):
        return None
    return CourseMeeting(**{f: to_text(raw[f]) for f in REQUIRED_FIELDS})


def parse_timetable(raw: Any) -> List[SectionSchedule]:
    if not isinstance(raw, dict) or not isinstance(raw.get("data"), list):
        raise MalformedInputError()

    sections = []
    skipped = 0
    for section_index, record in enumerate(raw["data"]):
        if not isinstance(record, dict):
            logger.debug("section %d is not an object, ignored", section_index)
            continue
        days = {}
        for day in DAYS:
            entries = record.get(day)
            if not isinstance(entries, list):
                continue
            meetings = []
            for pos, entry in enumerate(entries):
                meeting = to_meeting(entry)
                if meeting is None:
                    skipped += 1
                    logger.debug("skip meeting section=%d day=%s #%d", section_index, day, pos)
                    continue
                meetings.append(meeting)
            days[day] = meetings
        sections.append(SectionSchedule(section_index=section_index, days=days))

    if skipped:
        logger.info("skipped %d incomplete course meeting(s)", skipped)
    return sections


def max_week(sections: Iterable[SectionSchedule]) -> int:
    best = 0
    for section in sections:
        for meetings in section.days.values():
            for m in meetings:
                best = max([best] + parse_weeks(m.weeks))
    return best


def iter_placements(sections: Iterable[SectionSchedule]) -> Iterator[Placement]:
    """
    section asc -> day (DAYS order) -> meeting order -> week order in `weeks`
    """
    for section in sections:
        if section.section_index >= SECTIONS_PER_DAY:
            if any(section.days.values()):
                logger.warning(
                    "section %d is outside the %d fixed periods, meetings dropped",
                    section.section_index, SECTIONS_PER_DAY,
                )
            continue
        for day in DAYS:
            for meeting in section.days.get(day, []):
                for week in parse_weeks(meeting.weeks):
                    yield Placement(week, day, section.section_index, meeting)


def merge_placement(grid: WeekGrid, placement: Placement) -> WeekGrid:
    """
    Returns a new grid with `placement` merged in; `grid` is left untouched.

    Empty slot -> new MergedCell from the meeting.
    Occupied slot -> teacher appended if not present yet. Class and room of
    the later meeting are ignored.
    """
    week, day, idx, meeting = placement
    week_days = grid.get(week, {})
    slots = week_days.get(day, EMPTY_DAY)

    current = slots[idx]
    if current is None:
        cell = MergedCell.from_meeting(meeting)
    else:
        cell = current.with_teacher(meeting.teacher_name)
        if cell is current:
            return grid

    new_slots = slots[:idx] + (cell,) + slots[idx + 1:]
    return {**grid, week: {**week_days, day: new_slots}}


def build(raw: Any) -> Tuple[WeekGrid, int]:
    sections = parse_timetable(raw)
    grid = reduce(merge_placement, iter_placements(sections), {})
    top = max_week(sections)
    logger.debug("grid built: %d week(s) with meetings, max week %d", len(grid), top)
    return grid, top
