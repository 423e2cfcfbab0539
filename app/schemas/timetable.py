from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class CourseMeeting(BaseModel):
    """One course meeting as pasted by the user (camelCase keys)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    weeks: str
    class_name: str = Field(alias="className")
    classroom_name: str = Field(alias="classroomName")
    teacher_name: str = Field(alias="teacherName")


class SectionSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    # position in the input `data` array, 0-based
    section_index: int
    days: Dict[str, List[CourseMeeting]] = Field(default_factory=dict)


class MergedCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    class_name: str
    classroom_name: str
    teachers: Tuple[str, ...] = ()

    @classmethod
    def from_meeting(cls, meeting: CourseMeeting) -> "MergedCell":
        return cls(
            class_name=meeting.class_name,
            classroom_name=meeting.classroom_name,
            teachers=(meeting.teacher_name,),
        )

    def with_teacher(self, name: str) -> "MergedCell":
        if name in self.teachers:
            return self
        return self.model_copy(update={"teachers": self.teachers + (name,)})


class Placement(NamedTuple):
    week: int
    day: str
    section_index: int
    meeting: CourseMeeting


DaySlots = Tuple[Optional[MergedCell], ...]
# week -> day -> 12 slots
WeekGrid = Dict[int, Dict[str, DaySlots]]


class Sheet(BaseModel):
    week: int
    title: str
    rows: List[List[str]]
    column_widths: List[float]
    row_heights: List[float]


class GenerationState(str, Enum):
    in_progress = "in_progress"
    success = "success"
    failure = "failure"


class GenerationStatusOut(BaseModel):
    state: GenerationState
    message: str
    max_week: Optional[int] = None
    sheet_count: Optional[int] = None


class TimetablePreviewOut(BaseModel):
    status: GenerationStatusOut
    max_week: int
    sheets: List[Sheet] = []
