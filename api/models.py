"""
API request and response models for Homeroom REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in tasks/models.py and
timetables/models.py, which own the internal domain representation. Route
handlers map between the two.

Length limits are counted in characters, not bytes (subject/room 85,
memo 170, title 85).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tasks.models import TITLE_MAX_LENGTH, Task, parse_date
from timetables.codec import decode_timetables, encode_timetables
from timetables.models import MEMO_MAX_LENGTH, ROOM_MAX_LENGTH, SUBJECT_MAX_LENGTH, Timetables

# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class TaskBody(BaseModel):
    """Request body for POST /api/v1/tasks.

    id is -1 for a new task. Numeric strings ("-1", "12") are accepted as
    well as JSON integers; 0 is rejected. A positive id is validated but not
    stored: the task store always assigns the id.
    """

    id: int = Field(ge=-1)
    date: str
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)

    @field_validator("id")
    @classmethod
    def reject_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("id must not be 0")
        return value

    @field_validator("date")
    @classmethod
    def check_layout(cls, value: str) -> str:
        parse_date(value)
        return value

    def to_task(self) -> Task:
        return Task.parse(self.id, self.date, self.title)


class TaskRow(BaseModel):
    """One task in GET /api/v1/tasks. id is a string, matching the request form."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: str
    title: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskRow":
        return cls(id=str(task.id), date=task.text_date, title=task.title)


class TasksResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    tasks: list[TaskRow]


# ---------------------------------------------------------------------------
# Timetables
# ---------------------------------------------------------------------------


class ClassBody(BaseModel):
    """One occupied period. A missing room means "no room assigned"."""

    subject: str = Field(min_length=1, max_length=SUBJECT_MAX_LENGTH)
    room: Optional[str] = Field(default=None, max_length=ROOM_MAX_LENGTH)
    memo: Optional[str] = Field(default=None, max_length=MEMO_MAX_LENGTH)


class DayBody(BaseModel):
    """Periods "1".."5" of one weekday. A missing period has no class."""

    model_config = ConfigDict(populate_by_name=True)

    first: Optional[ClassBody] = Field(default=None, alias="1")
    second: Optional[ClassBody] = Field(default=None, alias="2")
    third: Optional[ClassBody] = Field(default=None, alias="3")
    fourth: Optional[ClassBody] = Field(default=None, alias="4")
    fifth: Optional[ClassBody] = Field(default=None, alias="5")


class WeekBody(BaseModel):
    mon: DayBody
    tue: DayBody
    wed: DayBody
    thu: DayBody
    fri: DayBody


class TimetablesBody(BaseModel):
    """Request body for PUT and response body for GET /api/v1/timetables.

    Responses are serialized with exclude_none, so an empty period and a
    missing room are both omitted rather than sent as null or "".
    """

    timetable: WeekBody

    def to_timetables(self) -> Timetables:
        return decode_timetables(self.timetable.model_dump(by_alias=True, exclude_none=True))

    @classmethod
    def from_timetables(cls, timetables: Timetables) -> "TimetablesBody":
        return cls.model_validate({"timetable": encode_timetables(timetables)})


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)
