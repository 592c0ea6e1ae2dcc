"""
tasks/models.py -- Task domain object.

A Task is owned by exactly one Username, but ownership lives with the store
(the username is passed alongside the task), not inside the dataclass.

id sentinel values:
  -1  not yet persisted; the store assigns the real id on create()
   0  never valid -- construction raises IDIsNotZero
  >0  persisted identity

Layer rule: no imports from api/ or timetables/.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime

from core.errors import IDIsNotZero

# Textual layout of Task.date at every boundary (HTTP and storage).
DATE_LAYOUT = "%Y-%m-%d"

# strptime accepts "2024-1-1"; the wire form requires zero-padded fields.
_DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

UNASSIGNED_ID = -1

TITLE_MAX_LENGTH = 85


def parse_date(text: str) -> date:
    """Parse a YYYY-MM-DD date. Raises ValueError on any other layout."""
    if not _DATE_SHAPE.fullmatch(text):
        raise ValueError(f"date {text!r} does not match YYYY-MM-DD")
    return datetime.strptime(text, DATE_LAYOUT).date()


@dataclass(frozen=True)
class Task:
    id: int
    date: date
    title: str

    def __post_init__(self) -> None:
        if self.id == 0:
            raise IDIsNotZero()

    @classmethod
    def parse(cls, id: int, text_date: str, title: str) -> "Task":
        """Build a Task from its textual form. Raises ValueError on a bad date."""
        return cls(id=id, date=parse_date(text_date), title=title)

    @property
    def text_date(self) -> str:
        return self.date.strftime(DATE_LAYOUT)

    @property
    def is_persisted(self) -> bool:
        return self.id > 0
