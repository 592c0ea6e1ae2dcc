"""
timetables/models.py -- Weekly timetable domain model.

A slot is a tri-state Class, modelled as a closed union of three frozen
dataclasses rather than one record with nullable room/memo fields:

  EmptyClass                     no class this period
  NoRoomClass(subject, memo)     a class with no room assigned
  FullClass(subject, room, memo) a class with a room

memo is always a str ("" when not given). Length limits on subject, room and
memo are enforced at the HTTP boundary (api/models.py), not here.

Layer rule: no imports from api/ or tasks/.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

SUBJECT_MAX_LENGTH = 85
ROOM_MAX_LENGTH = 85
MEMO_MAX_LENGTH = 170

DAYS = ("mon", "tue", "wed", "thu", "fri")
PERIODS = 5


@dataclass(frozen=True)
class EmptyClass:
    pass


@dataclass(frozen=True)
class NoRoomClass:
    subject: str
    memo: str = ""


@dataclass(frozen=True)
class FullClass:
    subject: str
    room: str
    memo: str = ""


Class = Union[EmptyClass, NoRoomClass, FullClass]


@dataclass(frozen=True)
class Timetable:
    """One weekday: exactly five Class slots, period 1 first."""

    periods: tuple[Class, ...]

    def __post_init__(self) -> None:
        if len(self.periods) != PERIODS:
            raise ValueError(f"A timetable has exactly {PERIODS} periods, got {len(self.periods)}.")

    @classmethod
    def empty(cls) -> "Timetable":
        return cls(periods=tuple(EmptyClass() for _ in range(PERIODS)))

    def period(self, number: int) -> Class:
        """Return the slot for period number (1-based)."""
        if not 1 <= number <= PERIODS:
            raise IndexError(f"period must be between 1 and {PERIODS}, got {number}")
        return self.periods[number - 1]


@dataclass(frozen=True)
class Timetables:
    """A full Monday-Friday week. At most one exists per username."""

    mon: Timetable
    tue: Timetable
    wed: Timetable
    thu: Timetable
    fri: Timetable

    @classmethod
    def empty(cls) -> "Timetables":
        return cls(**{day: Timetable.empty() for day in DAYS})

    def days(self) -> Iterator[tuple[str, Timetable]]:
        for day in DAYS:
            yield day, getattr(self, day)
