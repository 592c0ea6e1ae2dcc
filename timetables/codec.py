"""
timetables/codec.py -- Tri-state Class <-> optional subject/room/memo mapping.

The external slot representation is either None (absent) or a dict with a
"subject" key and optional "room" and "memo" keys. Decoding:

  None                     -> EmptyClass()
  {"subject", no "room"}   -> NoRoomClass(subject, memo or "")
  {"subject", "room"}      -> FullClass(subject, room, memo or "")

Encoding inverts this exactly. "room" is omitted for NoRoomClass, never
written as "". "memo" is omitted whenever it is "", so an empty memo and a
missing memo read back the same way.

The HTTP layer (api/models.py) and the timetables store's JSON column both
go through these functions, so the three variants survive persistence as
well as transport.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from timetables.models import DAYS, PERIODS, Class, EmptyClass, FullClass, NoRoomClass, Timetable, Timetables

Slot = Optional[dict[str, str]]


def decode_class(slot: Optional[Mapping[str, Any]]) -> Class:
    if slot is None:
        return EmptyClass()

    memo = slot.get("memo") or ""
    room = slot.get("room")
    if room is None:
        return NoRoomClass(subject=slot["subject"], memo=memo)
    return FullClass(subject=slot["subject"], room=room, memo=memo)


def encode_class(value: Class) -> Slot:
    if isinstance(value, EmptyClass):
        return None

    slot: dict[str, str] = {"subject": value.subject}
    if isinstance(value, FullClass):
        slot["room"] = value.room
    if value.memo:
        slot["memo"] = value.memo
    return slot


def decode_timetable(day: Mapping[str, Any]) -> Timetable:
    """Decode a {"1": slot, ..., "5": slot} mapping. Missing periods are empty."""
    return Timetable(periods=tuple(decode_class(day.get(str(n))) for n in range(1, PERIODS + 1)))


def encode_timetable(timetable: Timetable) -> dict[str, Slot]:
    """Encode a weekday. Empty periods are left out of the mapping entirely."""
    day: dict[str, Slot] = {}
    for n, value in enumerate(timetable.periods, start=1):
        slot = encode_class(value)
        if slot is not None:
            day[str(n)] = slot
    return day


def decode_timetables(week: Mapping[str, Any]) -> Timetables:
    """Decode {"mon": day, ..., "fri": day}. Raises KeyError if a weekday is missing."""
    return Timetables(**{name: decode_timetable(week[name]) for name in DAYS})


def encode_timetables(timetables: Timetables) -> dict[str, dict[str, Slot]]:
    return {name: encode_timetable(timetable) for name, timetable in timetables.days()}
