"""
timetables/store.py -- SQLAlchemy Core persistence layer for timetables.

One row per username holding the whole week as JSON (the same shape the
HTTP layer speaks, produced by timetables/codec.py). add() is a single
INSERT ... ON CONFLICT DO UPDATE, so replacing a week is atomic and there
is no read-modify-write window for a concurrent add to slip into.

Security: all queries use bound parameters. No f-strings in SQL.

Layer rule: no imports from api/ or tasks/.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy import Column, MetaData, String, Table, Text
from sqlalchemy.engine import Engine

from auth.models import Username
from core.db import make_engine, upsert
from timetables.codec import decode_timetables, encode_timetables
from timetables.models import Timetables

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_timetables = Table(
    "timetables",
    _metadata,
    Column("username", String(255), primary_key=True),
    Column("week", Text, nullable=False),  # JSON object keyed mon..fri
    Column("updated_at", String(32), nullable=False),
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class TimetablesRepository(Protocol):
    def add(self, username: Username, timetables: Timetables) -> None: ...

    def get(self, username: Username) -> Timetables | None: ...


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TimetablesStore:
    """Repository for each user's single Timetables value.

    Usage:
        store = TimetablesStore("sqlite:///homeroom.db")
        store.add(Username("alice"), Timetables.empty())
        week = store.get(Username("alice"))   # None if never added
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        _metadata.create_all(self.engine)

    def add(self, username: Username, timetables: Timetables) -> None:
        """Create or wholesale-replace username's week."""
        values = {
            "username": username.name,
            "week": json.dumps(encode_timetables(timetables), ensure_ascii=False),
            "updated_at": _now_iso(),
        }
        with self.engine.begin() as conn:
            conn.execute(upsert(self.engine, _timetables, "username", values))

    def get(self, username: Username) -> Timetables | None:
        with self.engine.connect() as conn:
            row = conn.execute(_timetables.select().where(_timetables.c.username == username.name)).fetchone()
        return _row_to_timetables(row) if row is not None else None

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_timetables(row) -> Timetables:
    return decode_timetables(json.loads(row.week))
