"""
tasks/store.py -- SQLAlchemy Core persistence layer for tasks.

Pattern: Repository + Data Mapper (same as auth/store.py). TaskRepository
is the contract TaskUsecase depends on; TaskStore implements it and
_row_to_task is the mapper.

Ownership: every row carries the owning username. The store does not decide
who may delete what -- TaskUsecase checks membership before remove().

Security: all queries use bound parameters. No f-strings in SQL.

Layer rule: no imports from api/ or timetables/.
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import Column, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

from auth.models import Username
from core.db import make_engine
from core.errors import HomeroomError, InvalidID
from tasks.models import TITLE_MAX_LENGTH, Task

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_tasks = Table(
    "tasks",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), nullable=False, index=True),
    Column("date", String(10), nullable=False),  # YYYY-MM-DD
    Column("title", String(TITLE_MAX_LENGTH), nullable=False),
)


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class TaskRepository(Protocol):
    def create(self, username: Username, task: Task) -> int: ...

    def get_all(self, username: Username) -> list[Task]: ...

    def remove(self, username: Username, task_id: int) -> None: ...

    def remove_all(self, username: Username) -> None: ...


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TaskStore:
    """Repository for Task records.

    Usage:
        store = TaskStore("sqlite:///homeroom.db")
        task_id = store.create(Username("alice"), Task.parse(-1, "2024-01-01", "buy milk"))
        tasks = store.get_all(Username("alice"))
        store.remove(Username("alice"), task_id)
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        _metadata.create_all(self.engine)

    def create(self, username: Username, task: Task) -> int:
        """Insert task for username and return the assigned id.

        The id is always autoincremented; whatever id the task carries is
        ignored.
        """
        values = {"username": username.name, "date": task.text_date, "title": task.title}
        with self.engine.begin() as conn:
            result = conn.execute(_tasks.insert().values(**values))
            return result.inserted_primary_key[0]

    def get_all(self, username: Username) -> list[Task]:
        """Return every task owned by username, oldest id first.

        A row that cannot be mapped back to a Task raises ValueError instead
        of being skipped.
        """
        with self.engine.connect() as conn:
            rows = conn.execute(
                _tasks.select().where(_tasks.c.username == username.name).order_by(_tasks.c.id)
            ).fetchall()
        return [_row_to_task(r) for r in rows]

    def remove(self, username: Username, task_id: int) -> None:
        if task_id < 1:
            raise InvalidID()
        with self.engine.begin() as conn:
            conn.execute(_tasks.delete().where((_tasks.c.id == task_id) & (_tasks.c.username == username.name)))

    def remove_all(self, username: Username) -> None:
        with self.engine.begin() as conn:
            conn.execute(_tasks.delete().where(_tasks.c.username == username.name))

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_task(row) -> Task:
    try:
        return Task.parse(row.id, row.date, row.title)
    except (ValueError, HomeroomError) as exc:
        raise ValueError(f"Corrupt task row id={row.id!r}") from exc
