"""Unit tests for core/db.py -- dialect upsert statements.

Covers:
- sqlite and postgresql compile to INSERT ... ON CONFLICT DO UPDATE
- mysql and mariadb compile to INSERT ... ON DUPLICATE KEY UPDATE
- the key column is never part of the update set
- repeated upserts on SQLite replace the row in place
"""

import pytest
from sqlalchemy import Column, MetaData, String, Table, create_mock_engine, select

from core.db import make_engine, upsert

_metadata = MetaData()

_weeks = Table(
    "weeks",
    _metadata,
    Column("username", String(255), primary_key=True),
    Column("week", String(255), nullable=False),
)


def _compiled(url: str) -> str:
    engine = create_mock_engine(url, lambda sql, *args, **kwargs: None)
    stmt = upsert(engine, _weeks, "username", {"username": "alice", "week": "{}"})
    return str(stmt.compile(dialect=engine.dialect))


@pytest.mark.parametrize("url", ["sqlite://", "postgresql://"])
def test_on_conflict_dialects(url: str) -> None:
    sql = _compiled(url)
    assert "ON CONFLICT (username) DO UPDATE" in sql
    assert "username =" not in sql.split("DO UPDATE", 1)[1]


@pytest.mark.parametrize("url", ["mysql://", "mariadb://"])
def test_duplicate_key_dialects(url: str) -> None:
    sql = _compiled(url)
    assert "ON DUPLICATE KEY UPDATE" in sql
    update_clause = sql.split("ON DUPLICATE KEY UPDATE", 1)[1]
    assert "week" in update_clause
    assert "username" not in update_clause


def test_unsupported_dialect_is_a_value_error() -> None:
    engine = create_mock_engine("oracle://", lambda sql, *args, **kwargs: None)
    with pytest.raises(ValueError, match="not supported"):
        upsert(engine, _weeks, "username", {"username": "alice", "week": "{}"})


def test_upsert_replaces_row_on_sqlite() -> None:
    engine = make_engine("sqlite:///:memory:")
    _metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(upsert(engine, _weeks, "username", {"username": "alice", "week": "first"}))
        conn.execute(upsert(engine, _weeks, "username", {"username": "alice", "week": "second"}))
        rows = conn.execute(select(_weeks)).all()
    assert [tuple(r) for r in rows] == [("alice", "second")]
    engine.dispose()
