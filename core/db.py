"""
core/db.py -- Engine construction and dialect helpers shared by every store.

Each store (auth/store.py, tasks/store.py, timetables/store.py) owns its own
Table definitions but builds its Engine here so SQLite connections get the
same thread and journal settings everywhere.

Layer rule: core/ is the kernel. No imports from api/, auth/, tasks/, or
timetables/.
"""

from __future__ import annotations

from sqlalchemy import Table, create_engine, event
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.engine import Engine


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def make_engine(db_url: str) -> Engine:
    """Create an Engine for db_url.

    SQLite engines allow cross-thread use (FastAPI runs sync routes in a
    thread pool) and switch to WAL on every new connection.
    """
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_wal_mode)
    return engine


# Dialects upsert() can build a single-statement create-or-replace for.
UPSERT_DIALECTS = frozenset({"sqlite", "postgresql", "mysql", "mariadb"})


def upsert(engine: Engine, table: Table, key: str, values: dict):
    """Build a single atomic create-or-replace statement keyed on key.

    SQLite and PostgreSQL use INSERT ... ON CONFLICT (key) DO UPDATE;
    MySQL and MariaDB use INSERT ... ON DUPLICATE KEY UPDATE. Settings
    rejects any other dialect at startup.
    """
    updates = {k: v for k, v in values.items() if k != key}
    name = engine.dialect.name
    if name in ("mysql", "mariadb"):
        return mysql.insert(table).values(**values).on_duplicate_key_update(**updates)
    if name == "postgresql":
        stmt = postgresql.insert(table).values(**values)
    elif name == "sqlite":
        stmt = sqlite.insert(table).values(**values)
    else:
        raise ValueError(f"upsert is not supported on {name!r}")
    return stmt.on_conflict_do_update(index_elements=[key], set_=updates)
