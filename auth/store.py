"""
auth/store.py -- SQLAlchemy Core persistence layer for session credentials.

Pattern: Repository + Data Mapper. CredentialRepository is the contract the
service depends on; CredentialStore implements it on SQLAlchemy Core and
_row_to_credential is the mapper. Service code never touches SQL directly,
and tests may substitute any object that satisfies the Protocol.

Security:
  All queries use bound parameters. No f-strings in SQL.
  token is the primary key, so one token can never resolve to two users.

Layer rule: no imports from api/, tasks/, or timetables/.
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy import Column, MetaData, String, Table, select, text
from sqlalchemy.engine import Engine

from auth.models import Credential, Token, Username
from core.db import make_engine

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_credentials = Table(
    "credentials",
    _metadata,
    Column("token", String(255), primary_key=True),
    Column("username", String(255), nullable=False, index=True),
)


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class CredentialRepository(Protocol):
    def append(self, credential: Credential) -> None: ...

    def remove(self, username: Username) -> None: ...

    def exists(self, token: Token) -> bool: ...

    def get_by_token(self, token: Token) -> Credential | None: ...

    def get_by_username(self, username: Username) -> Credential | None: ...


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class CredentialStore:
    """Repository for Credential records.

    Usage:
        store = CredentialStore("sqlite:///homeroom.db")
        store.append(Credential(Username("alice"), Token("t1")))
        store.exists(Token("t1"))          # True
        store.remove(Username("alice"))    # logs alice out everywhere
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        _metadata.create_all(self.engine)

    def append(self, credential: Credential) -> None:
        """Insert one session record.

        Raises sqlalchemy.exc.IntegrityError if the token is already bound.
        """
        with self.engine.begin() as conn:
            conn.execute(
                _credentials.insert().values(
                    token=credential.token.value,
                    username=credential.username.name,
                )
            )

    def remove(self, username: Username) -> None:
        """Delete every session owned by username in one statement. No-op if none."""
        with self.engine.begin() as conn:
            conn.execute(_credentials.delete().where(_credentials.c.username == username.name))

    def exists(self, token: Token) -> bool:
        with self.engine.connect() as conn:
            row = conn.execute(
                select(_credentials.c.token).where(_credentials.c.token == token.value).limit(1)
            ).fetchone()
        return row is not None

    def get_by_token(self, token: Token) -> Credential | None:
        """Return the credential bound to token, or None.

        Raises InvalidUsername if the stored username is empty (corrupted row).
        """
        with self.engine.connect() as conn:
            row = conn.execute(_credentials.select().where(_credentials.c.token == token.value)).fetchone()
        return _row_to_credential(row) if row is not None else None

    def get_by_username(self, username: Username) -> Credential | None:
        """Return one of username's credentials (arbitrary when several exist), or None."""
        with self.engine.connect() as conn:
            row = conn.execute(
                _credentials.select().where(_credentials.c.username == username.name).limit(1)
            ).fetchone()
        return _row_to_credential(row) if row is not None else None

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_credential(row) -> Credential:
    return Credential(username=Username(row.username), token=Token(row.token))
