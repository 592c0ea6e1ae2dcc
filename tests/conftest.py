"""
tests/conftest.py -- Shared test fixtures for Homeroom tests.

This module provides:
  - _make_test_stores(): creates isolated in-memory DBs for the three stores
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient plus session tokens for "alice" and "bob"
  - credential_store / task_store / timetables_store: per-test SQL stores

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs route handlers in a thread pool. Plain :memory: DBs
are per-connection and would present a blank schema to each worker thread.
The named URI format (file:name?mode=memory&cache=shared&uri=true) shares
one in-memory instance across all connections in the same process.

Environment variables must be set before any api/ import: Settings is read
once at import time (TestClient sends Host: testserver, and the suite makes
more requests per minute than the production rate limit allows).
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass

os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')
os.environ.setdefault("RATE_LIMIT", "10000/minute")

import pytest
from fastapi.testclient import TestClient

from api.main import app, wire_state
from auth.models import Credential, Token, Username
from auth.store import CredentialStore
from tasks.store import TaskStore
from timetables.store import TimetablesStore

# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _memory_url(name: str) -> str:
    return f"sqlite:///file:{name}?mode=memory&cache=shared&uri=true"


def _make_test_stores(db_suffix: str) -> tuple[CredentialStore, TaskStore, TimetablesStore]:
    """Create isolated named shared-memory SQLite stores for test isolation.

    Args:
        db_suffix: Unique string appended to the DB names so test modules
                   and tests don't share state.
    """
    return (
        CredentialStore(_memory_url(f"test_credentials_{db_suffix}")),
        TaskStore(_memory_url(f"test_tasks_{db_suffix}")),
        TimetablesStore(_memory_url(f"test_timetables_{db_suffix}")),
    )


def _patch_lifespan(credential_store: CredentialStore, task_store: TaskStore, timetables_store: TimetablesStore):
    """Return an async context manager that replaces the real lifespan.

    Wires pre-created test stores into app.state through the same
    wire_state() the real lifespan uses.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        wire_state(app, credential_store, task_store, timetables_store)
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# API fixture
# ---------------------------------------------------------------------------


@dataclass
class ApiSession:
    client: TestClient
    credential_store: CredentialStore
    alice: str
    bob: str

    def headers(self, token: str) -> dict[str, str]:
        return {"Token": token}


@pytest.fixture
def api_client() -> Generator[ApiSession, None, None]:
    """Yield an ApiSession with fresh stores and one live token per user.

    Function-scoped: every test starts from empty stores so task ids and
    timetables never leak between tests.
    """
    suffix = uuid.uuid4().hex
    credential_store, task_store, timetables_store = _make_test_stores(suffix)
    credential_store.append(Credential(Username("alice"), Token("alice-token")))
    credential_store.append(Credential(Username("bob"), Token("bob-token")))

    app.router.lifespan_context = _patch_lifespan(credential_store, task_store, timetables_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield ApiSession(client=client, credential_store=credential_store, alice="alice-token", bob="bob-token")

    credential_store.close()
    task_store.close()
    timetables_store.close()


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def credential_store() -> Generator[CredentialStore, None, None]:
    s = CredentialStore("sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture
def task_store() -> Generator[TaskStore, None, None]:
    s = TaskStore("sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture
def timetables_store() -> Generator[TimetablesStore, None, None]:
    s = TimetablesStore("sqlite:///:memory:")
    yield s
    s.close()
