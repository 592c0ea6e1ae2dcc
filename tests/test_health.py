"""
tests/test_health.py -- Integration tests for GET /api/v1/health.

Covers:
  - 200 response with status, version, and components fields
  - components.database key present and reports 'ok'
  - No authentication required
  - a failing database ping is reported, and the handler stays synchronous
"""

from __future__ import annotations


def test_health_returns_200_with_components(api_client):
    """Health endpoint returns 200 with status, version, and components."""
    resp = api_client.client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert data["components"]["app"] == "ok"
    assert data["components"]["database"] == "ok"


def test_health_no_auth_required(api_client):
    """Health endpoint is accessible without any token header."""
    resp = api_client.client.get("/api/v1/health", headers={})
    assert resp.status_code == 200


def test_health_handler_runs_in_threadpool():
    """The database ping is blocking, so the handler is a plain def."""
    import inspect

    from api.main import health

    assert not inspect.iscoroutinefunction(health)


def test_health_reports_database_error(api_client, monkeypatch):
    """A failing ping is reported as a component error, not a 500."""
    from sqlalchemy.exc import OperationalError

    def broken_ping():
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(api_client.credential_store, "ping", broken_ping)
    resp = api_client.client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json()["components"]["database"] == "error"
