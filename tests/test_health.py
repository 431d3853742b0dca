"""
tests/test_health.py -- Integration tests for GET /api/health.

Covers:
  - 200 response with status, version, and components fields
  - components.database reports 'ok' when the database query succeeds
  - No authentication required
  - The real lifespan opens the shared engine and disposes it on shutdown
"""

from __future__ import annotations

from fastapi.testclient import TestClient

import core.database
from api.main import VERSION, app, lifespan


def test_health_returns_200_with_components(api_client):
    """Health endpoint returns 200 with status, version, and components."""
    client, _, _ = api_client
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["version"] == VERSION
    assert data["components"]["app"] == "ok"
    assert data["components"]["database"] == "ok"


def test_health_no_auth_required(api_client):
    """Health endpoint is accessible without cookies or Authorization header."""
    client, _, _ = api_client
    client.cookies.clear()
    resp = client.get("/api/health", headers={})
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_untrusted_host_rejected(api_client):
    """TrustedHostMiddleware refuses Host headers outside ALLOWED_HOSTS."""
    client, _, _ = api_client
    resp = client.get("/api/health", headers={"host": "evil.example.org"})
    assert resp.status_code == 400


def test_real_lifespan_opens_and_disposes_engine(monkeypatch):
    """Startup builds the shared engine and both stores; shutdown disposes it."""
    monkeypatch.setattr(app.router, "lifespan_context", lifespan)
    with TestClient(app) as client:
        assert core.database._engine is not None
        assert app.state.product_store.engine is app.state.user_store.engine
        assert client.get("/api/health").json()["components"]["database"] == "ok"
    assert core.database._engine is None
