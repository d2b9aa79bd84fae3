# This project was developed with assistance from AI tools.
"""Tests for liveness and readiness probes."""

from unittest.mock import AsyncMock, MagicMock

from db import get_db_service
from fastapi.testclient import TestClient

from src.main import app


def _client(healthy: bool) -> TestClient:
    service = MagicMock()
    service.health_check = AsyncMock(return_value=healthy)
    app.dependency_overrides[get_db_service] = lambda: service
    return TestClient(app)


def test_liveness_needs_no_auth():
    resp = TestClient(app).get("/health/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_ready_when_database_reachable():
    try:
        resp = _client(healthy=True).get("/health/ready")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "ok"}


def test_degraded_when_database_down():
    try:
        resp = _client(healthy=False).get("/health/ready")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 503
    assert resp.json()["database"] == "unavailable"


def test_root():
    assert TestClient(app).get("/").json() == {"message": "SVF Recovery API running"}
