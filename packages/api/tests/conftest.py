# This project was developed with assistance from AI tools.
"""Shared fixtures for unit and route tests.

``client`` runs the real app with the auth and DB dependencies replaced, so
route tests only exercise request parsing, service wiring and error
rendering. Services are patched per test.
"""

from unittest.mock import AsyncMock

import pytest
from db import get_db
from fastapi.testclient import TestClient

from src.main import app
from src.middleware.auth import get_current_user
from src.schemas.auth import UserContext


@pytest.fixture
def agent_user() -> UserContext:
    return UserContext(agent_id=7, user_name="ravi.k", full_name="Ravi Kumar", branch_id=3)


@pytest.fixture
def mock_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(agent_user, mock_session):
    """TestClient with a fixed agent and a mock DB session."""

    async def fake_user():
        return agent_user

    async def fake_db():
        yield mock_session

    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_db] = fake_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
