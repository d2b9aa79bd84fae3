# This project was developed with assistance from AI tools.
"""Fixtures for the agent journey tests.

Requests go through the real app, authenticated as a persona, against a
mock session that answers the service queries in order. Overrides are
dropped after every test so one agent's session never serves another.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from src.main import app as recovery_app
from src.schemas.auth import UserContext

from .mock_db import configure_app_for_persona


@pytest.fixture(autouse=True)
def _reset_persona():
    yield
    recovery_app.dependency_overrides.clear()


@pytest.fixture
def make_client():
    """Return a factory: ``make_client(agent, session)`` -> TestClient.

    Server exceptions are rendered as error bodies so tests can assert on
    ``error_kind`` the way the mobile client sees it.
    """

    def _make(agent: UserContext, session: AsyncMock) -> TestClient:
        configure_app_for_persona(recovery_app, agent, session)
        return TestClient(recovery_app, raise_server_exceptions=False)

    return _make
