# This project was developed with assistance from AI tools.
"""Integration test fixtures -- real PostgreSQL, no mocks.

A session-scoped container (started once per test run) provides a real
PostgreSQL instance migrated with alembic. Function-scoped fixtures give each
test an isolated DB session with savepoint rollback so tests don't leak
state. The whole directory is skipped when no Docker daemon is reachable.
"""

import os
from collections import namedtuple
from datetime import date

import docker
import httpx
import pytest
import pytest_asyncio
from docker.errors import DockerException
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer

# ---------------------------------------------------------------------------
# Mark all tests in this directory as integration
# ---------------------------------------------------------------------------
pytestmark = pytest.mark.integration

_DB_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "..", "db")


# ---------------------------------------------------------------------------
# Session-scoped: container + engine + migrations
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_container():
    """Start postgres:16-alpine via testcontainers."""
    try:
        docker.from_env().ping()
    except DockerException as exc:
        pytest.skip(f"Docker not available: {exc}")

    with PostgresContainer(
        image="postgres:16-alpine",
        username="test",
        password="test",
        dbname="test",
    ) as pg:
        yield pg


@pytest.fixture(scope="session")
def db_url(pg_container):
    """Async DB URL for asyncpg."""
    host = pg_container.get_container_host_ip()
    port = pg_container.get_exposed_port(5432)
    return f"postgresql+asyncpg://test:test@{host}:{port}/test"


@pytest.fixture(scope="session")
def sync_db_url(pg_container):
    """Sync DB URL for Alembic (psycopg2)."""
    host = pg_container.get_container_host_ip()
    port = pg_container.get_exposed_port(5432)
    return f"postgresql://test:test@{host}:{port}/test"


@pytest.fixture(scope="session")
def _run_migrations(sync_db_url):
    """Run alembic upgrade head against the container."""
    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config(os.path.join(_DB_DIR, "alembic.ini"))
    alembic_cfg.set_main_option("script_location", os.path.join(_DB_DIR, "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", sync_db_url)
    command.upgrade(alembic_cfg, "head")


@pytest.fixture(scope="session")
def async_engine(db_url, _run_migrations):
    """Create an async engine pointing at the test container."""
    engine = create_async_engine(db_url, echo=False, poolclass=NullPool)
    yield engine


# ---------------------------------------------------------------------------
# Function-scoped: per-test session with savepoint rollback
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session(async_engine):
    """Per-test DB session with savepoint rollback.

    ``session.commit()`` inside services releases a savepoint; the outer
    transaction is rolled back when the test ends.
    """
    conn = await async_engine.connect()
    txn = await conn.begin()
    session = AsyncSession(
        bind=conn,
        join_transaction_mode="create_savepoint",
        expire_on_commit=False,
    )
    yield session
    await session.close()
    await txn.rollback()
    await conn.close()


@pytest.fixture
def client_factory(db_session, async_engine):
    """Factory returning an async httpx client with dependency overrides."""
    from db import DatabaseService, get_db, get_db_service

    from src.main import app
    from src.middleware.auth import get_current_user

    async def _make(user):
        async def _get_db():
            yield db_session

        async def _get_current_user():
            return user

        async def _get_db_service():
            return DatabaseService(engine=async_engine)

        app.dependency_overrides[get_db] = _get_db
        app.dependency_overrides[get_current_user] = _get_current_user
        app.dependency_overrides[get_db_service] = _get_db_service
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        return httpx.AsyncClient(transport=transport, base_url="http://test")

    yield _make

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seed data helper
# ---------------------------------------------------------------------------


SeedData = namedtuple("SeedData", ["ravi", "meena", "ravi_user", "meena_user"])


@pytest_asyncio.fixture
async def seed_data(db_session):
    """Two agents, two customers, three loans, all in Ravi's first cycle.

    Lakshmi (C-500) holds PT-1001 and PT-1002; Arun (C-600) holds PT-2001.
    Meena is assigned PT-2001 only. Seed rows are committed to the test
    savepoint so a rolled-back save cannot remove them.
    """
    from db import Agent, Assignment, LoanAccount

    from src.schemas.auth import UserContext

    ravi = Agent(user_name="ravi.k", full_name="Ravi Kumar", branch_id=3)
    meena = Agent(user_name="meena.s", full_name="Meena Sundaram", branch_id=3)
    db_session.add_all([ravi, meena])
    await db_session.flush()

    db_session.add_all(
        [
            LoanAccount(
                pt_no="PT-1001",
                customer_id="C-500",
                customer_name="Lakshmi Devi",
                city="Madurai",
                contact_number1="9840000001",
                loan_amount=10000,
                interest_rate=24,
                loan_created_date=date(2024, 1, 1),
                last_date=date(2024, 1, 10),
            ),
            LoanAccount(
                pt_no="PT-1002",
                customer_id="C-500",
                customer_name="Lakshmi Devi",
                city="Madurai",
                contact_number1="9840000001",
                loan_amount=100000,
                interest_rate=12,
                loan_created_date=date(2022, 1, 1),
                last_date=date(2024, 1, 1),
            ),
            LoanAccount(
                pt_no="PT-2001",
                customer_id="C-600",
                customer_name="Arun Prakash",
                city="Madurai",
                loan_amount=25000,
                interest_rate=18,
                loan_created_date=date(2025, 6, 1),
                last_date=date(2025, 9, 1),
            ),
        ]
    )
    await db_session.flush()

    db_session.add_all(
        [
            Assignment(pt_no="PT-1001", customer_id="C-500", agent_id=ravi.id, no_of_visit=1),
            Assignment(pt_no="PT-1002", customer_id="C-500", agent_id=ravi.id, no_of_visit=1),
            Assignment(pt_no="PT-2001", customer_id="C-600", agent_id=ravi.id, no_of_visit=1),
            Assignment(pt_no="PT-2001", customer_id="C-600", agent_id=meena.id, no_of_visit=1),
        ]
    )
    await db_session.commit()

    return SeedData(
        ravi=ravi.id,
        meena=meena.id,
        ravi_user=UserContext(agent_id=ravi.id, user_name="ravi.k", branch_id=3),
        meena_user=UserContext(agent_id=meena.id, user_name="meena.s", branch_id=3),
    )
