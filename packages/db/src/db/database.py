# This project was developed with assistance from AI tools.
"""Async engine, session factory, and FastAPI session dependencies."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import db_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

engine = create_async_engine(
    db_settings.DATABASE_URL,
    echo=db_settings.SQL_ECHO,
    pool_pre_ping=True,
    pool_size=db_settings.POOL_SIZE,
    max_overflow=db_settings.POOL_MAX_OVERFLOW,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
    class_=AsyncSession,
)


class DatabaseService:
    """Thin wrapper around the engine for connectivity checks."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def health_check(self) -> bool:
        """Return True when a trivial query round-trips."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("Database health check failed")
            return False


db_service = DatabaseService(engine=engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yield a session and always close it."""
    async with SessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def get_db_service() -> DatabaseService:
    """FastAPI dependency: return the module-level DatabaseService."""
    return db_service
