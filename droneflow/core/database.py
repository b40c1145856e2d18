"""
Database configuration and session management.

Provides the declarative Base for ORM models, async engine construction,
and the per-request session dependency. The engine and session factory
live on ``app.state`` so each application instance (and each test) owns
its own connection pool.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from droneflow.settings import Settings

logger = logging.getLogger(__name__)

# Create declarative base for ORM models
Base = declarative_base()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured DATABASE_URL."""
    url = settings.async_database_url
    if url.startswith("postgresql+asyncpg://"):
        return create_async_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            connect_args={"server_settings": {"client_encoding": "utf8"}},
        )
    return create_async_engine(url, echo=False)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Commits when the request handler returns, rolls back if it raises.

    Yields:
        AsyncSession: Database session
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_database(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist.

    Mainly for development and tests; production schemas should be managed
    by migrations.
    """
    # Import ORM models so they're registered with Base
    from droneflow.api.models import Project, WorkOrder  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized")
