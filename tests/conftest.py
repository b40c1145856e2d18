"""
Shared pytest fixtures for all tests.

Provides an isolated SQLite database per test, settings, and an app client.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from droneflow.settings import Settings, clear_settings_cache


# =============================================================================
# CONFIGURATION FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def isolate_config(monkeypatch):
    """
    Keep tests independent of the developer's environment and .env file.
    """
    for key in ("DATABASE_URL", "FOLDER_AUTOMATION_ENABLED", "FOLDER_ROOT", "LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def settings(database_url):
    return Settings(
        environment="test",
        database_url=database_url,
        log_format="text",
        log_level="WARNING",
    )


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest_asyncio.fixture
async def db_session(database_url):
    """
    Async session on a fresh file-backed SQLite database.

    Tables are created up front; the file lives in the test's tmp_path.
    """
    from droneflow.core.database import Base
    from droneflow.api.models import Project, WorkOrder  # noqa: F401

    engine = create_async_engine(database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


# =============================================================================
# APP FIXTURES
# =============================================================================

@pytest.fixture
def app(settings):
    from droneflow.api.main import create_app
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient with lifespan run, so tables exist."""
    with TestClient(app) as test_client:
        yield test_client
