"""Root test fixtures shared across all test types.

Store-backed tests run against a file-backed SQLite database (aiosqlite).
Every transaction starts with BEGIN IMMEDIATE, so concurrent sessions are
serialized the way row locks serialize them on PostgreSQL.
"""

import os

# Set env vars before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_SSL_MODE", "disable")
os.environ.setdefault("IDENTITY_JWT_SECRET", "test-identity-secret-with-at-least-32-characters")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
import structlog
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from structlog.testing import CapturingLogger

from src.academy.api.dependencies import get_db_session
from src.academy.core.config import get_settings
from src.academy.core.db import create_session_factory
from src.academy.core.db import engine as engine_module
from src.academy.core.health import reset_health_cache
from src.academy.core.logging import clear_request_context

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


# --- Database Fixtures ---


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine]:
    """Create a fresh SQLite database with all tables for each test."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'academy.db'}",
        connect_args={"timeout": 30},
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None

    @event.listens_for(test_engine.sync_engine, "begin")
    def _begin_immediate(conn):  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database (one session per simulated request)."""
    return create_session_factory(engine)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    Sessions do not auto-commit. Tests must call ``await session.commit()``
    before handing work to another session.
    """
    async with session_factory() as db_session:
        yield db_session


# --- HTTP Client Fixtures ---


@pytest.fixture
async def client(
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
    monkeypatch: pytest.MonkeyPatch,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the app, with request sessions bound to the test database."""
    from src.academy.main import create_app

    monkeypatch.setattr(engine_module, "_engine", engine)
    reset_health_cache()

    app = create_app()

    async def _override_db_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as db_session:
            yield db_session

    app.dependency_overrides[get_db_session] = _override_db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    reset_health_cache()


# --- Logging Fixtures ---


@pytest.fixture
def capturing_logger():
    """Route structlog output to a CapturingLogger for the duration of a test."""
    cap_logger = CapturingLogger()
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)
