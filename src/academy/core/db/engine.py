"""Database engine management.

PostgreSQL (asyncpg) in deployments. SQLite (aiosqlite) is accepted for
local runs, where pool sizing and SSL do not apply.
"""

import ssl
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.academy.core.config import Settings, get_settings

_engine: AsyncEngine | None = None


def _ssl_context(ssl_mode: str) -> ssl.SSLContext | None:
    """Map a libpq-style sslmode to an SSLContext for asyncpg."""
    if ssl_mode == "disable":
        return None

    context = ssl.create_default_context()
    if ssl_mode in ("prefer", "require"):
        # Encrypted, certificate not verified
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    else:
        context.check_hostname = ssl_mode == "verify-full"
        context.verify_mode = ssl.CERT_REQUIRED
    return context


def engine_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` for the configured backend."""
    if settings.uses_sqlite:
        return {"connect_args": {"timeout": 30}}

    connect_args: dict[str, Any] = {}
    context = _ssl_context(settings.database_ssl_mode)
    if context is not None:
        connect_args["ssl"] = context
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
        "connect_args": connect_args,
    }


def get_engine() -> AsyncEngine:
    """Get or create the process-wide engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **engine_options(settings))
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections. Called on shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
