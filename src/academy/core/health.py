"""Health endpoints and Prometheus metrics."""

import secrets
import time
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.academy.core.config import get_settings
from src.academy.core.db import get_session
from src.academy.core.logging import get_logger

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10.0  # seconds
UNMETERED_PATHS = ["/health", "/health/live", "/metrics"]


@dataclass
class _HealthSnapshot:
    body: dict[str, Any]
    checked_at: float

    @property
    def healthy(self) -> bool:
        return self.body["status"] == "healthy"


_snapshot: _HealthSnapshot | None = None


def reset_health_cache() -> None:
    """Forget the last readiness result (tests)."""
    global _snapshot
    _snapshot = None


async def check_database() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed", error=str(e))
        return "unhealthy"
    return "healthy"


async def _readiness(now: float) -> tuple[_HealthSnapshot, bool]:
    """Return the readiness snapshot and whether it came from the cache."""
    global _snapshot
    if _snapshot is not None and now - _snapshot.checked_at < HEALTH_CACHE_TTL:
        return _snapshot, True

    database = await check_database()
    _snapshot = _HealthSnapshot(
        body={
            "status": "healthy" if database == "healthy" else "unhealthy",
            "checks": {"database": database},
        },
        checked_at=now,
    )
    return _snapshot, False


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health/live", include_in_schema=False)
    async def live() -> dict[str, str]:
        """Process is up. No dependency checks."""
        return {"status": "alive"}

    @app.get("/health", include_in_schema=False)
    async def health() -> JSONResponse:
        """Readiness: the store answers. Cached briefly to keep probes cheap."""
        now = time.monotonic()
        snapshot, cached = await _readiness(now)
        body = {
            **snapshot.body,
            "cached": cached,
            "cache_age_seconds": round(now - snapshot.checked_at, 1),
        }
        return JSONResponse(
            content=body,
            status_code=status.HTTP_200_OK
            if snapshot.healthy
            else status.HTTP_503_SERVICE_UNAVAILABLE,
        )


def setup_metrics(app: FastAPI) -> None:
    """Expose /metrics, guarded by X-Metrics-Key when METRICS_API_KEY is set."""
    settings = get_settings()
    instrumentator = Instrumentator(excluded_handlers=UNMETERED_PATHS).instrument(app)

    if not settings.metrics_api_key:
        instrumentator.expose(app, endpoint="/metrics", include_in_schema=False)
        return

    expected_key = settings.metrics_api_key
    metrics_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def require_metrics_key(api_key: str | None = Depends(metrics_key_header)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected_key):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(
        app,
        endpoint="/metrics",
        include_in_schema=False,
        dependencies=[Depends(require_metrics_key)],
    )
