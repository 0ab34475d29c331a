"""ASGI entrypoint: ``uvicorn src.academy.main:app``."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.academy.api.middlewares import install_middlewares
from src.academy.api.v1.router import api_router
from src.academy.core.config import get_settings
from src.academy.core.db import dispose_engine
from src.academy.core.exceptions import setup_exception_handlers
from src.academy.core.health import setup_health_endpoint, setup_metrics
from src.academy.core.logging import get_logger, setup_logging

logger = get_logger(__name__)

API_TAGS = [
    {"name": "onboarding", "description": "Where a signed-in identity is, and how it moves on"},
    {"name": "approvals", "description": "Platform review of academy owners"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings)
    logger.info("Application starting", env=settings.app_env)

    yield

    await dispose_engine()
    logger.info("Application stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    docs_enabled = settings.enable_openapi and not settings.is_production

    app = FastAPI(
        title=settings.app_name,
        summary="Onboarding and authentication-stage engine for multi-tenant academies",
        version="0.1.0",
        openapi_tags=API_TAGS,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    install_middlewares(app, settings)
    app.include_router(api_router)
    setup_health_endpoint(app)
    setup_metrics(app)

    return app


app = create_app()
