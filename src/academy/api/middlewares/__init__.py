from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.academy.core.config import Settings

from .logging_context import request_context_middleware

__all__ = ["install_middlewares", "request_context_middleware"]


def install_middlewares(app: FastAPI, settings: Settings) -> None:
    """Register middlewares. Starlette runs the last one added first."""
    app.middleware("http")(request_context_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )

    # Outermost, so request_id exists before the context middleware runs
    app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")
