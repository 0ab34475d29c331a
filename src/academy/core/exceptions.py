"""Onboarding error taxonomy and exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.academy.core.logging import get_logger

logger = get_logger(__name__)


class OnboardingError(Exception):
    """Base class for classified onboarding failures.

    Each subclass carries a stable ``code`` so callers can tell the
    failure classes apart without parsing messages.
    """

    code: str = "onboarding_error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    retryable: bool = False

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(OnboardingError):
    """Malformed input: bad token format, empty required field."""

    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(OnboardingError):
    """Referenced invitation, profile or tenant does not exist."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class Expired(OnboardingError):
    """Invitation is past its expiry."""

    code = "expired"
    status_code = status.HTTP_410_GONE


class AlreadyConsumed(OnboardingError):
    """Invitation is no longer pending."""

    code = "already_consumed"
    status_code = status.HTTP_409_CONFLICT


class Conflict(OnboardingError):
    """A precondition about existing state does not hold."""

    code = "conflict"
    status_code = status.HTTP_409_CONFLICT


class DependencyFailure(OnboardingError):
    """The store is unreachable or the transaction was aborted."""

    code = "dependency_failure"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    retryable = True


RETRY_AFTER_SECONDS = 1


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(OnboardingError)
    async def onboarding_exception_handler(
        request: Request, exc: OnboardingError
    ) -> JSONResponse:
        headers = {"Retry-After": str(RETRY_AFTER_SECONDS)} if exc.retryable else None
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "code": exc.code,
                "request_id": correlation_id.get(),
            },
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
