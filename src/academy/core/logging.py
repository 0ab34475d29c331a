"""Structured logging (structlog) and request-scoped log context."""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars
from structlog.typing import EventDict, Processor, WrappedLogger

from src.academy.core.config import Settings, get_settings

_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "uvicorn.access")


def _service_fields(app_name: str, app_env: str) -> Processor:
    def add_service_fields(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", app_name)
        event_dict.setdefault("env", app_env)
        return event_dict

    return add_service_fields


def setup_logging(settings: Settings) -> None:
    """Configure structlog on top of stdlib logging.

    ``debug`` renders colored console lines; otherwise one JSON object per
    line for log shipping.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if settings.debug else logging.INFO,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_fields(settings.app_name, settings.app_env),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None, method: str | None = None,
                         path: str | None = None) -> None:
    """Attach the correlation ID (and route) of the current request to log calls."""
    if request_id:
        bind_contextvars(request_id=request_id)
    if method and path:
        bind_contextvars(method=method, path=path)


def bind_identity_context(
    identity_id: UUID,
    tenant_id: UUID | None = None,
    email: str | None = None,
) -> None:
    """Attach the calling identity to log calls.

    Args:
        identity_id: Identity provider subject.
        tenant_id: Tenant of the identity's profile, once known.
        email: Only bound when LOG_USER_EMAILS is enabled.
    """
    bind_contextvars(identity_id=str(identity_id))
    if tenant_id is not None:
        bind_contextvars(tenant_id=str(tenant_id))
    if email and get_settings().log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    clear_contextvars()
