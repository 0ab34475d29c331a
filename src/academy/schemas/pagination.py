"""Keyset pagination: response envelope and opaque cursors."""

import base64
import binascii
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

T = TypeVar("T")

_CURSOR_SEPARATOR = "|"


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results, newest first.

    ``next_cursor`` is opaque; clients pass it back unchanged.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Cursor for the next page. None on the last page.",
    )
    has_more: bool = Field(default=False, description="Whether another page exists.")


def encode_cursor(created_at: datetime, id: UUID) -> str:
    """Encode the sort key of the last row on a page."""
    raw = f"{created_at.isoformat()}{_CURSOR_SEPARATOR}{id}"
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> tuple[datetime, UUID]:
    """Decode a cursor produced by ``encode_cursor``.

    Raises:
        ValueError: If the cursor was not produced by ``encode_cursor``.
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError("Invalid cursor") from e

    created_at, separator, id = raw.partition(_CURSOR_SEPARATOR)
    if not separator:
        raise ValueError("Invalid cursor")
    return datetime.fromisoformat(created_at), UUID(id)
