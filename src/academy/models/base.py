"""Shared model pieces."""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Naive UTC now. Columns are TIMESTAMP WITHOUT TIME ZONE, stored as UTC."""
    return datetime.now(UTC).replace(tzinfo=None)


class TimestampedModel(SQLModel):
    """Adds ``created_at``/``updated_at``. Not a table on its own."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def touch(self, at: datetime | None = None) -> datetime:
        """Stamp ``updated_at`` and return the stamp."""
        self.updated_at = at or utc_now()
        return self.updated_at
