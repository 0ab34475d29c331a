"""Tenant model - one academy per owner."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON
from sqlmodel import Field

from src.academy.core.security.validators import MAX_TENANT_SLUG_LENGTH
from src.academy.models.base import TimestampedModel


class Tenant(TimestampedModel, table=True):
    """Academy created during owner onboarding."""

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, index=True)
    slug: str = Field(max_length=MAX_TENANT_SLUG_LENGTH, unique=True, index=True)
    # Not a FK: profiles already reference tenants, and one tenant per owner is enforced here
    owner_id: UUID = Field(unique=True, index=True)
    timezone: str | None = Field(default=None, max_length=64)
    settings: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    setup_completed_at: datetime | None = Field(default=None)

    @property
    def is_setup_complete(self) -> bool:
        """Operational fields required before members can use the academy."""
        return bool(self.name and self.name.strip()) and bool(self.timezone)
