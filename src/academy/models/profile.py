"""Profile model - the tenant-scoped user record, keyed by identity id."""

from datetime import datetime
from uuid import UUID

from sqlmodel import Field

from src.academy.models.base import TimestampedModel
from src.academy.models.enums import ApprovalStatus, RoleCode

MAX_PROFILE_NAME_LENGTH = 100


class Profile(TimestampedModel, table=True):
    """Per-identity profile. ``id`` is the identity id, never generated here."""

    __tablename__ = "profiles"

    id: UUID = Field(primary_key=True)
    tenant_id: UUID | None = Field(default=None, foreign_key="tenants.id", index=True)
    role_code: str | None = Field(default=None, max_length=20)
    approval_status: str = Field(
        default=ApprovalStatus.PENDING.value, max_length=20, index=True
    )
    name: str = Field(max_length=MAX_PROFILE_NAME_LENGTH)
    email: str = Field(max_length=255, index=True)
    approved_by: UUID | None = Field(default=None)
    approved_at: datetime | None = Field(default=None)
    rejected_by: UUID | None = Field(default=None)
    rejected_at: datetime | None = Field(default=None)
    rejection_reason: str | None = Field(default=None, max_length=500)

    @property
    def is_owner(self) -> bool:
        return self.role_code == RoleCode.OWNER.value
