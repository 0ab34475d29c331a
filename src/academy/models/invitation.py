"""Invitation model - single-use staff invitations."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.academy.models.base import utc_now
from src.academy.models.enums import STAFF_ROLES, InvitationStatus, RoleCode

STAFF_ROLE_CHECK = "role_code IN ({})".format(
    ", ".join(f"'{role.value}'" for role in STAFF_ROLES)
)


class Invitation(SQLModel, table=True):
    """Invitation scoping an email to a tenant and staff role.

    Only the SHA-256 hash of the token is stored. Invitations never grant
    ownership: owners come from owner onboarding only.
    """

    __tablename__ = "invitations"
    __table_args__ = (CheckConstraint(STAFF_ROLE_CHECK, name="ck_invitations_staff_role"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token_hash: str = Field(max_length=64, unique=True, index=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    invited_by: UUID
    email: str = Field(max_length=255, index=True)
    role_code: str = Field(default=RoleCode.INSTRUCTOR.value, max_length=20)
    status: str = Field(default=InvitationStatus.PENDING.value, max_length=20)
    expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)
    accepted_at: datetime | None = Field(default=None)
    accepted_by: UUID | None = Field(default=None)

    @property
    def staff_role(self) -> RoleCode | None:
        """The granted role, or None when the stored role is not a staff role."""
        try:
            role = RoleCode(self.role_code)
        except ValueError:
            return None
        return role if role.is_staff else None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Expiry is evaluated at read time, never materialized by this check."""
        return (now or utc_now()) > self.expires_at

    def is_open(self, now: datetime | None = None) -> bool:
        """Pending and not yet expired."""
        return self.status == InvitationStatus.PENDING.value and not self.is_expired(now)

    def is_addressed_to(self, email: str) -> bool:
        return self.email.strip().lower() == email.strip().lower()
