"""Repository for Profile entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.academy.models import ApprovalStatus, Profile, RoleCode
from src.academy.models.base import utc_now
from src.academy.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile entity.

    The conditional updates below are compare-and-swap writes: they only
    touch the row while the guarded precondition still holds and report
    whether they did, so two racing transitions cannot both win.
    """

    model = Profile

    async def attach_to_tenant(
        self,
        profile_id: UUID,
        tenant_id: UUID,
        role_code: RoleCode,
        approval_status: ApprovalStatus,
        name: str | None = None,
    ) -> bool:
        """Link a tenantless profile to a tenant. Returns False if it already has one."""
        values: dict[str, object] = {
            "tenant_id": tenant_id,
            "role_code": role_code.value,
            "approval_status": approval_status.value,
            "updated_at": utc_now(),
        }
        if name is not None:
            values["name"] = name

        result = await self.session.execute(
            update(Profile)
            .where(Profile.id == profile_id)  # type: ignore[arg-type]
            .where(Profile.tenant_id.is_(None))  # type: ignore[union-attr]
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]

    async def decide_approval(
        self,
        profile_id: UUID,
        status: ApprovalStatus,
        approver_id: UUID,
        reason: str | None = None,
        decided_at: datetime | None = None,
    ) -> bool:
        """Move a pending owner to approved or rejected. Returns False if not pending."""
        decided_at = decided_at or utc_now()
        values: dict[str, object] = {
            "approval_status": status.value,
            "updated_at": decided_at,
        }
        if status == ApprovalStatus.APPROVED:
            values.update(approved_by=approver_id, approved_at=decided_at)
        else:
            values.update(rejected_by=approver_id, rejected_at=decided_at, rejection_reason=reason)

        result = await self.session.execute(
            update(Profile)
            .where(Profile.id == profile_id)  # type: ignore[arg-type]
            .where(Profile.role_code == RoleCode.OWNER.value)  # type: ignore[arg-type]
            .where(Profile.approval_status == ApprovalStatus.PENDING.value)  # type: ignore[arg-type]
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]

    async def get_pending_owners_paginated(
        self, cursor: str | None, limit: int
    ) -> tuple[list[Profile], str | None, bool]:
        """List owners awaiting approval, newest first."""
        query = select(Profile).where(
            Profile.role_code == RoleCode.OWNER.value,
            Profile.approval_status == ApprovalStatus.PENDING.value,
        )
        return await self.paginate_newest_first(query, cursor, limit)
