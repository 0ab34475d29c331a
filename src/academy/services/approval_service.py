"""Approval gate service for owner profiles."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.academy.core.exceptions import (
    Conflict,
    DependencyFailure,
    NotFound,
    OnboardingError,
    ValidationError,
)
from src.academy.core.logging import get_logger
from src.academy.models import ApprovalStatus, Profile
from src.academy.models.base import utc_now
from src.academy.repositories import ProfileRepository
from src.academy.schemas.approval import ApprovalStatusInfo

logger = get_logger(__name__)


class ApprovalService:
    """Service for deciding and inspecting owner approval.

    ``pending -> approved`` and ``pending -> rejected`` are the only
    transitions; both outcomes are terminal.
    """

    def __init__(self, profile_repo: ProfileRepository, session: AsyncSession):
        self.profile_repo = profile_repo
        self.session = session

    async def set_approval_status(
        self,
        profile_id: UUID,
        status: ApprovalStatus | str,
        approver_id: UUID,
        reason: str | None = None,
    ) -> Profile:
        """Approve or reject a pending owner.

        Raises:
            ValidationError: Unknown/pending status, rejection without a
                reason, or an approver deciding on their own profile.
            NotFound: Profile does not exist.
            Conflict: Profile is not an owner, or was already decided.
            DependencyFailure: Store unreachable.
        """
        try:
            decision = ApprovalStatus(status)
        except ValueError as e:
            raise ValidationError(f"Unknown approval status: {status}") from e
        if decision == ApprovalStatus.PENDING:
            raise ValidationError("Approval status must be approved or rejected")

        reason = reason.strip() if reason else None
        if decision == ApprovalStatus.REJECTED and not reason:
            raise ValidationError("A reason is required to reject an owner")
        if approver_id == profile_id:
            raise ValidationError("Approvers cannot decide on their own profile")

        try:
            profile = await self.profile_repo.get_by_id(profile_id)
            if profile is None:
                raise NotFound("Profile not found")
            if not profile.is_owner:
                raise Conflict("Only academy owners require approval")
            if profile.approval_status != ApprovalStatus.PENDING.value:
                raise Conflict(f"Approval already decided: {profile.approval_status}")

            decided = await self.profile_repo.decide_approval(
                profile.id,
                decision,
                approver_id,
                reason=reason if decision == ApprovalStatus.REJECTED else None,
                decided_at=utc_now(),
            )
            if not decided:
                raise Conflict("Approval already decided")

            await self.session.commit()
            await self.session.refresh(profile)

        except OnboardingError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to record approval decision",
                profile_id=str(profile_id),
                error=str(e),
            )
            raise DependencyFailure("Approval could not be recorded, try again") from e

        logger.info(
            "Owner approval decided",
            profile_id=str(profile.id),
            status=profile.approval_status,
            approver_id=str(approver_id),
        )
        return profile

    async def get_approval_status(self, profile_id: UUID) -> ApprovalStatusInfo:
        """Get approval status, rejection reason and tenant for a profile."""
        try:
            profile = await self.profile_repo.get_by_id(profile_id)
        except SQLAlchemyError as e:
            logger.error("Failed to load approval status", profile_id=str(profile_id), error=str(e))
            raise DependencyFailure("Profile store is temporarily unavailable") from e

        if profile is None:
            raise NotFound("Profile not found")

        return ApprovalStatusInfo(
            status=profile.approval_status,
            reason=profile.rejection_reason,
            tenant_id=profile.tenant_id,
        )

    async def list_pending_owners(
        self, cursor: str | None, limit: int
    ) -> tuple[list[Profile], str | None, bool]:
        """List owners awaiting approval with cursor-based pagination.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        try:
            return await self.profile_repo.get_pending_owners_paginated(cursor, limit)
        except SQLAlchemyError as e:
            logger.error("Failed to list pending owners", error=str(e))
            raise DependencyFailure("Profile store is temporarily unavailable") from e
