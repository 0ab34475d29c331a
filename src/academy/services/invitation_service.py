"""Invitation acceptance service."""

from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.academy.core.exceptions import (
    AlreadyConsumed,
    Conflict,
    DependencyFailure,
    Expired,
    NotFound,
    OnboardingError,
    ValidationError,
)
from src.academy.core.logging import get_logger
from src.academy.core.security import hash_token, mask_token, validate_invitation_token
from src.academy.models import ApprovalStatus, Invitation, InvitationStatus, Profile, RoleCode
from src.academy.models.base import utc_now
from src.academy.repositories import (
    InvitationRepository,
    ProfileRepository,
    TenantRepository,
)
from src.academy.schemas.invitation import InvitationInfo

logger = get_logger(__name__)


class InvitationService:
    """Service for reading and consuming staff invitations."""

    def __init__(
        self,
        invitation_repo: InvitationRepository,
        profile_repo: ProfileRepository,
        tenant_repo: TenantRepository,
        session: AsyncSession,
    ):
        self.invitation_repo = invitation_repo
        self.profile_repo = profile_repo
        self.tenant_repo = tenant_repo
        self.session = session

    async def accept(self, token: str, profile_id: UUID) -> Profile:
        """Consume a pending invitation and attach the profile to its tenant.

        Validates, in order:
        1. Token format
        2. Invitation exists
        3. Invitation is not expired (checked before status)
        4. Invitation is still pending and grants a staff role
        5. Profile exists, matches the invitation email and has no tenant yet
        6. Tenant still exists

        The status flip and the profile update share one transaction, and
        both are conditional writes: of any number of concurrent calls with
        the same token exactly one succeeds, the rest see AlreadyConsumed.
        Staff are approved on acceptance.

        Raises:
            ValidationError, NotFound, Expired, AlreadyConsumed, Conflict,
            DependencyFailure
        """
        normalized = self._normalize(token)
        masked = mask_token(normalized)
        now = utc_now()

        try:
            invitation = await self._load_pending(normalized, now)
            role = self._granted_role(invitation)

            profile = await self.profile_repo.get_by_id(profile_id)
            if profile is None:
                raise NotFound("Profile not found")
            if not invitation.is_addressed_to(profile.email):
                raise Conflict("Email does not match invitation")
            if profile.tenant_id is not None:
                raise Conflict("Profile already belongs to an academy")

            tenant = await self.tenant_repo.get_by_id(invitation.tenant_id)
            if tenant is None:
                raise NotFound("Academy is no longer available")

            if not await self.invitation_repo.mark_accepted_if_pending(
                invitation.id, profile.id, now
            ):
                raise AlreadyConsumed("Invitation has already been used")

            attached = await self.profile_repo.attach_to_tenant(
                profile.id,
                invitation.tenant_id,
                role,
                ApprovalStatus.APPROVED,
            )
            if not attached:
                raise Conflict("Profile already belongs to an academy")

            # IDs for the log line, read before commit
            invitation_id = str(invitation.id)
            tenant_id = str(invitation.tenant_id)

            await self.session.commit()
            await self.session.refresh(profile)
            await self.session.refresh(invitation)

        except OnboardingError as e:
            await self.session.rollback()
            logger.info(
                "Invitation not accepted",
                token=masked,
                profile_id=str(profile_id),
                reason=e.code,
            )
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to accept invitation",
                token=masked,
                profile_id=str(profile_id),
                error=str(e),
            )
            raise DependencyFailure("Invitation could not be accepted, try again") from e

        logger.info(
            "Invitation accepted",
            invitation_id=invitation_id,
            profile_id=str(profile.id),
            tenant_id=tenant_id,
            role=profile.role_code,
        )
        return profile

    async def describe(self, token: str) -> InvitationInfo:
        """Get public invitation info for display before accepting.

        Classifies unusable invitations the same way ``accept`` does, so the
        accept page can offer "request a new invitation" for Expired and
        "sign in instead" for AlreadyConsumed.
        """
        normalized = self._normalize(token)
        try:
            invitation = await self._load_pending(normalized, utc_now())
            self._granted_role(invitation)
            tenant = await self.tenant_repo.get_by_id(invitation.tenant_id)
        except SQLAlchemyError as e:
            logger.error("Failed to load invitation", token=mask_token(normalized), error=str(e))
            raise DependencyFailure("Invitation store is temporarily unavailable") from e

        if tenant is None:
            raise NotFound("Academy is no longer available")

        return InvitationInfo(
            email=invitation.email,
            tenant_name=tenant.name,
            tenant_slug=tenant.slug,
            role_code=invitation.role_code,
            status=invitation.status,
            expires_at=invitation.expires_at,
        )

    @staticmethod
    def _granted_role(invitation: Invitation) -> RoleCode:
        role = invitation.staff_role
        if role is None:
            raise ValidationError(
                f"Invitation does not grant a staff role (role: {invitation.role_code})"
            )
        return role

    @staticmethod
    def _normalize(token: str) -> str:
        try:
            return validate_invitation_token(token)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    async def _load_pending(self, normalized_token: str, now: datetime) -> Invitation:
        invitation = await self.invitation_repo.get_by_token_hash(hash_token(normalized_token))
        if invitation is None:
            raise NotFound("Invitation not found")
        if invitation.is_expired(now):
            raise Expired("Invitation has expired")
        if invitation.status != InvitationStatus.PENDING.value:
            raise AlreadyConsumed(f"Invitation is no longer pending (status: {invitation.status})")
        return invitation
