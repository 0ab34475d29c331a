"""Stage service - loads onboarding state and resolves the current stage."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.academy.core.exceptions import DependencyFailure
from src.academy.core.identity import Identity
from src.academy.core.logging import get_logger
from src.academy.core.security import (
    hash_token,
    is_valid_invitation_token,
    mask_token,
    normalize_invitation_token,
)
from src.academy.models import Invitation
from src.academy.models.base import utc_now
from src.academy.repositories import (
    InvitationRepository,
    ProfileRepository,
    TenantRepository,
)
from src.academy.schemas.stage import Stage
from src.academy.services.stage_resolver import resolve_stage

logger = get_logger(__name__)


class StageService:
    """Read-only service answering "where is this identity in onboarding?"."""

    def __init__(
        self,
        profile_repo: ProfileRepository,
        tenant_repo: TenantRepository,
        invitation_repo: InvitationRepository,
        session: AsyncSession,
    ):
        self.profile_repo = profile_repo
        self.tenant_repo = tenant_repo
        self.invitation_repo = invitation_repo
        self.session = session

    async def get_stage(self, identity: Identity | None, invite_token: str | None = None) -> Stage:
        """Resolve the stage for an identity.

        Args:
            identity: Current identity, or None when signed out.
            invite_token: Invitation token the caller is carrying, if any.
                A malformed or unknown token is ignored; the newest open
                invitation for the profile email is used instead.
        """
        if identity is None or not identity.email_confirmed:
            return resolve_stage(identity, None)

        now = utc_now()
        tenant = None
        invitation = None
        try:
            profile = await self.profile_repo.get_by_id(identity.id)
            if profile is not None and profile.tenant_id is not None:
                tenant = await self.tenant_repo.get_by_id(profile.tenant_id)
            elif profile is not None:
                invitation = await self._find_invitation(profile.email, invite_token)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to load onboarding state",
                identity_id=str(identity.id),
                error=str(e),
            )
            raise DependencyFailure("Onboarding state is temporarily unavailable") from e

        stage = resolve_stage(identity, profile, tenant, invitation, now)
        logger.debug("Stage resolved", identity_id=str(identity.id), stage=stage.code.value)
        return stage

    async def _find_invitation(self, email: str, invite_token: str | None) -> Invitation | None:
        if invite_token:
            normalized = normalize_invitation_token(invite_token)
            if is_valid_invitation_token(normalized):
                invitation = await self.invitation_repo.get_by_token_hash(hash_token(normalized))
                if (
                    invitation is not None
                    and invitation.is_open()
                    and invitation.is_addressed_to(email)
                ):
                    return invitation
            logger.info("Ignoring unusable invitation token", token=mask_token(normalized))
        return await self.invitation_repo.get_open_for_email(email)
