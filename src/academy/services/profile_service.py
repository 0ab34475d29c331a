"""Profile bootstrap service."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.academy.core.exceptions import DependencyFailure, ValidationError
from src.academy.core.identity import Identity
from src.academy.core.logging import get_logger
from src.academy.models import ApprovalStatus, Profile
from src.academy.models.profile import MAX_PROFILE_NAME_LENGTH
from src.academy.repositories import ProfileRepository

logger = get_logger(__name__)


class ProfileService:
    """Service for creating and reading profiles."""

    def __init__(self, profile_repo: ProfileRepository, session: AsyncSession):
        self.profile_repo = profile_repo
        self.session = session

    async def get_profile(self, profile_id: UUID) -> Profile | None:
        try:
            return await self.profile_repo.get_by_id(profile_id)
        except SQLAlchemyError as e:
            logger.error("Failed to load profile", profile_id=str(profile_id), error=str(e))
            raise DependencyFailure("Profile store is temporarily unavailable") from e

    @staticmethod
    def _display_name(identity: Identity) -> str:
        """Provider full name, else the email, clipped to the column size."""
        name = (identity.full_name or "").strip() or identity.email
        return name[:MAX_PROFILE_NAME_LENGTH].strip()

    async def ensure_profile(self, identity: Identity) -> Profile:
        """Create the minimal profile for a confirmed identity, or return the existing one.

        Safe to call concurrently: the insert relies on the primary key, and
        losing the race to another bootstrap (unique violation) counts as
        success. The profile is created tenantless, without a role, and with
        approval pending.

        Raises:
            ValidationError: The identity's email is not confirmed.
            DependencyFailure: The store is unreachable.
        """
        if not identity.email_confirmed:
            raise ValidationError("Email address must be confirmed before creating a profile")

        try:
            existing = await self.profile_repo.get_by_id(identity.id)
            if existing is not None:
                return existing

            profile = Profile(
                id=identity.id,
                email=identity.email,
                name=self._display_name(identity),
                approval_status=ApprovalStatus.PENDING.value,
            )
            self.profile_repo.add(profile)
            try:
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                winner = await self.profile_repo.get_by_id(identity.id)
                if winner is None:
                    raise
                logger.info("Profile created by concurrent request", profile_id=str(identity.id))
                return winner

            await self.session.refresh(profile)
            logger.info("Profile created", profile_id=str(profile.id))
            return profile

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to create profile", profile_id=str(identity.id), error=str(e))
            raise DependencyFailure("Profile store is temporarily unavailable") from e
