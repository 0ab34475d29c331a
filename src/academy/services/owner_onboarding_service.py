"""Owner onboarding service - academy creation and setup.

This service does NOT require a tenant context because it creates the tenant.
"""

import secrets
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.academy.core.config import get_settings
from src.academy.core.exceptions import (
    Conflict,
    DependencyFailure,
    NotFound,
    OnboardingError,
    ValidationError,
)
from src.academy.core.logging import get_logger
from src.academy.core.security import validate_tenant_slug_format, validate_timezone
from src.academy.models import ApprovalStatus, Profile, RoleCode, Tenant
from src.academy.models.profile import MAX_PROFILE_NAME_LENGTH
from src.academy.repositories import ProfileRepository, TenantRepository
from src.academy.schemas.academy import AcademySettings

logger = get_logger(__name__)

SLUG_GENERATION_ATTEMPTS = 3


def generate_academy_slug() -> str:
    """Generate a slug like 'academy-5f1c0e9a2b7d'."""
    return f"academy-{secrets.token_hex(6)}"


class OwnerOnboardingService:
    """Service for owner onboarding: tenant creation, then academy setup."""

    def __init__(
        self,
        profile_repo: ProfileRepository,
        tenant_repo: TenantRepository,
        session: AsyncSession,
    ):
        self.profile_repo = profile_repo
        self.tenant_repo = tenant_repo
        self.session = session

    async def complete_owner_onboarding(
        self,
        profile_id: UUID,
        name: str,
        academy_name: str,
        slug: str | None = None,
    ) -> tuple[Profile, Tenant]:
        """Create the academy for a tenantless profile and make the profile its owner.

        1. Validate name, academy name and optional slug
        2. Reject profiles that already belong to a tenant
        3. Insert the tenant and link the profile in ONE transaction; the
           profile update is conditional on ``tenant_id IS NULL`` and the
           tenant's ``owner_id`` is unique, so a retry or a racing request
           can never produce a second tenant
        4. The owner starts with approval pending

        Returns (profile, tenant).
        Raises ValidationError, NotFound, Conflict or DependencyFailure.
        """
        name = (name or "").strip()
        academy_name = (academy_name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        if len(name) > MAX_PROFILE_NAME_LENGTH:
            raise ValidationError(f"Name must be at most {MAX_PROFILE_NAME_LENGTH} characters")
        if not academy_name:
            raise ValidationError("Academy name is required")
        if slug is not None:
            try:
                slug = validate_tenant_slug_format(slug)
            except ValueError as e:
                raise ValidationError(str(e)) from e

        try:
            profile = await self.profile_repo.get_by_id(profile_id)
            if profile is None:
                raise NotFound("Profile not found")
            if profile.tenant_id is not None:
                raise Conflict("Profile already belongs to an academy")

            if slug is None:
                slug = await self._generate_unique_slug()
            elif await self.tenant_repo.slug_exists(slug):
                raise Conflict(f"Academy slug '{slug}' is already taken")

            tenant = Tenant(name=academy_name, slug=slug, owner_id=profile.id)
            self.tenant_repo.add(tenant)
            await self.session.flush()

            attached = await self.profile_repo.attach_to_tenant(
                profile.id,
                tenant.id,
                RoleCode.OWNER,
                ApprovalStatus.PENDING,
                name=name,
            )
            if not attached:
                raise Conflict("Profile already belongs to an academy")

            await self.session.commit()
            await self.session.refresh(profile)
            await self.session.refresh(tenant)

        except OnboardingError:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("Owner onboarding lost a race", profile_id=str(profile_id))
            raise Conflict("An academy already exists for this owner or slug") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to complete owner onboarding",
                profile_id=str(profile_id),
                error=str(e),
            )
            raise DependencyFailure("Academy could not be created, try again") from e

        logger.info(
            "Owner onboarding completed",
            profile_id=str(profile.id),
            tenant_id=str(tenant.id),
            slug=tenant.slug,
        )
        return profile, tenant

    async def complete_academy_setup(
        self,
        profile_id: UUID,
        timezone: str | None = None,
        settings: AcademySettings | dict[str, Any] | None = None,
        academy_name: str | None = None,
    ) -> Tenant:
        """Fill in the academy's operational fields.

        Idempotent: repeated calls overwrite the same fields. Omitted values
        keep what is stored (timezone falls back to the configured default
        when none is stored yet). ``setup_completed_at`` is recorded once.
        """
        if timezone is not None:
            try:
                timezone = validate_timezone(timezone)
            except ValueError as e:
                raise ValidationError(str(e)) from e

        academy_settings: AcademySettings | None = None
        if isinstance(settings, AcademySettings):
            academy_settings = settings
        elif settings is not None:
            try:
                academy_settings = AcademySettings.model_validate(settings)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid academy settings: {e.errors()[0]['msg']}") from e

        if academy_name is not None:
            academy_name = academy_name.strip()
            if not academy_name:
                raise ValidationError("Academy name cannot be empty")

        try:
            profile = await self.profile_repo.get_by_id(profile_id)
            if profile is None:
                raise NotFound("Profile not found")
            if profile.tenant_id is None:
                raise Conflict("Academy setup requires completed owner onboarding")
            if not profile.is_owner:
                raise Conflict("Only the academy owner can complete setup")

            tenant = await self.tenant_repo.get_by_id(profile.tenant_id)
            if tenant is None:
                raise NotFound("Academy not found")

            now = tenant.touch()
            tenant.timezone = timezone or tenant.timezone or get_settings().default_timezone
            if academy_settings is not None:
                tenant.settings = academy_settings.model_dump(mode="json")
            if academy_name is not None:
                tenant.name = academy_name
            if tenant.setup_completed_at is None:
                tenant.setup_completed_at = now
            self.tenant_repo.add(tenant)

            await self.session.commit()
            await self.session.refresh(tenant)

        except OnboardingError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to complete academy setup",
                profile_id=str(profile_id),
                error=str(e),
            )
            raise DependencyFailure("Academy setup could not be saved, try again") from e

        logger.info(
            "Academy setup saved",
            tenant_id=str(tenant.id),
            timezone=tenant.timezone,
        )
        return tenant

    async def _generate_unique_slug(self) -> str:
        for _ in range(SLUG_GENERATION_ATTEMPTS):
            candidate = generate_academy_slug()
            if not await self.tenant_repo.slug_exists(candidate):
                return candidate
        raise Conflict("Could not generate a unique academy slug")
