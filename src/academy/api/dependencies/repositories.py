"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.academy.api.dependencies.db import DBSession
from src.academy.repositories import (
    InvitationRepository,
    ProfileRepository,
    TenantRepository,
)


def get_profile_repository(session: DBSession) -> ProfileRepository:
    """Get profile repository."""
    return ProfileRepository(session)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    """Get tenant repository."""
    return TenantRepository(session)


def get_invitation_repository(session: DBSession) -> InvitationRepository:
    """Get invitation repository."""
    return InvitationRepository(session)


ProfileRepo = Annotated[ProfileRepository, Depends(get_profile_repository)]
TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
InvitationRepo = Annotated[InvitationRepository, Depends(get_invitation_repository)]
