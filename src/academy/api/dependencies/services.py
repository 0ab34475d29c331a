"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.academy.api.dependencies.db import DBSession
from src.academy.api.dependencies.repositories import InvitationRepo, ProfileRepo, TenantRepo
from src.academy.services import (
    ApprovalService,
    InvitationService,
    OwnerOnboardingService,
    ProfileService,
    StageService,
)


def get_stage_service(
    profile_repo: ProfileRepo,
    tenant_repo: TenantRepo,
    invitation_repo: InvitationRepo,
    session: DBSession,
) -> StageService:
    """Get stage service."""
    return StageService(profile_repo, tenant_repo, invitation_repo, session)


def get_profile_service(profile_repo: ProfileRepo, session: DBSession) -> ProfileService:
    """Get profile service."""
    return ProfileService(profile_repo, session)


def get_invitation_service(
    invitation_repo: InvitationRepo,
    profile_repo: ProfileRepo,
    tenant_repo: TenantRepo,
    session: DBSession,
) -> InvitationService:
    """Get invitation service."""
    return InvitationService(invitation_repo, profile_repo, tenant_repo, session)


def get_owner_onboarding_service(
    profile_repo: ProfileRepo,
    tenant_repo: TenantRepo,
    session: DBSession,
) -> OwnerOnboardingService:
    """Get owner onboarding service."""
    return OwnerOnboardingService(profile_repo, tenant_repo, session)


def get_approval_service(profile_repo: ProfileRepo, session: DBSession) -> ApprovalService:
    """Get approval service."""
    return ApprovalService(profile_repo, session)


StageServiceDep = Annotated[StageService, Depends(get_stage_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]
OwnerOnboardingServiceDep = Annotated[
    OwnerOnboardingService, Depends(get_owner_onboarding_service)
]
ApprovalServiceDep = Annotated[ApprovalService, Depends(get_approval_service)]
