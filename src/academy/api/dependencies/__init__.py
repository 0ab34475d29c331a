"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenient imports.
"""

# Database
from src.academy.api.dependencies.db import DBSession, get_db_session

# Identity
from src.academy.api.dependencies.identity import (
    ApproverIdentity,
    CurrentIdentity,
    OptionalIdentity,
    get_current_identity,
    get_identity_source,
    get_optional_identity,
    require_approver,
)

# Repositories
from src.academy.api.dependencies.repositories import (
    InvitationRepo,
    ProfileRepo,
    TenantRepo,
    get_invitation_repository,
    get_profile_repository,
    get_tenant_repository,
)

# Services
from src.academy.api.dependencies.services import (
    ApprovalServiceDep,
    InvitationServiceDep,
    OwnerOnboardingServiceDep,
    ProfileServiceDep,
    StageServiceDep,
    get_approval_service,
    get_invitation_service,
    get_owner_onboarding_service,
    get_profile_service,
    get_stage_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Identity
    "ApproverIdentity",
    "CurrentIdentity",
    "OptionalIdentity",
    "get_current_identity",
    "get_identity_source",
    "get_optional_identity",
    "require_approver",
    # Repositories
    "InvitationRepo",
    "ProfileRepo",
    "TenantRepo",
    "get_invitation_repository",
    "get_profile_repository",
    "get_tenant_repository",
    # Services
    "ApprovalServiceDep",
    "InvitationServiceDep",
    "OwnerOnboardingServiceDep",
    "ProfileServiceDep",
    "StageServiceDep",
    "get_approval_service",
    "get_invitation_service",
    "get_owner_onboarding_service",
    "get_profile_service",
    "get_stage_service",
]
