from src.academy.schemas.academy import (
    AcademySettings,
    AcademySetupRequest,
    BusinessHours,
    TenantRead,
)
from src.academy.schemas.approval import (
    ApprovalDecisionRequest,
    ApprovalStatusInfo,
    PendingOwnerRead,
)
from src.academy.schemas.invitation import InvitationInfo
from src.academy.schemas.onboarding import (
    AcademySetupResponse,
    OwnerOnboardingRequest,
    OwnerOnboardingResponse,
)
from src.academy.schemas.pagination import PaginatedResponse
from src.academy.schemas.profile import ProfileRead, ProfileResponse
from src.academy.schemas.stage import Stage

__all__ = [
    "AcademySettings",
    "AcademySetupRequest",
    "AcademySetupResponse",
    "ApprovalDecisionRequest",
    "ApprovalStatusInfo",
    "BusinessHours",
    "InvitationInfo",
    "OwnerOnboardingRequest",
    "OwnerOnboardingResponse",
    "PaginatedResponse",
    "PendingOwnerRead",
    "ProfileRead",
    "ProfileResponse",
    "Stage",
    "TenantRead",
]
