from src.academy.services.approval_service import ApprovalService
from src.academy.services.invitation_service import InvitationService
from src.academy.services.owner_onboarding_service import OwnerOnboardingService
from src.academy.services.profile_service import ProfileService
from src.academy.services.stage_resolver import resolve_stage
from src.academy.services.stage_service import StageService

__all__ = [
    "ApprovalService",
    "InvitationService",
    "OwnerOnboardingService",
    "ProfileService",
    "StageService",
    "resolve_stage",
]
