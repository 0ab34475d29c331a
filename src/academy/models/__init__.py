"""Model exports.

Import from here: `from src.academy.models import Profile, Tenant`
"""

from src.academy.models.enums import (
    ApprovalStatus,
    InvitationStatus,
    NextAction,
    RoleCode,
    StageCode,
)
from src.academy.models.invitation import Invitation
from src.academy.models.profile import Profile
from src.academy.models.tenant import Tenant

__all__ = [
    # Enums
    "ApprovalStatus",
    "InvitationStatus",
    "NextAction",
    "RoleCode",
    "StageCode",
    # Models
    "Invitation",
    "Profile",
    "Tenant",
]
