from src.academy.repositories.base import BaseRepository
from src.academy.repositories.invitation import InvitationRepository
from src.academy.repositories.profile import ProfileRepository
from src.academy.repositories.tenant import TenantRepository

__all__ = [
    "BaseRepository",
    "InvitationRepository",
    "ProfileRepository",
    "TenantRepository",
]
