"""Repository for Tenant entity."""

from uuid import UUID

from sqlmodel import select

from src.academy.models import Tenant
from src.academy.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant entity."""

    model = Tenant

    async def get_by_owner(self, owner_id: UUID) -> Tenant | None:
        """Get the tenant owned by a profile."""
        result = await self.session.execute(select(Tenant).where(Tenant.owner_id == owner_id))
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        """Check whether a slug is already taken."""
        result = await self.session.execute(select(Tenant.id).where(Tenant.slug == slug))
        return result.scalar_one_or_none() is not None
