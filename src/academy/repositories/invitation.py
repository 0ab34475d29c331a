"""Repository for Invitation entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select

from src.academy.models import Invitation, InvitationStatus
from src.academy.models.base import utc_now
from src.academy.repositories.base import BaseRepository


class InvitationRepository(BaseRepository[Invitation]):
    """Repository for Invitation entity."""

    model = Invitation

    async def get_by_token_hash(self, token_hash: str) -> Invitation | None:
        """Get an invitation by its token hash, whatever its status."""
        result = await self.session.execute(
            select(Invitation).where(Invitation.token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    async def get_open_for_email(
        self, email: str, now: datetime | None = None
    ) -> Invitation | None:
        """Get the newest pending, unexpired invitation addressed to an email."""
        result = await self.session.execute(
            select(Invitation)
            .where(
                func.lower(Invitation.email) == email.strip().lower(),
                Invitation.status == InvitationStatus.PENDING.value,
                Invitation.expires_at >= (now or utc_now()),
            )
            .order_by(Invitation.created_at.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def mark_accepted_if_pending(
        self,
        invitation_id: UUID,
        profile_id: UUID,
        accepted_at: datetime | None = None,
    ) -> bool:
        """Flip pending -> accepted. Returns False if another caller got there first."""
        result = await self.session.execute(
            update(Invitation)
            .where(Invitation.id == invitation_id)  # type: ignore[arg-type]
            .where(Invitation.status == InvitationStatus.PENDING.value)  # type: ignore[arg-type]
            .values(
                status=InvitationStatus.ACCEPTED.value,
                accepted_at=accepted_at or utc_now(),
                accepted_by=profile_id,
            )
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) == 1  # type: ignore[attr-defined]
