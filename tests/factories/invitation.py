"""Invitation factory for test data generation."""

from datetime import timedelta
from uuid import UUID

from polyfactory import Use

from src.academy.core.security import generate_invitation_token, hash_token
from src.academy.models import Invitation, InvitationStatus, RoleCode
from tests.factories.base import BaseFactory, generate_uuid, short_id, utc_now


def generate_token_hash() -> str:
    """Generate the hash of a random token."""
    return hash_token(generate_invitation_token())


class InvitationFactory(BaseFactory):
    """Factory for generating Invitation test data."""

    __model__ = Invitation

    id = Use(generate_uuid)
    token_hash = Use(generate_token_hash)
    tenant_id = None  # Required FK - must be set explicitly
    invited_by = Use(generate_uuid)
    email = Use(lambda: f"invite_{short_id()}@example.com")
    role_code = RoleCode.INSTRUCTOR.value
    status = InvitationStatus.PENDING.value
    expires_at = Use(lambda: utc_now() + timedelta(days=7))
    created_at = Use(utc_now)
    accepted_at = None
    accepted_by = None

    @classmethod
    def accepted(cls, accepted_by: UUID, **kwargs):
        """Create an accepted invitation."""
        return cls.build(
            status=InvitationStatus.ACCEPTED.value,
            accepted_at=utc_now(),
            accepted_by=accepted_by,
            **kwargs,
        )

    @classmethod
    def cancelled(cls, **kwargs):
        """Create a cancelled invitation."""
        return cls.build(status=InvitationStatus.CANCELLED.value, **kwargs)

    @classmethod
    def expired(cls, **kwargs):
        """Create an invitation past its expiry (status still pending)."""
        return cls.build(expires_at=utc_now() - timedelta(days=1), **kwargs)
