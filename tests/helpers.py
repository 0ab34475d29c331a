"""Test helper functions for common data creation patterns.

All helpers commit, so the rows are visible to other sessions and the
caller's session does not keep a write lock open.
"""

from datetime import timedelta
from uuid import UUID, uuid4

from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from src.academy.core.config import get_settings
from src.academy.core.identity import Identity
from src.academy.core.security import generate_invitation_token, hash_token
from src.academy.models import Invitation, Profile, RoleCode, Tenant
from src.academy.repositories import InvitationRepository, ProfileRepository, TenantRepository
from src.academy.services import (
    ApprovalService,
    InvitationService,
    OwnerOnboardingService,
    ProfileService,
    StageService,
)
from tests.factories import InvitationFactory, ProfileFactory, TenantFactory
from tests.factories.base import utc_now


def make_identity(
    email: str | None = None,
    email_confirmed: bool = True,
    identity_id: UUID | None = None,
    full_name: str | None = "Test Member",
    roles: frozenset[str] = frozenset(),
) -> Identity:
    """Build an Identity as the provider would hand it to us."""
    return Identity(
        id=identity_id or uuid4(),
        email=email or f"member_{uuid4().hex[-8:]}@example.com",
        email_confirmed=email_confirmed,
        full_name=full_name,
        roles=roles,
    )


def make_identity_token(
    identity: Identity,
    expires_in: timedelta = timedelta(minutes=15),
    audience: str = "authenticated",
    secret: str | None = None,
) -> str:
    """Sign an access token carrying the identity's claims."""
    settings = get_settings()
    claims = {
        "sub": str(identity.id),
        "email": identity.email,
        "aud": audience,
        "exp": utc_now() + expires_in,
        "user_metadata": {"full_name": identity.full_name} if identity.full_name else {},
        "app_metadata": {"roles": sorted(identity.roles)},
    }
    if identity.email_confirmed:
        claims["email_confirmed_at"] = utc_now().isoformat()
    return jwt.encode(
        claims,
        secret or settings.identity_jwt_secret,
        algorithm=settings.identity_jwt_algorithm,
    )


def auth_headers(identity: Identity) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_identity_token(identity)}"}


async def create_profile(
    session: AsyncSession, identity: Identity | None = None, **kwargs
) -> Profile:
    """Create a tenantless profile (for an identity when given)."""
    if identity is not None:
        kwargs.setdefault("id", identity.id)
        kwargs.setdefault("email", identity.email)
    profile = ProfileFactory.build(**kwargs)
    session.add(profile)
    await session.commit()
    return profile


async def create_owner_with_tenant(
    session: AsyncSession,
    identity: Identity | None = None,
    approval: str = "pending",
    setup_complete: bool = True,
    **profile_kwargs,
) -> tuple[Profile, Tenant]:
    """Create a tenant together with its owner profile.

    Args:
        session: Database session
        identity: Identity the owner profile belongs to (random when omitted)
        approval: "pending", "approved" or "rejected"
        setup_complete: Whether academy setup has been done
        **profile_kwargs: Additional args passed to ProfileFactory

    Returns:
        Tuple of (profile, tenant)
    """
    owner_id = identity.id if identity is not None else uuid4()
    if identity is not None:
        profile_kwargs.setdefault("email", identity.email)

    tenant = (
        TenantFactory.build(owner_id=owner_id)
        if setup_complete
        else TenantFactory.incomplete(owner_id=owner_id)
    )
    session.add(tenant)
    await session.flush()

    builders = {
        "pending": ProfileFactory.pending_owner,
        "approved": ProfileFactory.approved_owner,
        "rejected": ProfileFactory.rejected_owner,
    }
    profile = builders[approval](tenant_id=tenant.id, id=owner_id, **profile_kwargs)
    session.add(profile)
    await session.commit()
    return profile, tenant


async def create_staff(
    session: AsyncSession,
    tenant: Tenant,
    identity: Identity | None = None,
    role: RoleCode = RoleCode.INSTRUCTOR,
) -> Profile:
    """Create an approved staff member of a tenant."""
    kwargs = {"id": identity.id, "email": identity.email} if identity is not None else {}
    profile = ProfileFactory.staff(tenant_id=tenant.id, role=role, **kwargs)
    session.add(profile)
    await session.commit()
    return profile


async def create_invitation(
    session: AsyncSession,
    tenant: Tenant,
    email: str,
    variant: str | None = None,
    **kwargs,
) -> tuple[Invitation, str]:
    """Create an invitation and return it with its plaintext token.

    Args:
        variant: None for a pending invitation, or "expired", "cancelled"
            or "accepted".
    """
    token = generate_invitation_token()
    kwargs.update(token_hash=hash_token(token), tenant_id=tenant.id, email=email)
    kwargs.setdefault("invited_by", tenant.owner_id)

    if variant == "expired":
        invitation = InvitationFactory.expired(**kwargs)
    elif variant == "cancelled":
        invitation = InvitationFactory.cancelled(**kwargs)
    elif variant == "accepted":
        invitation = InvitationFactory.accepted(accepted_by=uuid4(), **kwargs)
    else:
        invitation = InvitationFactory.build(**kwargs)

    session.add(invitation)
    await session.commit()
    return invitation, token


class Services:
    """All onboarding services bound to one session, as one request sees them."""

    def __init__(self, session: AsyncSession):
        profile_repo = ProfileRepository(session)
        tenant_repo = TenantRepository(session)
        invitation_repo = InvitationRepository(session)
        self.stage = StageService(profile_repo, tenant_repo, invitation_repo, session)
        self.profiles = ProfileService(profile_repo, session)
        self.invitations = InvitationService(invitation_repo, profile_repo, tenant_repo, session)
        self.onboarding = OwnerOnboardingService(profile_repo, tenant_repo, session)
        self.approvals = ApprovalService(profile_repo, session)


async def fetch_fresh(session: AsyncSession, session_factory, model, id: UUID):
    """Read a row through a new session.

    The caller's session is committed first so its open transaction does
    not hold the database lock the new session needs.
    """
    await session.commit()
    async with session_factory() as fresh:
        return await fresh.get(model, id)
