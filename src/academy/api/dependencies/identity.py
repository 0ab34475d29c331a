"""Identity dependencies - who is calling, and may they approve owners."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.academy.core.config import get_settings
from src.academy.core.identity import BearerIdentitySource, Identity, IdentitySource
from src.academy.core.logging import bind_identity_context


def get_identity_source(
    authorization: Annotated[str | None, Header()] = None,
) -> IdentitySource:
    """Identity source for the current request (bearer token from the auth provider)."""
    return BearerIdentitySource(authorization)


async def get_optional_identity(
    source: Annotated[IdentitySource, Depends(get_identity_source)],
) -> Identity | None:
    """Current identity, or None when the caller is signed out."""
    identity = await source.get_current_identity()
    if identity is not None:
        bind_identity_context(identity.id, email=identity.email)
    return identity


async def get_current_identity(
    identity: Annotated[Identity | None, Depends(get_optional_identity)],
) -> Identity:
    """Current identity; 401 when missing or invalid."""
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing, invalid or expired access token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


async def require_approver(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> Identity:
    """Current identity, which must hold the configured approver role."""
    settings = get_settings()
    if not identity.has_role(settings.approver_role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Approver role required",
        )
    return identity


OptionalIdentity = Annotated[Identity | None, Depends(get_optional_identity)]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
ApproverIdentity = Annotated[Identity, Depends(require_approver)]
