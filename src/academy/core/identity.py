"""Identity source - the externally authenticated principal.

Identities are issued and owned by the external auth provider. This module
only reads them: it decodes the provider's access token and exposes the
subset of claims the onboarding engine needs.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import UUID

from jose import JWTError, jwt

from src.academy.core.config import get_settings
from src.academy.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    """Authenticated principal supplied by the identity provider."""

    id: UUID
    email: str
    email_confirmed: bool
    full_name: str | None = None
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_role(self, role: str) -> bool:
        return role in self.roles


class IdentitySource(Protocol):
    """Anything that can tell who is calling."""

    async def get_current_identity(self) -> Identity | None: ...


def decode_identity_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a provider access token. Returns None on any error."""
    settings = get_settings()
    options = {"verify_aud": settings.identity_jwt_audience is not None}
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.identity_jwt_secret,
            algorithms=[settings.identity_jwt_algorithm],
            audience=settings.identity_jwt_audience,
            options=options,
        )
    except JWTError:
        return None


def identity_from_claims(claims: dict[str, Any]) -> Identity | None:
    """Build an Identity from decoded token claims.

    Email confirmation is read from ``email_confirmed_at`` (set once the
    provider confirmed the address) or a boolean ``email_verified``.
    """
    subject = claims.get("sub")
    email = claims.get("email")
    if not subject or not email:
        return None

    try:
        identity_id = UUID(str(subject))
    except ValueError:
        return None

    user_metadata = claims.get("user_metadata") or {}
    app_metadata = claims.get("app_metadata") or {}
    roles = app_metadata.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]

    email_confirmed = bool(claims.get("email_confirmed_at")) or claims.get("email_verified") is True

    return Identity(
        id=identity_id,
        email=str(email).strip().lower(),
        email_confirmed=email_confirmed,
        full_name=user_metadata.get("full_name") or None,
        roles=frozenset(str(role) for role in roles),
    )


class BearerIdentitySource:
    """Identity source backed by an ``Authorization: Bearer`` header."""

    def __init__(self, authorization: str | None):
        self.authorization = authorization

    async def get_current_identity(self) -> Identity | None:
        if not self.authorization or not self.authorization.startswith("Bearer "):
            return None

        claims = decode_identity_token(self.authorization[7:])
        if claims is None:
            logger.info("Rejected identity token")
            return None

        return identity_from_claims(claims)
