"""Security utilities - invitation tokens and input validators."""

from src.academy.core.security.tokens import (
    generate_invitation_token,
    hash_token,
    is_valid_invitation_token,
    mask_token,
    normalize_invitation_token,
    validate_invitation_token,
)
from src.academy.core.security.validators import (
    MAX_TENANT_SLUG_LENGTH,
    validate_clock_time,
    validate_tenant_slug_format,
    validate_timezone,
)

__all__ = [
    # Tokens
    "generate_invitation_token",
    "hash_token",
    "is_valid_invitation_token",
    "mask_token",
    "normalize_invitation_token",
    "validate_invitation_token",
    # Validators
    "MAX_TENANT_SLUG_LENGTH",
    "validate_clock_time",
    "validate_tenant_slug_format",
    "validate_timezone",
]
