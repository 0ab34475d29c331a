"""Invitation token handling - generation, normalization, hashing, masking."""

import re
import secrets
from hashlib import sha256
from typing import Final

INVITATION_TOKEN_BYTES: Final[int] = 32
INVITATION_TOKEN_REGEX: Final[str] = r"^[a-f0-9]{64}$"

_INVITATION_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(INVITATION_TOKEN_REGEX)


def generate_invitation_token() -> str:
    """Generate a fresh invitation token (64 lowercase hex characters)."""
    return secrets.token_hex(INVITATION_TOKEN_BYTES)


def normalize_invitation_token(token: str) -> str:
    """Strip surrounding whitespace and lowercase the token.

    Tokens travel through URLs, emails and copy-paste, so case and
    stray whitespace are not significant.
    """
    return token.strip().lower()


def is_valid_invitation_token(token: str) -> bool:
    """Check the normalized token format."""
    return bool(_INVITATION_TOKEN_PATTERN.match(token))


def validate_invitation_token(token: str | None) -> str:
    """Normalize and validate a token, returning the normalized form.

    Raises:
        ValueError: If the token is missing or malformed.
    """
    if not token:
        raise ValueError("Invitation token is required")
    normalized = normalize_invitation_token(token)
    if not is_valid_invitation_token(normalized):
        raise ValueError("Invitation token format is invalid")
    return normalized


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def mask_token(token: str | None) -> str:
    """Render a token safe for logs: first 8 chars, ellipsis, last 4."""
    if not token:
        return "<empty>"
    if len(token) <= 12:
        return "***"
    return f"{token[:8]}...{token[-4:]}"
