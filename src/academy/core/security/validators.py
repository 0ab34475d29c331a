"""Input validators for tenant slugs, timezones and business hours."""

import re
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

MAX_TENANT_SLUG_LENGTH: Final[int] = 56
TENANT_SLUG_REGEX: Final[str] = r"^[a-z][a-z0-9]*([-_][a-z0-9]+)*$"
BUSINESS_HOURS_REGEX: Final[str] = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"

_TENANT_SLUG_PATTERN: Final[re.Pattern[str]] = re.compile(TENANT_SLUG_REGEX)
_BUSINESS_HOURS_PATTERN: Final[re.Pattern[str]] = re.compile(BUSINESS_HOURS_REGEX)


def validate_tenant_slug_format(slug: str) -> str:
    """Validate tenant slug format and length."""
    if len(slug) > MAX_TENANT_SLUG_LENGTH:
        raise ValueError(f"Slug must be at most {MAX_TENANT_SLUG_LENGTH} characters")
    if not _TENANT_SLUG_PATTERN.match(slug):
        raise ValueError(
            "Slug must start with a letter and contain only lowercase letters, numbers, "
            "and single hyphens or underscores as separators"
        )
    return slug


def validate_timezone(name: str) -> str:
    """Validate an IANA timezone name such as 'Asia/Seoul'.

    Raises:
        ValueError: If the zone is unknown.
    """
    if not name or name != name.strip():
        raise ValueError(f"Unknown timezone: {name!r}")
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ValueError(f"Unknown timezone: {name!r}") from e
    return name


def validate_clock_time(value: str) -> str:
    """Validate a 24h 'HH:MM' clock time."""
    if not _BUSINESS_HOURS_PATTERN.match(value):
        raise ValueError(f"Time must be in HH:MM format, got {value!r}")
    return value
