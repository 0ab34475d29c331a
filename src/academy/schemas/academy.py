"""Academy (tenant) schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.academy.core.security.validators import validate_clock_time


class BusinessHours(BaseModel):
    start: str = Field(default="09:00", json_schema_extra={"examples": ["09:00"]})
    end: str = Field(default="22:00", json_schema_extra={"examples": ["22:00"]})

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return validate_clock_time(v)

    @model_validator(mode="after")
    def validate_order(self) -> "BusinessHours":
        # Zero-padded HH:MM strings compare in clock order
        if self.start >= self.end:
            raise ValueError("Business hours must start before they end")
        return self


class AcademySettings(BaseModel):
    """Operational settings filled in during academy setup."""

    address: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=30)
    business_hours: BusinessHours | None = None
    subjects: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("subjects")
    @classmethod
    def normalize_subjects(cls, v: list[str]) -> list[str]:
        """Trim entries, drop blanks and duplicates, keep order."""
        seen: dict[str, None] = {}
        for subject in v:
            cleaned = subject.strip()
            if cleaned:
                seen.setdefault(cleaned, None)
        return list(seen)


class AcademySetupRequest(BaseModel):
    timezone: str | None = Field(
        default=None,
        max_length=64,
        json_schema_extra={"examples": ["Asia/Seoul"]},
    )
    settings: AcademySettings | None = None
    academy_name: str | None = Field(default=None, max_length=100)


class TenantRead(BaseModel):
    id: UUID
    name: str
    slug: str
    owner_id: UUID
    timezone: str | None = None
    settings: dict[str, Any] = Field(default_factory=dict)
    is_setup_complete: bool
    setup_completed_at: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
