"""Owner onboarding schemas."""

from pydantic import BaseModel, Field

from src.academy.core.security.validators import MAX_TENANT_SLUG_LENGTH
from src.academy.models.profile import MAX_PROFILE_NAME_LENGTH
from src.academy.schemas.academy import TenantRead
from src.academy.schemas.profile import ProfileRead
from src.academy.schemas.stage import Stage


class OwnerOnboardingRequest(BaseModel):
    name: str = Field(max_length=MAX_PROFILE_NAME_LENGTH)
    academy_name: str = Field(max_length=100)
    slug: str | None = Field(
        default=None,
        max_length=MAX_TENANT_SLUG_LENGTH,
        json_schema_extra={
            "examples": ["bright-minds"],
            "description": "Optional. Generated when omitted.",
        },
    )


class OwnerOnboardingResponse(BaseModel):
    profile: ProfileRead
    tenant: TenantRead
    stage: Stage


class AcademySetupResponse(BaseModel):
    tenant: TenantRead
    stage: Stage
