from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.academy.schemas.stage import Stage


class ProfileRead(BaseModel):
    id: UUID
    tenant_id: UUID | None = None
    role_code: str | None = None
    approval_status: str
    name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ProfileResponse(BaseModel):
    """Profile together with the stage it resolves to after the transition."""

    profile: ProfileRead
    stage: Stage
