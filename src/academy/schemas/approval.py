"""Approval schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class ApprovalDecisionRequest(BaseModel):
    status: Literal["approved", "rejected"]
    reason: str | None = Field(default=None, max_length=500)


class ApprovalStatusInfo(BaseModel):
    status: str
    reason: str | None = None
    tenant_id: UUID | None = None


class PendingOwnerRead(BaseModel):
    id: UUID
    name: str
    email: str
    tenant_id: UUID | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
