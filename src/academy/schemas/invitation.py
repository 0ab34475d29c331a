"""Invitation schemas."""

from datetime import datetime

from pydantic import BaseModel


class InvitationInfo(BaseModel):
    """Public info about an invitation (for the accept page)."""

    email: str
    tenant_name: str
    tenant_slug: str | None
    role_code: str
    status: str
    expires_at: datetime
