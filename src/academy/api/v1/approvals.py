"""Owner approval API endpoints (approver role required)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.academy.api.dependencies import ApprovalServiceDep, ApproverIdentity
from src.academy.core.config import get_settings
from src.academy.schemas import (
    ApprovalDecisionRequest,
    PaginatedResponse,
    PendingOwnerRead,
    ProfileRead,
)

router = APIRouter(prefix="/approvals", tags=["approvals"])


@router.get(
    "/pending",
    response_model=PaginatedResponse[PendingOwnerRead],
    summary="List owners awaiting approval",
)
async def list_pending_owners(
    approver: ApproverIdentity,
    approval_service: ApprovalServiceDep,
    cursor: str | None = None,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> PaginatedResponse[PendingOwnerRead]:
    """List pending owners, newest first."""
    items, next_cursor, has_more = await approval_service.list_pending_owners(
        cursor, limit or get_settings().approval_page_size
    )
    return PaginatedResponse[PendingOwnerRead](
        items=[PendingOwnerRead.model_validate(item) for item in items],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "/{profile_id}",
    response_model=ProfileRead,
    summary="Approve or reject an owner",
    description="Terminal decision: a decided owner cannot be decided again.",
)
async def set_approval_status(
    profile_id: UUID,
    request: ApprovalDecisionRequest,
    approver: ApproverIdentity,
    approval_service: ApprovalServiceDep,
) -> ProfileRead:
    profile = await approval_service.set_approval_status(
        profile_id=profile_id,
        status=request.status,
        approver_id=approver.id,
        reason=request.reason,
    )
    return ProfileRead.model_validate(profile)
