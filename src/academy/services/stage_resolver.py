"""Stage resolution - the single decision table for onboarding routing.

``resolve_stage`` is pure: it performs no I/O and only looks at the
already-fetched identity, profile, tenant and invitation. The order of the
checks is significant. Email verification gates everything, and a pending
invitation is considered before a tenantless profile is treated as a new
owner, because "no tenant yet" is ambiguous between a new owner and invited
staff who have not accepted yet.
"""

from datetime import datetime

from src.academy.core.identity import Identity
from src.academy.models import (
    ApprovalStatus,
    Invitation,
    NextAction,
    Profile,
    StageCode,
    Tenant,
)
from src.academy.schemas.stage import Stage


def resolve_stage(
    identity: Identity | None,
    profile: Profile | None,
    tenant: Tenant | None = None,
    invitation: Invitation | None = None,
    now: datetime | None = None,
) -> Stage:
    """Map the onboarding inputs to the current Stage.

    Args:
        identity: Authenticated principal, or None when signed out.
        profile: Profile keyed by the identity id, if one exists.
        tenant: The profile's tenant. A tenant-linked profile whose tenant
            is not supplied is treated as having incomplete setup.
        invitation: An invitation the caller holds or that is addressed to
            the profile email. Only a pending, unexpired invitation for the
            profile's email counts.
        now: Evaluation time for invitation expiry (defaults to now).
    """
    if identity is None:
        return Stage(code=StageCode.NO_IDENTITY, next_action=NextAction.SIGN_IN)

    if not identity.email_confirmed:
        return Stage(code=StageCode.EMAIL_UNVERIFIED, next_action=NextAction.VERIFY_EMAIL)

    if profile is None:
        return Stage(code=StageCode.NO_PROFILE, next_action=NextAction.CREATE_PROFILE)

    if profile.tenant_id is None:
        if (
            invitation is not None
            and invitation.is_open(now)
            and invitation.is_addressed_to(profile.email)
        ):
            return Stage(code=StageCode.MEMBER_INVITED, next_action=NextAction.ACCEPT_INVITATION)
        return Stage(code=StageCode.NO_PROFILE, next_action=NextAction.COMPLETE_OWNER_ONBOARDING)

    if profile.is_owner:
        if profile.approval_status == ApprovalStatus.PENDING.value:
            return Stage(
                code=StageCode.OWNER_PENDING_APPROVAL,
                next_action=NextAction.WAIT_FOR_APPROVAL,
            )
        if profile.approval_status == ApprovalStatus.REJECTED.value:
            return Stage(code=StageCode.OWNER_REJECTED, reason=profile.rejection_reason)

    if tenant is None or tenant.id != profile.tenant_id or not tenant.is_setup_complete:
        next_action = (
            NextAction.COMPLETE_ACADEMY_SETUP
            if profile.is_owner
            else NextAction.WAIT_FOR_ACADEMY_SETUP
        )
        return Stage(code=StageCode.OWNER_SETUP_INCOMPLETE, next_action=next_action)

    return Stage(code=StageCode.READY)
