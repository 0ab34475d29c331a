"""Onboarding API endpoints.

Every transition answers with the stage the caller resolves to afterwards,
so the client can route without a second round trip.
"""

from fastapi import APIRouter, status

from src.academy.api.dependencies import (
    ApprovalServiceDep,
    CurrentIdentity,
    InvitationServiceDep,
    OptionalIdentity,
    OwnerOnboardingServiceDep,
    ProfileServiceDep,
    StageServiceDep,
)
from src.academy.schemas import (
    AcademySetupRequest,
    AcademySetupResponse,
    ApprovalStatusInfo,
    InvitationInfo,
    OwnerOnboardingRequest,
    OwnerOnboardingResponse,
    ProfileRead,
    ProfileResponse,
    Stage,
    TenantRead,
)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.get(
    "/stage",
    response_model=Stage,
    summary="Get onboarding stage",
    description="Resolve where the caller is in onboarding. Works signed out (NO_IDENTITY).",
)
async def get_stage(
    identity: OptionalIdentity,
    stage_service: StageServiceDep,
    invite_token: str | None = None,
) -> Stage:
    return await stage_service.get_stage(identity, invite_token)


@router.post(
    "/profile",
    response_model=ProfileResponse,
    summary="Create profile",
    description="Idempotently create the caller's profile. Requires a confirmed email.",
)
async def create_profile(
    identity: CurrentIdentity,
    profile_service: ProfileServiceDep,
    stage_service: StageServiceDep,
) -> ProfileResponse:
    profile = await profile_service.ensure_profile(identity)
    stage = await stage_service.get_stage(identity)
    return ProfileResponse(profile=ProfileRead.model_validate(profile), stage=stage)


@router.get(
    "/invitations/{token}",
    response_model=InvitationInfo,
    summary="Get invitation info",
    description="Public information about an invitation for the accept page.",
)
async def get_invitation(
    token: str,
    invitation_service: InvitationServiceDep,
) -> InvitationInfo:
    return await invitation_service.describe(token)


@router.post(
    "/invitations/{token}/accept",
    response_model=ProfileResponse,
    summary="Accept invitation",
    description="Join the inviting academy with the invited role. Consumes the token.",
)
async def accept_invitation(
    token: str,
    identity: CurrentIdentity,
    profile_service: ProfileServiceDep,
    invitation_service: InvitationServiceDep,
    stage_service: StageServiceDep,
) -> ProfileResponse:
    # Invitees may arrive straight from the confirmation link without a profile
    await profile_service.ensure_profile(identity)
    profile = await invitation_service.accept(token, identity.id)
    stage = await stage_service.get_stage(identity)
    return ProfileResponse(profile=ProfileRead.model_validate(profile), stage=stage)


@router.post(
    "/owner",
    response_model=OwnerOnboardingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Complete owner onboarding",
    description="Create the caller's academy and make them its owner (pending approval).",
)
async def complete_owner_onboarding(
    request: OwnerOnboardingRequest,
    identity: CurrentIdentity,
    profile_service: ProfileServiceDep,
    onboarding_service: OwnerOnboardingServiceDep,
    stage_service: StageServiceDep,
) -> OwnerOnboardingResponse:
    await profile_service.ensure_profile(identity)
    profile, tenant = await onboarding_service.complete_owner_onboarding(
        profile_id=identity.id,
        name=request.name,
        academy_name=request.academy_name,
        slug=request.slug,
    )
    stage = await stage_service.get_stage(identity)
    return OwnerOnboardingResponse(
        profile=ProfileRead.model_validate(profile),
        tenant=TenantRead.model_validate(tenant),
        stage=stage,
    )


@router.put(
    "/academy",
    response_model=AcademySetupResponse,
    summary="Complete academy setup",
    description="Fill in timezone and operational settings. Safe to repeat.",
)
async def complete_academy_setup(
    request: AcademySetupRequest,
    identity: CurrentIdentity,
    onboarding_service: OwnerOnboardingServiceDep,
    stage_service: StageServiceDep,
) -> AcademySetupResponse:
    tenant = await onboarding_service.complete_academy_setup(
        profile_id=identity.id,
        timezone=request.timezone,
        settings=request.settings,
        academy_name=request.academy_name,
    )
    stage = await stage_service.get_stage(identity)
    return AcademySetupResponse(tenant=TenantRead.model_validate(tenant), stage=stage)


@router.get(
    "/approval",
    response_model=ApprovalStatusInfo,
    summary="Get own approval status",
)
async def get_own_approval_status(
    identity: CurrentIdentity,
    approval_service: ApprovalServiceDep,
) -> ApprovalStatusInfo:
    return await approval_service.get_approval_status(identity.id)
