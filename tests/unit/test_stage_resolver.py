"""Tests for the stage decision table."""

from datetime import timedelta
from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.academy.models import ApprovalStatus, NextAction, RoleCode, StageCode
from src.academy.services.stage_resolver import resolve_stage
from tests.factories import InvitationFactory, ProfileFactory, TenantFactory
from tests.factories.base import utc_now
from tests.helpers import make_identity

pytestmark = pytest.mark.unit


def test_no_identity():
    stage = resolve_stage(None, None)
    assert stage.code == StageCode.NO_IDENTITY
    assert stage.next_action == NextAction.SIGN_IN


def test_unverified_email_wins_over_everything():
    """An unconfirmed email is reported even when a complete profile exists."""
    identity = make_identity(email_confirmed=False)
    tenant = TenantFactory.build()
    profile = ProfileFactory.approved_owner(tenant_id=tenant.id, id=identity.id)

    stage = resolve_stage(identity, profile, tenant)

    assert stage.code == StageCode.EMAIL_UNVERIFIED
    assert stage.next_action == NextAction.VERIFY_EMAIL


def test_no_profile():
    stage = resolve_stage(make_identity(), None)
    assert stage.code == StageCode.NO_PROFILE
    assert stage.next_action == NextAction.CREATE_PROFILE


def test_tenantless_profile_goes_to_owner_onboarding():
    identity = make_identity()
    profile = ProfileFactory.build(id=identity.id, email=identity.email)

    stage = resolve_stage(identity, profile)

    assert stage.code == StageCode.NO_PROFILE
    assert stage.next_action == NextAction.COMPLETE_OWNER_ONBOARDING


def test_pending_invitation_makes_member_invited():
    identity = make_identity()
    profile = ProfileFactory.build(id=identity.id, email=identity.email)
    invitation = InvitationFactory.build(tenant_id=uuid4(), email=identity.email)

    stage = resolve_stage(identity, profile, invitation=invitation)

    assert stage.code == StageCode.MEMBER_INVITED
    assert stage.next_action == NextAction.ACCEPT_INVITATION


def test_invitation_email_match_ignores_case():
    identity = make_identity(email="instructor@example.com")
    profile = ProfileFactory.build(id=identity.id, email=identity.email)
    invitation = InvitationFactory.build(tenant_id=uuid4(), email="Instructor@Example.COM")

    assert resolve_stage(identity, profile, invitation=invitation).code == StageCode.MEMBER_INVITED


@pytest.mark.parametrize(
    "invitation_builder",
    [
        lambda email: InvitationFactory.expired(tenant_id=uuid4(), email=email),
        lambda email: InvitationFactory.cancelled(tenant_id=uuid4(), email=email),
        lambda email: InvitationFactory.accepted(accepted_by=uuid4(), tenant_id=uuid4(), email=email),
        lambda email: InvitationFactory.build(tenant_id=uuid4(), email=f"other.{email}"),
    ],
    ids=["expired", "cancelled", "accepted", "other-email"],
)
def test_unusable_invitation_is_ignored(invitation_builder):
    identity = make_identity()
    profile = ProfileFactory.build(id=identity.id, email=identity.email)

    stage = resolve_stage(identity, profile, invitation=invitation_builder(identity.email))

    assert stage.code == StageCode.NO_PROFILE
    assert stage.next_action == NextAction.COMPLETE_OWNER_ONBOARDING


def test_invitation_expiry_uses_evaluation_time():
    identity = make_identity()
    profile = ProfileFactory.build(id=identity.id, email=identity.email)
    invitation = InvitationFactory.build(
        tenant_id=uuid4(), email=identity.email, expires_at=utc_now() + timedelta(hours=1)
    )

    later = utc_now() + timedelta(hours=2)
    assert resolve_stage(identity, profile, invitation=invitation, now=later).code == (
        StageCode.NO_PROFILE
    )


def test_invitation_ignored_once_profile_has_tenant():
    identity = make_identity()
    tenant = TenantFactory.build()
    profile = ProfileFactory.staff(tenant_id=tenant.id, id=identity.id, email=identity.email)
    invitation = InvitationFactory.build(tenant_id=uuid4(), email=identity.email)

    assert resolve_stage(identity, profile, tenant, invitation).code == StageCode.READY


def test_pending_owner_waits_for_approval():
    identity = make_identity()
    tenant = TenantFactory.build(owner_id=identity.id)
    profile = ProfileFactory.pending_owner(tenant_id=tenant.id, id=identity.id)

    stage = resolve_stage(identity, profile, tenant)

    assert stage.code == StageCode.OWNER_PENDING_APPROVAL
    assert stage.next_action == NextAction.WAIT_FOR_APPROVAL


def test_pending_owner_ignores_setup_state():
    """Approval is checked before setup completeness."""
    identity = make_identity()
    tenant = TenantFactory.incomplete(owner_id=identity.id)
    profile = ProfileFactory.pending_owner(tenant_id=tenant.id, id=identity.id)

    assert resolve_stage(identity, profile, tenant).code == StageCode.OWNER_PENDING_APPROVAL


def test_rejected_owner_carries_reason_and_no_action():
    identity = make_identity()
    tenant = TenantFactory.build(owner_id=identity.id)
    profile = ProfileFactory.rejected_owner(
        tenant_id=tenant.id, id=identity.id, reason="Business license missing"
    )

    stage = resolve_stage(identity, profile, tenant)

    assert stage.code == StageCode.OWNER_REJECTED
    assert stage.next_action is None
    assert stage.reason == "Business license missing"


def test_approved_owner_with_incomplete_setup():
    identity = make_identity()
    tenant = TenantFactory.incomplete(owner_id=identity.id)
    profile = ProfileFactory.approved_owner(tenant_id=tenant.id, id=identity.id)

    stage = resolve_stage(identity, profile, tenant)

    assert stage.code == StageCode.OWNER_SETUP_INCOMPLETE
    assert stage.next_action == NextAction.COMPLETE_ACADEMY_SETUP


def test_staff_of_incomplete_academy_waits_for_owner():
    identity = make_identity()
    tenant = TenantFactory.incomplete()
    profile = ProfileFactory.staff(tenant_id=tenant.id, role=RoleCode.ASSISTANT, id=identity.id)

    stage = resolve_stage(identity, profile, tenant)

    assert stage.code == StageCode.OWNER_SETUP_INCOMPLETE
    assert stage.next_action == NextAction.WAIT_FOR_ACADEMY_SETUP


def test_missing_tenant_is_treated_as_incomplete():
    identity = make_identity()
    profile = ProfileFactory.approved_owner(tenant_id=uuid4(), id=identity.id)

    assert resolve_stage(identity, profile, None).code == StageCode.OWNER_SETUP_INCOMPLETE


def test_mismatched_tenant_is_treated_as_incomplete():
    identity = make_identity()
    profile = ProfileFactory.approved_owner(tenant_id=uuid4(), id=identity.id)
    other_tenant = TenantFactory.build()

    assert resolve_stage(identity, profile, other_tenant).code == StageCode.OWNER_SETUP_INCOMPLETE


@pytest.mark.parametrize("role", [RoleCode.OWNER, RoleCode.INSTRUCTOR, RoleCode.ASSISTANT])
def test_ready(role):
    identity = make_identity()
    tenant = TenantFactory.build()
    if role == RoleCode.OWNER:
        profile = ProfileFactory.approved_owner(tenant_id=tenant.id, id=identity.id)
    else:
        profile = ProfileFactory.staff(tenant_id=tenant.id, role=role, id=identity.id)

    stage = resolve_stage(identity, profile, tenant)

    assert stage.code == StageCode.READY
    assert stage.next_action is None


def test_staff_approval_status_is_not_gated():
    """Only owners wait on approval."""
    identity = make_identity()
    tenant = TenantFactory.build()
    profile = ProfileFactory.build(
        id=identity.id,
        tenant_id=tenant.id,
        role_code=RoleCode.INSTRUCTOR.value,
        approval_status=ApprovalStatus.PENDING.value,
    )

    assert resolve_stage(identity, profile, tenant).code == StageCode.READY


# --- Properties ---


@st.composite
def onboarding_inputs(draw):
    """Arbitrary combinations of identity, profile, tenant and invitation."""
    confirmed = draw(st.booleans())
    identity = make_identity(email_confirmed=confirmed)
    if draw(st.booleans()):
        return identity, None, None, None

    role = draw(st.sampled_from([None, *RoleCode]))
    approval = draw(st.sampled_from(list(ApprovalStatus)))
    tenant = None
    tenant_id = None
    if role is not None:
        tenant = draw(
            st.sampled_from(
                [
                    None,
                    TenantFactory.build(owner_id=identity.id),
                    TenantFactory.incomplete(owner_id=identity.id),
                ]
            )
        )
        tenant_id = tenant.id if tenant is not None else uuid4()

    profile = ProfileFactory.build(
        id=identity.id,
        email=identity.email,
        tenant_id=tenant_id,
        role_code=role.value if role else None,
        approval_status=approval.value,
        rejection_reason="Rejected" if approval == ApprovalStatus.REJECTED else None,
    )
    invitation = draw(
        st.sampled_from(
            [
                None,
                InvitationFactory.build(tenant_id=uuid4(), email=identity.email),
                InvitationFactory.expired(tenant_id=uuid4(), email=identity.email),
            ]
        )
    )
    return identity, profile, tenant, invitation


@given(onboarding_inputs())
def test_unconfirmed_email_always_resolves_to_email_unverified(inputs):
    identity, profile, tenant, invitation = inputs
    stage = resolve_stage(identity, profile, tenant, invitation)
    if not identity.email_confirmed:
        assert stage.code == StageCode.EMAIL_UNVERIFIED


@given(onboarding_inputs())
def test_rejected_owner_is_never_ready(inputs):
    identity, profile, tenant, invitation = inputs
    stage = resolve_stage(identity, profile, tenant, invitation)
    if profile is not None and profile.is_owner and profile.approval_status == "rejected":
        assert stage.code != StageCode.READY


@given(onboarding_inputs())
def test_ready_requires_tenant_with_complete_setup(inputs):
    identity, profile, tenant, invitation = inputs
    stage = resolve_stage(identity, profile, tenant, invitation)
    if stage.code == StageCode.READY:
        assert profile is not None
        assert tenant is not None
        assert tenant.id == profile.tenant_id
        assert tenant.is_setup_complete


@given(onboarding_inputs())
def test_only_terminal_stages_lack_a_next_action(inputs):
    stage = resolve_stage(*inputs)
    assert (stage.next_action is None) == stage.code.is_terminal
