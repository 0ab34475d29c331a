"""Shared enums for models and stage resolution."""

from enum import Enum


class RoleCode(str, Enum):
    """Role of a profile within its tenant."""

    OWNER = "owner"
    INSTRUCTOR = "instructor"
    ASSISTANT = "assistant"

    @property
    def is_staff(self) -> bool:
        return self is not RoleCode.OWNER


STAFF_ROLES: tuple[RoleCode, ...] = tuple(role for role in RoleCode if role.is_staff)


class ApprovalStatus(str, Enum):
    """Approval state of a profile. Only owners wait on it."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class InvitationStatus(str, Enum):
    """Invitation lifecycle status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class StageCode(str, Enum):
    """Where an identity sits in the onboarding pipeline."""

    NO_IDENTITY = "NO_IDENTITY"
    EMAIL_UNVERIFIED = "EMAIL_UNVERIFIED"
    NO_PROFILE = "NO_PROFILE"
    MEMBER_INVITED = "MEMBER_INVITED"
    OWNER_PENDING_APPROVAL = "OWNER_PENDING_APPROVAL"
    OWNER_REJECTED = "OWNER_REJECTED"
    OWNER_SETUP_INCOMPLETE = "OWNER_SETUP_INCOMPLETE"
    READY = "READY"

    @property
    def rank(self) -> int:
        """Position in the pipeline; later stages rank higher."""
        return _STAGE_RANKS[self]

    @property
    def is_terminal(self) -> bool:
        return self in (StageCode.READY, StageCode.OWNER_REJECTED)


_STAGE_RANKS = {
    StageCode.NO_IDENTITY: 0,
    StageCode.EMAIL_UNVERIFIED: 1,
    StageCode.NO_PROFILE: 2,
    StageCode.MEMBER_INVITED: 3,
    StageCode.OWNER_PENDING_APPROVAL: 4,
    StageCode.OWNER_REJECTED: 4,
    StageCode.OWNER_SETUP_INCOMPLETE: 5,
    StageCode.READY: 6,
}


class NextAction(str, Enum):
    """What the caller should invoke to advance the stage."""

    SIGN_IN = "sign_in"
    VERIFY_EMAIL = "verify_email"
    CREATE_PROFILE = "create_profile"
    ACCEPT_INVITATION = "accept_invitation"
    COMPLETE_OWNER_ONBOARDING = "complete_owner_onboarding"
    WAIT_FOR_APPROVAL = "wait_for_approval"
    COMPLETE_ACADEMY_SETUP = "complete_academy_setup"
    WAIT_FOR_ACADEMY_SETUP = "wait_for_academy_setup"
