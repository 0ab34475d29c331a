"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProfileFactory, TenantFactory, ...
"""

from tests.factories.invitation import InvitationFactory, generate_token_hash
from tests.factories.profile import ProfileFactory
from tests.factories.tenant import TenantFactory

__all__ = [
    "InvitationFactory",
    "ProfileFactory",
    "TenantFactory",
    "generate_token_hash",
]
