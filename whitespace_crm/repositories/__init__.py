"""Repository layer for database access."""

from whitespace_crm.repositories.user_repository import UserRepository
from whitespace_crm.repositories.team_repository import TeamRepository
from whitespace_crm.repositories.invite_repository import InviteRepository
from whitespace_crm.repositories.membership_repository import MembershipRepository
from whitespace_crm.repositories.legacy_member_repository import LegacyMemberRepository
from whitespace_crm.repositories.preference_repository import PreferenceRepository

__all__ = [
    "UserRepository",
    "TeamRepository",
    "InviteRepository",
    "MembershipRepository",
    "LegacyMemberRepository",
    "PreferenceRepository",
]
