from whitespace_crm.models.user import User
from whitespace_crm.models.team import (
    Team,
    TeamRole,
    TeamMembership,
    LegacyTeamMember,
    UserTeamPreference,
)
from whitespace_crm.models.invite import TeamInvite, InviteStatus

__all__ = [
    "User",
    "Team",
    "TeamRole",
    "TeamMembership",
    "LegacyTeamMember",
    "UserTeamPreference",
    "TeamInvite",
    "InviteStatus",
]
