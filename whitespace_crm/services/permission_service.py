"""
Permission Service - team role checks guarding privileged invite operations.
"""

from sqlalchemy.orm import Session

from whitespace_crm.core.exceptions import ForbiddenError
from whitespace_crm.models.team import ADMIN_ROLES, TeamMembership
from whitespace_crm.repositories.membership_repository import MembershipRepository


class PermissionService:
    """Answers whether a user may administer a team's invites."""

    def __init__(self, db: Session):
        self.memberships = MembershipRepository(db)

    def is_team_admin(self, team_id: int, user_id: int) -> bool:
        """
        True iff the user holds owner or admin on the team.

        A missing membership row is a plain False.
        """
        membership = self.memberships.get_by_team_and_user(team_id, user_id)
        return membership is not None and membership.role in ADMIN_ROLES

    def verify_team_admin(self, team_id: int, user_id: int, message: str) -> None:
        """
        Raise ForbiddenError unless the user is an owner or admin of the team.

        Args:
            team_id: Team ID
            user_id: User ID
            message: Error detail surfaced to the caller
        """
        if not self.is_team_admin(team_id, user_id):
            raise ForbiddenError(message)

    def get_membership(self, team_id: int, user_id: int) -> TeamMembership | None:
        return self.memberships.get_by_team_and_user(team_id, user_id)
