"""Repository for canonical team memberships."""

from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from whitespace_crm.repositories.base_repository import BaseRepository
from whitespace_crm.models.team import TeamMembership, TeamRole


class MembershipRepository(BaseRepository[TeamMembership]):
    """Repository for TeamMembership database operations."""

    def __init__(self, db: Session):
        super().__init__(TeamMembership, db)

    def get_by_team_and_user(self, team_id: int, user_id: int) -> Optional[TeamMembership]:
        """
        Get membership by team and user.

        Args:
            team_id: Team ID
            user_id: User ID

        Returns:
            TeamMembership or None
        """
        return (
            self.db.query(TeamMembership)
            .filter(TeamMembership.team_id == team_id, TeamMembership.user_id == user_id)
            .first()
        )

    def get_user_memberships(self, user_id: int) -> List[TeamMembership]:
        """Get all memberships of a user, oldest first."""
        return (
            self.db.query(TeamMembership)
            .filter(TeamMembership.user_id == user_id)
            .order_by(TeamMembership.id)
            .all()
        )

    def upsert(self, team_id: int, user_id: int, role: TeamRole) -> TeamMembership:
        """
        Insert or update the membership keyed by (team_id, user_id).

        A concurrent insert of the same pair loses on the unique constraint
        and falls back to updating the winner's row.

        Args:
            team_id: Team ID
            user_id: User ID
            role: Role to store

        Returns:
            The stored TeamMembership
        """
        membership = self.get_by_team_and_user(team_id, user_id)
        if membership is None:
            try:
                with self.db.begin_nested():
                    membership = TeamMembership(team_id=team_id, user_id=user_id, role=role)
                    self.db.add(membership)
                return membership
            except IntegrityError:
                membership = self.get_by_team_and_user(team_id, user_id)
                if membership is None:
                    raise

        if membership.role != role:
            membership.role = role
            self.db.flush()
        return membership
