"""Repository for the legacy team roster table."""

from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from whitespace_crm.models.team import LegacyTeamMember
from whitespace_crm.repositories.base_repository import BaseRepository


class LegacyMemberRepository(BaseRepository[LegacyTeamMember]):
    """
    Repository for LegacyTeamMember rows.

    The table is unique by user_id and by email, so lookups here are
    global rather than scoped to a team.
    """

    def __init__(self, db: Session):
        super().__init__(LegacyTeamMember, db)

    def get_by_team_and_user(self, team_id: int, user_id: int) -> Optional[LegacyTeamMember]:
        return (
            self.db.query(LegacyTeamMember)
            .filter(LegacyTeamMember.team_id == team_id, LegacyTeamMember.user_id == user_id)
            .first()
        )

    def get_by_user(self, user_id: int) -> Optional[LegacyTeamMember]:
        return (
            self.db.query(LegacyTeamMember)
            .filter(LegacyTeamMember.user_id == user_id)
            .first()
        )

    def get_by_email(self, email: str) -> Optional[LegacyTeamMember]:
        return (
            self.db.query(LegacyTeamMember)
            .filter(func.lower(LegacyTeamMember.email) == email.lower())
            .first()
        )

    def list_for_team(self, team_id: int):
        """Roster rows currently pointing at a team."""
        return (
            self.db.query(LegacyTeamMember)
            .filter(LegacyTeamMember.team_id == team_id)
            .order_by(LegacyTeamMember.id)
            .all()
        )
