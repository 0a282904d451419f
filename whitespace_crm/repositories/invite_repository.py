"""Repository for team invite operations."""

from typing import List, Optional
from sqlalchemy import and_, update
from sqlalchemy.orm import Session, joinedload

from whitespace_crm.models.invite import TeamInvite, InviteStatus
from whitespace_crm.repositories.base_repository import BaseRepository


class InviteRepository(BaseRepository[TeamInvite]):
    """Repository for TeamInvite database operations."""

    def __init__(self, db: Session):
        """Initialize InviteRepository."""
        super().__init__(TeamInvite, db)

    def get_pending_by_team_and_email(self, team_id: int, email: str) -> Optional[TeamInvite]:
        """
        Get the pending invite for a recipient on a team.

        Args:
            team_id: Team ID
            email: Invitee email (lower-cased)

        Returns:
            TeamInvite or None
        """
        return (
            self.db.query(TeamInvite)
            .filter(
                and_(
                    TeamInvite.team_id == team_id,
                    TeamInvite.email == email,
                    TeamInvite.status == InviteStatus.pending,
                )
            )
            .first()
        )

    def get_team_invites(
        self, team_id: int, status: Optional[InviteStatus] = InviteStatus.pending
    ) -> List[TeamInvite]:
        """
        Get invites for a team, newest first.

        Args:
            team_id: Team ID
            status: Optional status filter (pending by default)

        Returns:
            List of invites
        """
        query = self.db.query(TeamInvite).filter(TeamInvite.team_id == team_id)
        if status is not None:
            query = query.filter(TeamInvite.status == status)
        return query.order_by(TeamInvite.created_at.desc(), TeamInvite.id.desc()).all()

    def get_user_invites(
        self, email: str, status: Optional[InviteStatus] = InviteStatus.pending
    ) -> List[TeamInvite]:
        """
        Get invites addressed to an email, with team and inviter loaded.

        Args:
            email: Recipient email (lower-cased)
            status: Optional status filter (pending by default)

        Returns:
            List of invites
        """
        query = (
            self.db.query(TeamInvite)
            .options(joinedload(TeamInvite.team), joinedload(TeamInvite.inviter))
            .filter(TeamInvite.email == email)
        )
        if status is not None:
            query = query.filter(TeamInvite.status == status)
        return query.order_by(TeamInvite.created_at.desc(), TeamInvite.id.desc()).all()

    def transition_status(
        self,
        invite_id: int,
        status: InviteStatus,
        expected: InviteStatus = InviteStatus.pending,
    ) -> bool:
        """
        Move an invite to a new status only if it still reads `expected`.

        Args:
            invite_id: Invite ID
            status: New status
            expected: Status the row must currently hold

        Returns:
            True if the row was updated, False if it had already moved on
        """
        result = self.db.execute(
            update(TeamInvite)
            .where(TeamInvite.id == invite_id, TeamInvite.status == expected)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        self.db.flush()
        return result.rowcount == 1
