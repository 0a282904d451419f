"""
Team Service Module.
Lists the teams a user belongs to and reads or switches the one they are
currently working inside.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from whitespace_crm.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from whitespace_crm.core.security import Caller
from whitespace_crm.models.team import Team
from whitespace_crm.repositories import MembershipRepository, PreferenceRepository, TeamRepository
from whitespace_crm.schemas.team import TeamListItem, TeamListResponse
from whitespace_crm.services.permission_service import PermissionService

logger = logging.getLogger(__name__)


class TeamService:
    """Service for the caller's current team."""

    def __init__(self, db: Session):
        self.db = db
        self.teams = TeamRepository(db)
        self.memberships = MembershipRepository(db)
        self.preferences = PreferenceRepository(db)
        self.permissions = PermissionService(db)

    def list_teams(self, caller: Caller) -> TeamListResponse:
        """
        Every team the caller belongs to, oldest membership first.

        Each entry carries the caller's role and whether it is the team
        stored in the caller's preference.
        """
        preference = self.preferences.get_for_user(caller.user_id)
        current_team_id = preference.current_team_id if preference else None

        teams = []
        for membership in self.memberships.get_user_memberships(caller.user_id):
            team = membership.team
            if team is None:
                continue
            teams.append(
                TeamListItem(
                    id=team.id,
                    name=team.name,
                    logo_url=team.logo_url,
                    created_at=team.created_at,
                    role=membership.role,
                    is_current=team.id == current_team_id,
                )
            )
        return TeamListResponse(teams=teams, current_team_id=current_team_id)

    def get_current_team(self, caller: Caller) -> Optional[Team]:
        """
        The team stored in the caller's preference.

        Without a stored preference the caller's first membership becomes
        the current team and is saved as the preference.
        """
        preference = self.preferences.get_for_user(caller.user_id)
        if preference and preference.current_team_id:
            return self.teams.get_by_id(preference.current_team_id)

        memberships = self.memberships.get_user_memberships(caller.user_id)
        if not memberships:
            return None

        team_id = memberships[0].team_id
        self.preferences.set_current_team(caller.user_id, team_id)
        self.db.commit()
        return self.teams.get_by_id(team_id)

    def switch_current_team(self, caller: Caller, team_id: Optional[int]) -> Team:
        """
        Make team_id the caller's current team.

        Raises:
            ValidationError: team_id missing
            ForbiddenError: Caller is not a member of the team
            NotFoundError: Team does not exist
        """
        if not team_id:
            raise ValidationError("team_id is required", field="team_id")

        if self.permissions.get_membership(team_id, caller.user_id) is None:
            raise ForbiddenError("You are not a member of this team")

        team = self.teams.get_by_id(team_id)
        if team is None:
            raise NotFoundError("Team not found")

        self.preferences.set_current_team(caller.user_id, team_id)
        self.db.commit()
        logger.info("User %s switched to team %s", caller.user_id, team_id)
        return team
