"""Repository for the per-user current team preference."""

from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from whitespace_crm.repositories.base_repository import BaseRepository
from whitespace_crm.models.team import UserTeamPreference


class PreferenceRepository(BaseRepository[UserTeamPreference]):
    """Repository for UserTeamPreference database operations."""

    def __init__(self, db: Session):
        super().__init__(UserTeamPreference, db)

    def get_for_user(self, user_id: int) -> Optional[UserTeamPreference]:
        return self.db.get(UserTeamPreference, user_id)

    def set_current_team(self, user_id: int, team_id: int) -> UserTeamPreference:
        """
        Upsert the user's current team.

        Args:
            user_id: User ID
            team_id: Team to switch into

        Returns:
            The stored preference
        """
        preference = self.get_for_user(user_id)
        if preference is None:
            try:
                with self.db.begin_nested():
                    preference = UserTeamPreference(user_id=user_id, current_team_id=team_id)
                    self.db.add(preference)
                return preference
            except IntegrityError:
                preference = self.get_for_user(user_id)
                if preference is None:
                    raise

        preference.current_team_id = team_id
        self.db.flush()
        return preference
