"""Team repository for database operations."""

from sqlalchemy.orm import Session

from whitespace_crm.repositories.base_repository import BaseRepository
from whitespace_crm.models.team import Team


class TeamRepository(BaseRepository[Team]):
    """Read access to teams; teams are created outside this service."""

    def __init__(self, db: Session):
        super().__init__(Team, db)
