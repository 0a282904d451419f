from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional

from whitespace_crm.models.team import TeamRole


class TeamOut(BaseModel):
    """Team fields returned alongside invites and membership changes."""
    id: int
    name: str
    logo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CurrentTeamResponse(BaseModel):
    team: Optional[TeamOut] = None


class CurrentTeamUpdate(BaseModel):
    team_id: int


class CurrentTeamUpdateResponse(BaseModel):
    message: str
    team: TeamOut


class TeamListItem(TeamOut):
    """A team the caller belongs to, with the caller's role in it."""
    role: TeamRole
    is_current: bool = False


class TeamListResponse(BaseModel):
    teams: List[TeamListItem]
    current_team_id: Optional[int] = None
