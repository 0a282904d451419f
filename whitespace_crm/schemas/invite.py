from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Literal, Optional

from whitespace_crm.models.invite import InviteStatus
from whitespace_crm.schemas.team import TeamOut


class InviteCreate(BaseModel):
    """Schema for inviting someone to a team."""
    team_id: int
    email: str = Field(..., min_length=1)
    role: Literal["owner", "admin", "member"] = "member"


class InviteResolve(BaseModel):
    """Schema for accepting or declining an invite."""
    invite_id: int
    action: Literal["accept", "decline"]


class InviteOut(BaseModel):
    """Invite as seen by team admins. The token is never exposed."""
    id: int
    email: str
    role: str
    status: InviteStatus
    created_at: Optional[datetime] = None
    expires_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InviterOut(BaseModel):
    email: str


class InviteTeamOut(BaseModel):
    id: int
    name: str
    logo: Optional[str] = None


class UserInviteOut(BaseModel):
    """Invite as seen by its recipient."""
    id: int
    role: str
    status: InviteStatus
    created_at: Optional[datetime] = None
    expires_at: datetime
    invited_by_user: Optional[InviterOut] = None
    team: Optional[InviteTeamOut] = None


class InviteCreateResponse(BaseModel):
    invite: InviteOut
    message: str


class InviteResolveResponse(BaseModel):
    """Returned when an invite is accepted; declines answer with a MessageResponse."""
    message: str
    team: TeamOut


class MessageResponse(BaseModel):
    message: str
