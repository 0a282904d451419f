"""
Teams API.
List the caller's teams, and read or switch the one they are working inside.
"""
from fastapi import APIRouter, Depends

from whitespace_crm.api.deps import get_team_service
from whitespace_crm.core.security import Caller, get_current_caller
from whitespace_crm.schemas.team import (
    CurrentTeamResponse,
    CurrentTeamUpdate,
    CurrentTeamUpdateResponse,
    TeamListResponse,
    TeamOut,
)
from whitespace_crm.services.team_service import TeamService

router = APIRouter()


@router.get("", response_model=TeamListResponse)
def list_teams(
    caller: Caller = Depends(get_current_caller),
    service: TeamService = Depends(get_team_service),
):
    return service.list_teams(caller)


@router.get("/current", response_model=CurrentTeamResponse)
def get_current_team(
    caller: Caller = Depends(get_current_caller),
    service: TeamService = Depends(get_team_service),
):
    team = service.get_current_team(caller)
    return CurrentTeamResponse(team=TeamOut.model_validate(team) if team else None)


@router.put("/current", response_model=CurrentTeamUpdateResponse)
def switch_current_team(
    payload: CurrentTeamUpdate,
    caller: Caller = Depends(get_current_caller),
    service: TeamService = Depends(get_team_service),
):
    team = service.switch_current_team(caller, payload.team_id)
    return CurrentTeamUpdateResponse(
        message=f"Switched to {team.name}",
        team=TeamOut.model_validate(team),
    )
