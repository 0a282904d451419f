"""
Team Invites API.
Create, list, resolve and revoke invites for the calling user.
"""
from typing import List, Union

from fastapi import APIRouter, Depends, Request

from whitespace_crm.api.deps import get_invite_service, get_reconciler
from whitespace_crm.core.rate_limit import limiter
from whitespace_crm.core.security import Caller, get_current_caller
from whitespace_crm.schemas.invite import (
    InviteCreate,
    InviteCreateResponse,
    InviteOut,
    InviteResolve,
    InviteResolveResponse,
    MessageResponse,
    UserInviteOut,
)
from whitespace_crm.schemas.team import TeamOut
from whitespace_crm.services.invite_service import InviteService
from whitespace_crm.services.membership_reconciler import MembershipReconciler, ResolveAction

router = APIRouter()


@router.get("", response_model=List[UserInviteOut])
def list_my_invites(
    caller: Caller = Depends(get_current_caller),
    service: InviteService = Depends(get_invite_service),
):
    """Pending, unexpired invites addressed to the caller."""
    return service.list_user_invites(caller)


@router.get("/team/{team_id}", response_model=List[InviteOut])
def list_team_invites(
    team_id: int,
    caller: Caller = Depends(get_current_caller),
    service: InviteService = Depends(get_invite_service),
):
    """Pending invites for a team. Owners and admins only."""
    return service.list_team_invites(caller, team_id)


@router.post("", response_model=InviteCreateResponse)
@limiter.limit("20/minute")
def create_invite(
    request: Request,
    payload: InviteCreate,
    caller: Caller = Depends(get_current_caller),
    service: InviteService = Depends(get_invite_service),
):
    """Invite an email address to a team."""
    invite = service.create_invite(caller, payload.team_id, payload.email, payload.role)
    return InviteCreateResponse(
        invite=InviteOut.model_validate(invite),
        message=f"Invite sent to {invite.email}",
    )


@router.put("", response_model=Union[InviteResolveResponse, MessageResponse])
@limiter.limit("10/minute")
def resolve_invite(
    request: Request,
    payload: InviteResolve,
    caller: Caller = Depends(get_current_caller),
    reconciler: MembershipReconciler = Depends(get_reconciler),
):
    """Accept or decline an invite."""
    team = reconciler.resolve(caller, payload.invite_id, payload.action)
    if ResolveAction(payload.action) is ResolveAction.decline:
        return MessageResponse(message="Invite declined")
    return InviteResolveResponse(
        message="Successfully joined the team",
        team=TeamOut.model_validate(team),
    )


@router.delete("/{invite_id}", response_model=MessageResponse)
def revoke_invite(
    invite_id: int,
    caller: Caller = Depends(get_current_caller),
    service: InviteService = Depends(get_invite_service),
):
    """Cancel a pending invite."""
    service.revoke_invite(caller, invite_id)
    return MessageResponse(message="Invite revoked")
