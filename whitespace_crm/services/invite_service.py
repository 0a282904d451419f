"""
Invite Service Module.
Creates, lists and revokes team invites. Holds no state of its own: every
call works through the repositories bound to the session it was built with.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from whitespace_crm.core.exceptions import ConflictError, NotFoundError, ValidationError
from whitespace_crm.core.security import Caller
from whitespace_crm.models.invite import TeamInvite, InviteStatus
from whitespace_crm.models.team import TeamRole
from whitespace_crm.repositories import (
    InviteRepository,
    MembershipRepository,
    TeamRepository,
    UserRepository,
)
from whitespace_crm.schemas.invite import InviteTeamOut, InviterOut, UserInviteOut
from whitespace_crm.services.notification_service import DeliveryResult, InviteMailer
from whitespace_crm.services.permission_service import PermissionService
from whitespace_crm.utils.invitation import build_invite_link, compute_expiry, generate_invite_token
from whitespace_crm.utils.validation import normalize_email, validate_email_format

logger = logging.getLogger(__name__)

INVITABLE_ROLES = {role.value for role in TeamRole}


class InviteService:
    """Service for invite-related operations."""

    def __init__(self, db: Session, mailer: Optional[InviteMailer] = None):
        self.db = db
        self.invites = InviteRepository(db)
        self.memberships = MembershipRepository(db)
        self.teams = TeamRepository(db)
        self.users = UserRepository(db)
        self.permissions = PermissionService(db)
        self.mailer = mailer or InviteMailer()

    def create_invite(
        self, caller: Caller, team_id: Optional[int], email: Optional[str], role: str = "member"
    ) -> TeamInvite:
        """
        Invite an email address to a team.

        Args:
            caller: Authenticated requester
            team_id: Team to invite into
            email: Invitee email
            role: Role granted on acceptance

        Returns:
            The created pending invite

        Raises:
            ValidationError: Missing team/email, malformed email or unknown role
            ForbiddenError: Caller is not an owner or admin of the team
            ConflictError: Invitee is already a member or already invited
        """
        if not team_id or not email:
            raise ValidationError(
                "team_id and email are required", field="team_id" if not team_id else "email"
            )
        if not validate_email_format(email):
            raise ValidationError("Invalid email format", field="email")
        if role not in INVITABLE_ROLES:
            raise ValidationError(f"Invalid role: {role}", field="role")

        self.permissions.verify_team_admin(
            team_id, caller.user_id, "You do not have permission to invite members to this team"
        )

        email = normalize_email(email)

        existing_user = self.users.get_by_email(email)
        if existing_user and self.memberships.get_by_team_and_user(team_id, existing_user.id):
            raise ConflictError("This user is already a member of the team")

        if self.invites.get_pending_by_team_and_email(team_id, email):
            raise ConflictError("An invite has already been sent to this email")

        invite = TeamInvite(
            team_id=team_id,
            email=email,
            role=role,
            status=InviteStatus.pending,
            token=generate_invite_token(),
            invited_by=caller.user_id,
            expires_at=compute_expiry(),
        )
        try:
            with self.db.begin_nested():
                self.db.add(invite)
        except IntegrityError:
            # Lost the race against a concurrent invite for the same recipient
            raise ConflictError("An invite has already been sent to this email")
        self.db.commit()
        self.db.refresh(invite)
        logger.info("Invite %s created for %s on team %s by user %s", invite.id, email, team_id, caller.user_id)

        self._notify_invitee(caller, invite)
        return invite

    def _notify_invitee(self, caller: Caller, invite: TeamInvite) -> DeliveryResult:
        team = self.teams.get_by_id(invite.team_id)
        team_name = team.name if team else "the team"

        inviter = self.users.get_by_id(caller.user_id)
        inviter_name = inviter.display_name if inviter else (caller.email or "A team member")

        result = self.mailer.send_team_invite(
            to_email=invite.email,
            team_name=team_name,
            inviter_name=inviter_name,
            invite_link=build_invite_link(),
            role=invite.role,
        )
        if not result.delivered:
            logger.warning("Invite %s email not delivered: %s", invite.id, result.error)
        return result

    def list_team_invites(self, caller: Caller, team_id: int) -> List[TeamInvite]:
        """Pending invites of a team, newest first. Owners and admins only."""
        self.permissions.verify_team_admin(
            team_id, caller.user_id, "You do not have permission to view invites for this team"
        )
        return self.invites.get_team_invites(team_id, InviteStatus.pending)

    def list_user_invites(self, caller: Caller) -> List[UserInviteOut]:
        """
        Live invites addressed to the caller's email.

        Invites past their expiry are left out even while their stored
        status still reads pending.
        """
        result = []
        for invite in self.invites.get_user_invites(normalize_email(caller.email)):
            if invite.is_expired():
                continue
            result.append(
                UserInviteOut(
                    id=invite.id,
                    role=invite.role,
                    status=invite.status,
                    created_at=invite.created_at,
                    expires_at=invite.expires_at,
                    invited_by_user=InviterOut(email=invite.inviter.email) if invite.inviter else None,
                    team=InviteTeamOut(
                        id=invite.team.id, name=invite.team.name, logo=invite.team.logo_url
                    ) if invite.team else None,
                )
            )
        return result

    def revoke_invite(self, caller: Caller, invite_id: int) -> None:
        """
        Delete a pending invite.

        Raises:
            NotFoundError: Unknown or already processed invite
            ForbiddenError: Caller is not an owner or admin of the invite's team
        """
        invite = self.invites.get_by_id(invite_id)
        if invite is None or invite.status.is_terminal:
            raise NotFoundError("Invite not found or already processed")

        self.permissions.verify_team_admin(
            invite.team_id, caller.user_id, "You do not have permission to revoke invites for this team"
        )

        self.invites.delete(invite)
        self.db.commit()
        logger.info("Invite %s revoked by user %s", invite_id, caller.user_id)
