"""
Membership reconciliation for accepted and declined invites.

Accepting an invite writes the canonical TeamMembership row and then brings
the legacy roster table into line with it. The roster table is unique by
user_id and by email, not by (team_id, user_id), so a user joining a second
team gets their single roster row moved rather than a new row added. The
roster strategies below run in order and the first one to resolve wins.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from whitespace_crm.core.exceptions import ExpiredError, NotFoundError, ValidationError
from whitespace_crm.core.security import Caller
from whitespace_crm.models.invite import InviteStatus, TeamInvite
from whitespace_crm.models.team import LegacyTeamMember, Team, TeamRole
from whitespace_crm.repositories import (
    InviteRepository,
    LegacyMemberRepository,
    MembershipRepository,
    PreferenceRepository,
    TeamRepository,
    UserRepository,
)
from whitespace_crm.utils.validation import normalize_email

logger = logging.getLogger(__name__)


class ResolveAction(enum.Enum):
    accept = "accept"
    decline = "decline"


class LegacyResolution(enum.Enum):
    UPDATED = "updated"
    INSERTED = "inserted"
    NOT_RESOLVED = "not_resolved"


@dataclass(frozen=True)
class RosterProfile:
    """Fields written to the caller's legacy roster row."""
    team_id: int
    user_id: int
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    role: str


def legacy_role(invite_role: str) -> str:
    """The roster table has no owner role; owners are listed as admins."""
    return TeamRole.admin.value if invite_role == TeamRole.owner.value else invite_role


def _apply_profile(row: LegacyTeamMember, profile: RosterProfile) -> None:
    row.first_name = profile.first_name
    row.last_name = profile.last_name
    row.email = profile.email
    row.role = profile.role
    row.active = True


def update_row_on_team(repo: LegacyMemberRepository, profile: RosterProfile) -> LegacyResolution:
    row = repo.get_by_team_and_user(profile.team_id, profile.user_id)
    if row is None:
        return LegacyResolution.NOT_RESOLVED
    try:
        with repo.db.begin_nested():
            _apply_profile(row, profile)
    except IntegrityError:
        return LegacyResolution.NOT_RESOLVED
    return LegacyResolution.UPDATED


def insert_row(repo: LegacyMemberRepository, profile: RosterProfile) -> LegacyResolution:
    try:
        with repo.db.begin_nested():
            row = LegacyTeamMember(team_id=profile.team_id, user_id=profile.user_id)
            _apply_profile(row, profile)
            repo.db.add(row)
    except IntegrityError:
        return LegacyResolution.NOT_RESOLVED
    return LegacyResolution.INSERTED


def move_row_by_user(repo: LegacyMemberRepository, profile: RosterProfile) -> LegacyResolution:
    row = repo.get_by_user(profile.user_id)
    if row is None:
        return LegacyResolution.NOT_RESOLVED
    try:
        with repo.db.begin_nested():
            row.team_id = profile.team_id
            _apply_profile(row, profile)
    except IntegrityError:
        return LegacyResolution.NOT_RESOLVED
    return LegacyResolution.UPDATED


def claim_row_by_email(repo: LegacyMemberRepository, profile: RosterProfile) -> LegacyResolution:
    # Last resort: the roster row was created before the user id was known.
    # The canonical membership is already stored, so a failure here only
    # costs the roster display and is logged instead of raised.
    try:
        row = repo.get_by_email(profile.email)
        if row is None:
            return LegacyResolution.NOT_RESOLVED
        with repo.db.begin_nested():
            row.team_id = profile.team_id
            row.user_id = profile.user_id
            _apply_profile(row, profile)
    except SQLAlchemyError:
        logger.exception(
            "Could not reconcile roster row for user %s (%s) on team %s",
            profile.user_id, profile.email, profile.team_id,
        )
        return LegacyResolution.NOT_RESOLVED
    return LegacyResolution.UPDATED


RosterStrategy = Callable[[LegacyMemberRepository, RosterProfile], LegacyResolution]

ROSTER_STRATEGIES: List[Tuple[str, RosterStrategy]] = [
    ("update_row_on_team", update_row_on_team),
    ("insert_row", insert_row),
    ("move_row_by_user", move_row_by_user),
    ("claim_row_by_email", claim_row_by_email),
]


class MembershipReconciler:
    """Drives an invite from pending to accepted or declined."""

    def __init__(self, db: Session, strategies: Optional[List[Tuple[str, RosterStrategy]]] = None):
        self.db = db
        self.invites = InviteRepository(db)
        self.memberships = MembershipRepository(db)
        self.roster = LegacyMemberRepository(db)
        self.preferences = PreferenceRepository(db)
        self.teams = TeamRepository(db)
        self.users = UserRepository(db)
        self.strategies = strategies if strategies is not None else ROSTER_STRATEGIES

    def resolve(self, caller: Caller, invite_id: int, action) -> Optional[Team]:
        """
        Accept or decline an invite addressed to the caller.

        Args:
            caller: Authenticated invitee
            invite_id: Invite ID
            action: ResolveAction or its string value

        Returns:
            The joined team on accept, None on decline

        Raises:
            ValidationError: Unknown action
            NotFoundError: Missing, someone else's, or already processed invite
            ExpiredError: The invite is past expiry; it is marked expired
        """
        try:
            action = ResolveAction(action)
        except ValueError:
            raise ValidationError("action must be accept or decline", field="action")

        invite = self._load_pending_invite(caller, invite_id)

        if invite.is_expired():
            self.invites.transition_status(invite.id, InviteStatus.expired)
            self.db.commit()
            logger.info("Invite %s expired on resolve attempt by user %s", invite.id, caller.user_id)
            raise ExpiredError()

        if action is ResolveAction.decline:
            return self._decline(caller, invite)
        if action is ResolveAction.accept:
            return self._accept(caller, invite)
        raise ValidationError(f"Unhandled action: {action.value}", field="action")

    def _load_pending_invite(self, caller: Caller, invite_id: int) -> TeamInvite:
        invite = self.invites.get_by_id(invite_id)
        # One answer for every miss so invite ids don't leak
        if (
            invite is None
            or invite.email != normalize_email(caller.email)
            or invite.status.is_terminal
        ):
            raise NotFoundError("Invite not found or already processed")
        return invite

    def _decline(self, caller: Caller, invite: TeamInvite) -> None:
        if not self.invites.transition_status(invite.id, InviteStatus.declined):
            raise NotFoundError("Invite not found or already processed")
        self.db.commit()
        logger.info("Invite %s declined by user %s", invite.id, caller.user_id)
        return None

    def _accept(self, caller: Caller, invite: TeamInvite) -> Optional[Team]:
        team_id = invite.team_id

        # 1. canonical membership
        self.memberships.upsert(team_id, caller.user_id, TeamRole(invite.role))
        self.db.commit()

        # 2. legacy roster row
        user = self.users.get_by_id(caller.user_id)
        profile = RosterProfile(
            team_id=team_id,
            user_id=caller.user_id,
            email=normalize_email(caller.email),
            first_name=user.first_name if user else None,
            last_name=user.last_name if user else None,
            role=legacy_role(invite.role),
        )
        self.reconcile_roster(profile)
        self.db.commit()

        # 3. invite status; the accept is committed from here on
        if not self.invites.transition_status(invite.id, InviteStatus.accepted):
            logger.warning("Invite %s was resolved concurrently; keeping membership", invite.id)
        self.db.commit()

        # 4. switch the caller into the team
        self.preferences.set_current_team(caller.user_id, team_id)
        self.db.commit()

        logger.info("Invite %s accepted by user %s, joined team %s", invite.id, caller.user_id, team_id)
        return self.teams.get_by_id(team_id)

    def reconcile_roster(self, profile: RosterProfile) -> LegacyResolution:
        """Run the roster strategies in order until one resolves."""
        for name, strategy in self.strategies:
            resolution = strategy(self.roster, profile)
            if resolution is not LegacyResolution.NOT_RESOLVED:
                logger.info(
                    "Roster row for user %s on team %s %s via %s",
                    profile.user_id, profile.team_id, resolution.value, name,
                )
                return resolution

        logger.error(
            "No roster row reconciled for user %s (%s) on team %s",
            profile.user_id, profile.email, profile.team_id,
        )
        return LegacyResolution.NOT_RESOLVED
