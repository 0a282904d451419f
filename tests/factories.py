"""Builders shared by the test modules."""
from datetime import datetime, timedelta, timezone
from typing import Dict, List

from sqlalchemy.orm import Session

from whitespace_crm.core.security import Caller, create_access_token
from whitespace_crm.models.invite import TeamInvite
from whitespace_crm.models.team import Team
from whitespace_crm.models.user import User
from whitespace_crm.services.invite_service import InviteService
from whitespace_crm.services.notification_service import DeliveryResult


class RecordingMailer:
    """Stands in for InviteMailer and remembers what it was asked to send."""

    def __init__(self, delivered: bool = True):
        self.delivered = delivered
        self.sent: List[dict] = []

    def send_team_invite(self, **kwargs) -> DeliveryResult:
        self.sent.append(kwargs)
        if self.delivered:
            return DeliveryResult(delivered=True)
        return DeliveryResult(delivered=False, error="smtp down")


def make_user(db: Session, email: str, first_name: str = None, last_name: str = None) -> User:
    user = User(email=email, first_name=first_name, last_name=last_name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def caller_for(user: User) -> Caller:
    return Caller(user_id=user.id, email=user.email)


def auth_headers_for(user: User) -> Dict[str, str]:
    token = create_access_token({"sub": user.id})
    return {"Authorization": f"Bearer {token}"}


def make_invite(db: Session, inviter: User, team: Team, email: str, role: str = "member") -> TeamInvite:
    """Create a pending invite through the service."""
    return InviteService(db, mailer=RecordingMailer()).create_invite(
        caller_for(inviter), team.id, email, role
    )


def expire(db: Session, invite: TeamInvite) -> TeamInvite:
    """Push an invite's expiry into the past without touching its status."""
    invite.expires_at = datetime.now(timezone.utc) - timedelta(minutes=5)
    db.commit()
    db.refresh(invite)
    return invite
