"""FastAPI dependencies that build request-scoped services."""
from fastapi import Depends
from sqlalchemy.orm import Session

from whitespace_crm.db.session import get_db
from whitespace_crm.services.invite_service import InviteService
from whitespace_crm.services.membership_reconciler import MembershipReconciler
from whitespace_crm.services.notification_service import InviteMailer
from whitespace_crm.services.team_service import TeamService


def get_mailer() -> InviteMailer:
    return InviteMailer()


def get_invite_service(
    db: Session = Depends(get_db), mailer: InviteMailer = Depends(get_mailer)
) -> InviteService:
    return InviteService(db, mailer=mailer)


def get_reconciler(db: Session = Depends(get_db)) -> MembershipReconciler:
    return MembershipReconciler(db)


def get_team_service(db: Session = Depends(get_db)) -> TeamService:
    return TeamService(db)
