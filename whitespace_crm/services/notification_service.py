"""
Invite email delivery.

Sending is a best-effort side effect: callers get a DeliveryResult back and
the invite operation succeeds whether or not the email went out.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from whitespace_crm.core.config import settings
from whitespace_crm.utils.email import send_team_invite_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryResult:
    delivered: bool
    error: Optional[str] = None


class InviteMailer:
    """Sends team invite emails over SMTP."""

    def send_team_invite(
        self,
        to_email: str,
        team_name: str,
        inviter_name: str,
        invite_link: str,
        role: str,
    ) -> DeliveryResult:
        if not settings.SMTP_HOST:
            logger.info("SMTP not configured; skipping invite email to %s", to_email)
            return DeliveryResult(delivered=False, error="email delivery disabled")

        try:
            send_team_invite_email(
                to_email=to_email,
                team_name=team_name,
                inviter_name=inviter_name,
                invite_link=invite_link,
                role=role,
                expires_in_days=settings.INVITE_EXPIRE_DAYS,
            )
        except Exception as exc:
            return DeliveryResult(delivered=False, error=str(exc))
        return DeliveryResult(delivered=True)
