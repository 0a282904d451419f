import uuid
from datetime import datetime, timedelta, timezone

from whitespace_crm.core.config import settings


def generate_invite_token() -> str:
    """Generate a unique invite token using UUID4."""
    return uuid.uuid4().hex


def compute_expiry(expires_in_days: int | None = None) -> datetime:
    """Expiry timestamp for an invite created now."""
    days = settings.INVITE_EXPIRE_DAYS if expires_in_days is None else expires_in_days
    return datetime.now(timezone.utc) + timedelta(days=days)


def build_invite_link() -> str:
    """
    Build the link invitees follow to review their pending invites.

    Returns:
        Full URL of the invites page
    """
    frontend_url = getattr(settings, "FRONTEND_URL", "http://localhost:3000")
    return f"{frontend_url.rstrip('/')}/team/invites"
