from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, Index, text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from whitespace_crm.db.session import Base
import enum
from datetime import datetime, timezone


class InviteStatus(enum.Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    expired = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not InviteStatus.pending


class TeamInvite(Base):
    __tablename__ = "team_invites"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    email = Column(String(256), nullable=False, index=True)
    role = Column(String(50), nullable=False)  # TeamRole value as string
    status = Column(Enum(InviteStatus, name="invitestatus"), nullable=False, default=InviteStatus.pending)
    token = Column(String(64), nullable=False, unique=True, index=True)
    invited_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=False)

    # At most one pending invite per recipient per team
    __table_args__ = (
        Index(
            "uq_team_invites_pending",
            "team_id",
            "email",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

    team = relationship("Team")
    inviter = relationship("User", foreign_keys=[invited_by])

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the invite has passed its expiry."""
        expires_at = self.expires_at
        if expires_at is None:
            return False
        # SQLite hands back naive datetimes; they are stored as UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return (now or datetime.now(timezone.utc)) > expires_at
