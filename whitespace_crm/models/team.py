from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, Boolean, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from whitespace_crm.db.session import Base
import enum


class TeamRole(enum.Enum):
    owner = "owner"
    admin = "admin"
    member = "member"


ADMIN_ROLES = (TeamRole.owner, TeamRole.admin)


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    logo_url = Column(String(1024), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    memberships = relationship("TeamMembership", back_populates="team", cascade="all, delete-orphan")


class TeamMembership(Base):
    """Canonical per-team-per-user membership."""
    __tablename__ = "team_memberships"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    role = Column(Enum(TeamRole), nullable=False, default=TeamRole.member)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # A user can only be in a team once
    __table_args__ = (UniqueConstraint('team_id', 'user_id', name='unique_team_user'),)

    team = relationship("Team", back_populates="memberships")
    user = relationship("User")


class LegacyTeamMember(Base):
    """
    Roster row from before multi-team support.

    Unique by user_id and by email across the whole table, never by
    (team_id, user_id): a user owns at most one row, which is moved to
    whichever team they joined last.
    """
    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, unique=True)
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    email = Column(String(256), nullable=False, unique=True, index=True)
    role = Column(String(50), nullable=False, default="member")
    active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class UserTeamPreference(Base):
    """The team a user is currently working inside."""
    __tablename__ = "user_team_preferences"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    current_team_id = Column(Integer, ForeignKey("teams.id"), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
