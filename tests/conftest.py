"""
Pytest configuration and fixtures for the team invite service.
"""
import os
from typing import Dict, Generator

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SMTP_HOST", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from whitespace_crm.main import app
from whitespace_crm.api.deps import get_mailer
from whitespace_crm.db.session import Base, get_db
from whitespace_crm.models.team import Team, TeamMembership, TeamRole
from whitespace_crm.models.user import User
from tests.factories import RecordingMailer, auth_headers_for, make_user


# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# pysqlite defers BEGIN on its own; let SQLAlchemy emit it so SAVEPOINTs work
@event.listens_for(engine, "connect")
def _disable_pysqlite_begin(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None


@event.listens_for(engine, "begin")
def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Create a fresh database for each test function.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture(scope="function")
def client(db: Session, mailer: RecordingMailer) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer

    # Reset rate limiter for each test to avoid rate limit issues in tests
    app.state.limiter.reset()

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def alice(db: Session) -> User:
    """Owner of both test teams."""
    return make_user(db, "alice@x.com", "Alice", "Admin")


@pytest.fixture
def bob(db: Session) -> User:
    return make_user(db, "bob@x.com", "Bob", "Builder")


@pytest.fixture
def carol(db: Session) -> User:
    return make_user(db, "carol@x.com")


@pytest.fixture
def mike(db: Session) -> User:
    """Plain member of team two."""
    return make_user(db, "mike@x.com", "Mike")


@pytest.fixture
def team_one(db: Session, alice: User) -> Team:
    team = Team(name="Team One", logo_url="https://cdn.x.com/one.png")
    db.add(team)
    db.flush()
    db.add(TeamMembership(team_id=team.id, user_id=alice.id, role=TeamRole.owner))
    db.commit()
    db.refresh(team)
    return team


@pytest.fixture
def team_two(db: Session, alice: User, mike: User) -> Team:
    team = Team(name="Team Two")
    db.add(team)
    db.flush()
    db.add(TeamMembership(team_id=team.id, user_id=alice.id, role=TeamRole.owner))
    db.add(TeamMembership(team_id=team.id, user_id=mike.id, role=TeamRole.member))
    db.commit()
    db.refresh(team)
    return team


@pytest.fixture
def alice_headers(alice: User) -> Dict[str, str]:
    return auth_headers_for(alice)


@pytest.fixture
def bob_headers(bob: User) -> Dict[str, str]:
    return auth_headers_for(bob)


@pytest.fixture
def carol_headers(carol: User) -> Dict[str, str]:
    return auth_headers_for(carol)


@pytest.fixture
def mike_headers(mike: User) -> Dict[str, str]:
    return auth_headers_for(mike)
