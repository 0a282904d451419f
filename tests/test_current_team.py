"""
Tests for reading and switching the current team.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from whitespace_crm.models.team import Team, UserTeamPreference
from whitespace_crm.models.user import User


class TestCurrentTeam:
    """GET/PUT /api/teams/current."""

    def test_no_teams(self, client: TestClient, bob_headers: dict):
        response = client.get("/api/teams/current", headers=bob_headers)
        assert response.status_code == 200
        assert response.json() == {"team": None}

    def test_falls_back_to_first_membership(
        self, client: TestClient, alice_headers: dict, alice: User, team_one: Team, team_two: Team, db: Session
    ):
        response = client.get("/api/teams/current", headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["team"]["id"] == team_one.id
        assert db.get(UserTeamPreference, alice.id).current_team_id == team_one.id

    def test_switch_team(
        self, client: TestClient, alice_headers: dict, alice: User, team_one: Team, team_two: Team, db: Session
    ):
        response = client.put(
            "/api/teams/current", json={"team_id": team_two.id}, headers=alice_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["team"]["id"] == team_two.id
        assert data["message"] == "Switched to Team Two"

        response = client.get("/api/teams/current", headers=alice_headers)
        assert response.json()["team"]["id"] == team_two.id

    def test_switch_to_foreign_team_forbidden(
        self, client: TestClient, mike_headers: dict, team_one: Team, team_two: Team
    ):
        response = client.put(
            "/api/teams/current", json={"team_id": team_one.id}, headers=mike_headers
        )
        assert response.status_code == 403

    def test_switch_requires_team_id(self, client: TestClient, alice_headers: dict, team_one: Team):
        response = client.put("/api/teams/current", json={}, headers=alice_headers)
        assert response.status_code == 400
        assert response.json()["field"] == "team_id"

    def test_requires_identity(self, client: TestClient):
        assert client.get("/api/teams/current").status_code == 401


class TestListTeams:
    """GET /api/teams."""

    def test_lists_memberships_with_role(
        self, client: TestClient, mike_headers: dict, team_one: Team, team_two: Team
    ):
        response = client.get("/api/teams", headers=mike_headers)
        assert response.status_code == 200
        data = response.json()
        assert [team["id"] for team in data["teams"]] == [team_two.id]
        assert data["teams"][0]["name"] == "Team Two"
        assert data["teams"][0]["role"] == "member"
        assert data["teams"][0]["is_current"] is False
        assert data["current_team_id"] is None

    def test_marks_current_team(
        self, client: TestClient, alice_headers: dict, team_one: Team, team_two: Team
    ):
        client.put("/api/teams/current", json={"team_id": team_two.id}, headers=alice_headers)

        response = client.get("/api/teams", headers=alice_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["current_team_id"] == team_two.id
        by_id = {team["id"]: team for team in data["teams"]}
        assert by_id[team_one.id]["role"] == "owner"
        assert by_id[team_one.id]["is_current"] is False
        assert by_id[team_one.id]["logo_url"] == "https://cdn.x.com/one.png"
        assert by_id[team_two.id]["is_current"] is True

    def test_no_teams(self, client: TestClient, bob_headers: dict):
        response = client.get("/api/teams", headers=bob_headers)
        assert response.status_code == 200
        assert response.json() == {"teams": [], "current_team_id": None}

    def test_requires_identity(self, client: TestClient):
        assert client.get("/api/teams").status_code == 401
