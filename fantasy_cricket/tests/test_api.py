"""
API integration tests.
Uses TestClient to avoid starting a server.
Requires: pip install httpx (for TestClient)
"""
from __future__ import annotations

from pathlib import Path

import pytest

try:
    from fastapi.testclient import TestClient
    HAS_HTTPX = True
except (ImportError, RuntimeError):
    HAS_HTTPX = False

# Ensure project root on path
import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

pytestmark = pytest.mark.skipif(not HAS_HTTPX, reason="httpx required for TestClient")

from conftest import VALID_ROSTER
from fantasy_cricket.api import app
from fantasy_cricket.persistence.db import init_db, set_db_path


@pytest.fixture(autouse=True)
def isolated_db(tmp_path, seed_files):
    """Use a temporary DB for each test."""
    db_path = tmp_path / "test.db"
    set_db_path(db_path)
    init_db(db_path, *seed_files)
    yield db_path


@pytest.fixture
def client():
    return TestClient(app)


def _team(name="Alpha", players=None, captain="Buttler", vice_captain="Rashid"):
    return {
        "name": name,
        "players": list(VALID_ROSTER if players is None else players),
        "captain": captain,
        "viceCaptain": vice_captain,
    }


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_get_players(client):
    resp = client.get("/players")
    assert resp.status_code == 200
    players = resp.json()["players"]
    assert len(players) == 15
    assert set(players[0]) == {"name", "role", "team"}


def test_get_players_filters(client):
    resp = client.get("/players?team=Titans&role=WK")
    assert resp.status_code == 200
    assert resp.json()["players"] == [{"name": "Saha", "role": "WICKETKEEPER", "team": "Titans"}]
    resp = client.get("/players?role=all-rounder")
    assert {p["name"] for p in resp.json()["players"]} == {"Ashwin", "Parag", "Pandya", "Tewatia"}


def test_get_players_bad_role(client):
    resp = client.get("/players?role=umpire")
    assert resp.status_code == 400


def test_add_team(client):
    resp = client.post("/add-team", json=_team())
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == 1
    assert data["message"] == "Team added successfully!"
    assert data["team"]["name"] == "Alpha"
    assert data["team"]["players"] == VALID_ROSTER
    assert data["team"]["viceCaptain"] == "Rashid"
    assert "id" in data["team"]
    assert "totalPoints" not in data["team"]


def test_add_team_wrong_size(client):
    resp = client.post("/add-team", json=_team(players=VALID_ROSTER[:10]))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "A team must have exactly 11 players."


def test_add_team_captain_not_in_roster(client):
    resp = client.post("/add-team", json=_team(captain="Miller"))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Captain must be one of the players in the team."


def test_add_team_unknown_player(client):
    roster = ["Nobody" if p == "Padikkal" else p for p in VALID_ROSTER]
    resp = client.post("/add-team", json=_team(players=roster))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Player Nobody not found."


def test_add_team_missing_field(client):
    body = _team()
    del body["viceCaptain"]
    resp = client.post("/add-team", json=body)
    assert resp.status_code == 422


def test_invalid_team_not_stored(client):
    client.post("/add-team", json=_team(players=VALID_ROSTER[:10]))
    resp = client.post("/process-result")
    assert resp.json()["teams_scored"] == 0


def test_team_result_before_processing(client):
    client.post("/add-team", json=_team())
    resp = client.get("/team-result")
    assert resp.status_code == 404


def test_process_and_team_result(client):
    client.post("/add-team", json=_team("Alpha", captain="Buttler", vice_captain="Rashid"))
    client.post("/add-team", json=_team("Beta", captain="Rashid", vice_captain="Gill"))
    resp = client.post("/process-result")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == 1
    assert data["message"] == "Match results processed successfully!"
    assert data["teams_scored"] == 2

    resp = client.get("/team-result")
    assert resp.status_code == 200
    data = resp.json()
    assert data["top_score"] == 130.5
    assert [t["name"] for t in data["winners"]] == ["Beta"]
    assert data["winners"][0]["totalPoints"] == 130.5


def test_team_result_ties(client):
    client.post("/add-team", json=_team("Beta", captain="Rashid", vice_captain="Gill"))
    client.post("/add-team", json=_team("Gamma", captain="Rashid", vice_captain="Gill"))
    client.post("/process-result")
    resp = client.get("/team-result")
    assert [t["name"] for t in resp.json()["winners"]] == ["Beta", "Gamma"]


def test_get_team(client):
    tid = client.post("/add-team", json=_team()).json()["team"]["id"]
    resp = client.get(f"/teams/{tid}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == tid
    assert data["computed_points"] == 127.5
    assert len(data["breakdown"]) == 11
    captain = next(r for r in data["breakdown"] if r["is_captain"])
    assert captain["player"] == "Buttler"
    assert captain["points"] == 32


def test_get_team_not_found(client):
    resp = client.get("/teams/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Team not found"


def test_get_player_by_name(client):
    resp = client.get("/players/rashid")
    assert resp.status_code == 200
    assert resp.json() == {"name": "Rashid", "role": "BOWLER", "team": "Titans"}


def test_get_player_by_name_not_found(client):
    resp = client.get("/players/Nobody")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Player Nobody not found."
