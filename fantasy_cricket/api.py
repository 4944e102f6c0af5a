"""
REST API for the fantasy cricket backend.
Thin wrappers around the contest service and persistence.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from fantasy_cricket.config import Settings, setup_logging, validate_settings
from fantasy_cricket.models import PlayerNotFoundError, ReferenceDataError, TeamEntry, parse_role
from fantasy_cricket.persistence import get_connection, init_db, set_db_path
from fantasy_cricket.reference_data import get_player, list_players
from fantasy_cricket.services import (
    ContestService,
    NoResultsError,
    TeamNotFoundError,
    TeamValidationError,
)

logger = logging.getLogger(__name__)


@contextmanager
def db_conn() -> Generator:
    """Yield a DB connection, ensure close on exit."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


# ---------- Startup: ensure DB and reference data ----------
def _ensure_db(settings: Settings) -> None:
    set_db_path(settings.db_path)
    if settings.seed_on_startup:
        init_db(settings.db_path, settings.players_path, settings.match_path)
    else:
        init_db(settings.db_path)


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    validate_settings(settings)
    _ensure_db(settings)
    logger.info("Database ready at %s", settings.db_path)
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="Fantasy Cricket API",
    description="Team entry validation and match result scoring for one match",
    version="0.1.0",
    lifespan=lifespan,
)

contest = ContestService()


# ---------- Request/Response models ----------


class AddTeamRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    players: list[str] = Field(..., description="Exactly 11 player names")
    captain: str
    viceCaptain: str

    def to_entry(self) -> TeamEntry:
        return TeamEntry(
            name=self.name,
            players=list(self.players),
            captain=self.captain,
            vice_captain=self.viceCaptain,
        )


# ---------- Endpoints ----------


@app.get("/health")
def health_check() -> dict[str, Any]:
    return {"status": "ok"}


@app.get("/players")
def get_players(
    team: str | None = Query(None, description="Filter by team affiliation"),
    role: str | None = Query(None, description="Filter by role, e.g. BATTER or WK"),
) -> dict[str, Any]:
    """List the player reference table."""
    role_value = None
    if role:
        try:
            role_value = parse_role(role).value
        except ReferenceDataError as e:
            raise HTTPException(status_code=400, detail=str(e))
    with db_conn() as conn:
        players = list_players(conn, team=team, role=role_value)
    return {"players": [p.to_dict() for p in players]}


@app.get("/players/{name}")
def get_player_by_name(name: str) -> dict[str, Any]:
    """One player by name, case-insensitively."""
    with db_conn() as conn:
        player = get_player(conn, name)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player {name} not found.")
    return player.to_dict()


@app.post("/add-team")
def add_team(req: AddTeamRequest) -> dict[str, Any]:
    """Validate a team entry and store it. Invalid rosters are never stored."""
    with db_conn() as conn:
        try:
            team = contest.add_team(conn, req.to_entry())
        except TeamValidationError as e:
            raise HTTPException(status_code=400, detail=e.result.message)
        except PlayerNotFoundError as e:
            raise HTTPException(status_code=400, detail=str(e))
    return {"status": 1, "message": "Team added successfully!", "team": team.to_dict()}


@app.post("/process-result")
def process_result() -> dict[str, Any]:
    """Score every stored team against the match and save totalPoints."""
    with db_conn() as conn:
        teams = contest.process_result(conn)
    return {
        "status": 1,
        "message": "Match results processed successfully!",
        "teams_scored": len(teams),
    }


@app.get("/team-result")
def team_result() -> dict[str, Any]:
    """Return the team(s) with the highest totalPoints."""
    with db_conn() as conn:
        try:
            winners = contest.get_winners(conn)
        except NoResultsError as e:
            raise HTTPException(status_code=404, detail=str(e))
    return {
        "status": 1,
        "top_score": winners[0].total_points,
        "winners": [t.to_dict() for t in winners],
    }


@app.get("/teams/{team_id}")
def get_team(team_id: str) -> dict[str, Any]:
    """A stored team with its per-player scoring breakdown."""
    with db_conn() as conn:
        try:
            return contest.get_team_breakdown(conn, team_id)
        except TeamNotFoundError:
            raise HTTPException(status_code=404, detail="Team not found")
