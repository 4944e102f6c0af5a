"""
Shared fixtures: a small two-team player table and a six-ball match log.

Ledger for MATCH: Buttler 16, Rashid 33, Gill 5, Chahal 25, Parag 8, Ashwin 8,
everyone else 0.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from fantasy_cricket.persistence.db import get_connection, init_db, set_db_path

PLAYERS = [
    {"Player": "Buttler", "Team": "Royals", "Role": "Wicketkeeper"},
    {"Player": "Jaiswal", "Team": "Royals", "Role": "Batter"},
    {"Player": "Padikkal", "Team": "Royals", "Role": "Batter"},
    {"Player": "Hetmyer", "Team": "Royals", "Role": "Batter"},
    {"Player": "Ashwin", "Team": "Royals", "Role": "All-Rounder"},
    {"Player": "Parag", "Team": "Royals", "Role": "All-Rounder"},
    {"Player": "Boult", "Team": "Royals", "Role": "Bowler"},
    {"Player": "Chahal", "Team": "Royals", "Role": "Bowler"},
    {"Player": "Saha", "Team": "Titans", "Role": "Wicketkeeper"},
    {"Player": "Gill", "Team": "Titans", "Role": "Batter"},
    {"Player": "Miller", "Team": "Titans", "Role": "Batter"},
    {"Player": "Pandya", "Team": "Titans", "Role": "All-Rounder"},
    {"Player": "Tewatia", "Team": "Titans", "Role": "All-Rounder"},
    {"Player": "Rashid", "Team": "Titans", "Role": "Bowler"},
    {"Player": "Dhoni", "Team": "Kings", "Role": "Wicketkeeper"},
]


def _ball(over, ball, batter, bowler, runs=0, extras=0, extra_type="NA", wicket=0, kind="NA", fielders="NA", out="NA"):
    return {
        "ID": 1, "innings": 1, "overs": over, "ballnumber": ball,
        "batter": batter, "bowler": bowler, "non-striker": "NA",
        "extra_type": extra_type, "batsman_run": runs, "extras_run": extras,
        "total_run": runs + extras, "isWicketDelivery": wicket,
        "player_out": out, "kind": kind, "fielders_involved": fielders,
        "BattingTeam": "NA",
    }


MATCH = [
    _ball(0, 1, "Buttler", "Rashid", runs=6),
    _ball(0, 2, "Jaiswal", "Rashid", wicket=1, kind="bowled", out="Jaiswal"),
    _ball(0, 3, "Gill", "Boult", runs=4),
    _ball(0, 4, "Gill", "Boult", extras=1, extra_type="wides"),
    _ball(1, 1, "Pandya", "Chahal", wicket=1, kind="caught", fielders="Buttler", out="Pandya"),
    _ball(1, 2, "Saha", "Boult", wicket=1, kind="run out", fielders="Parag, Ashwin", out="Saha"),
]

VALID_ROSTER = [
    "Buttler", "Jaiswal", "Padikkal", "Ashwin", "Parag", "Boult",
    "Chahal", "Saha", "Gill", "Pandya", "Rashid",
]


@pytest.fixture
def seed_files(tmp_path):
    """Write PLAYERS and MATCH to temporary JSON files."""
    players_path = tmp_path / "players.json"
    match_path = tmp_path / "match.json"
    players_path.write_text(json.dumps(PLAYERS), encoding="utf-8")
    match_path.write_text(json.dumps(MATCH), encoding="utf-8")
    return players_path, match_path


@pytest.fixture
def db_conn(tmp_path, seed_files):
    """Temporary DB with schema and seeded reference data."""
    db_path = tmp_path / "fantasy_test.db"
    set_db_path(db_path)
    init_db(db_path, *seed_files)
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()
