"""
SQLite schema for fantasy entities and match reference data.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def players_schema() -> str:
    """Player reference table. name_key is the case-folded name used for lookups."""
    return """
    CREATE TABLE IF NOT EXISTS players (
        name_key TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        role TEXT NOT NULL,
        team TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS ix_players_team ON players(team);
    """


def deliveries_schema() -> str:
    """Ball-by-ball log for the one match. seq keeps delivery order."""
    return """
    CREATE TABLE IF NOT EXISTS deliveries (
        seq INTEGER PRIMARY KEY,
        innings INTEGER,
        over_number INTEGER,
        ball_number INTEGER,
        batter TEXT NOT NULL,
        bowler TEXT NOT NULL DEFAULT '',
        non_striker TEXT NOT NULL DEFAULT '',
        batsman_run INTEGER NOT NULL DEFAULT 0,
        extras_run INTEGER NOT NULL DEFAULT 0,
        extra_type TEXT NOT NULL DEFAULT '',
        is_wicket_delivery INTEGER NOT NULL DEFAULT 0,
        player_out TEXT NOT NULL DEFAULT '',
        kind TEXT NOT NULL DEFAULT '',
        fielders_involved TEXT NOT NULL DEFAULT '',
        batting_team TEXT NOT NULL DEFAULT ''
    );
    """


def teams_schema() -> str:
    """Fan-submitted teams. total_points is NULL until a result has been processed."""
    return """
    CREATE TABLE IF NOT EXISTS teams (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        captain TEXT NOT NULL,
        vice_captain TEXT NOT NULL,
        total_points REAL,
        created_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS ix_teams_total_points ON teams(total_points);
    """


def team_players_schema() -> str:
    """Roster of each team, in submission order."""
    return """
    CREATE TABLE IF NOT EXISTS team_players (
        team_id TEXT NOT NULL,
        player_name TEXT NOT NULL,
        position INTEGER NOT NULL,
        PRIMARY KEY (team_id, position),
        FOREIGN KEY (team_id) REFERENCES teams(id)
    );
    CREATE INDEX IF NOT EXISTS ix_team_players_team_id ON team_players(team_id);
    """


def all_schema_sql() -> str:
    """Combine all schema DDL for a single execution. Order: players, deliveries, teams, team_players."""
    return "\n".join([
        players_schema(),
        deliveries_schema(),
        teams_schema(),
        team_players_schema(),
    ])
