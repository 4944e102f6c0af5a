"""
Match reference data: the player table and the ball-by-ball log.
Seeded from JSON files at startup and read-only afterwards.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from .models import BallEvent, Player, ReferenceDataError

logger = logging.getLogger(__name__)

_DELIVERY_COLUMNS = (
    "innings, over_number, ball_number, batter, bowler, non_striker, "
    "batsman_run, extras_run, extra_type, is_wicket_delivery, player_out, "
    "kind, fielders_involved, batting_team"
)


def _read_json_list(path: Path) -> list[dict]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ReferenceDataError(f"Cannot read reference data from {path}: {e}") from e
    if not isinstance(data, list):
        raise ReferenceDataError(f"{path} must contain a JSON array")
    return data


def read_players_file(path: Path) -> list[Player]:
    """Parse a players JSON file ([{"Player", "Role", "Team"}, ...])."""
    return [Player.from_dict(r) for r in _read_json_list(path)]


def read_match_file(path: Path) -> list[BallEvent]:
    """Parse a ball-by-ball JSON file, keeping file order."""
    return [BallEvent.from_dict(r) for r in _read_json_list(path)]


def _delivery_to_tuple(ball: BallEvent) -> tuple:
    return (
        ball.innings,
        ball.over,
        ball.ball_number,
        ball.batter,
        ball.bowler,
        ball.non_striker,
        ball.batsman_run,
        ball.extras_run,
        ball.extra_type,
        1 if ball.is_wicket_delivery else 0,
        ball.player_out,
        ball.kind,
        ball.fielders_involved,
        ball.batting_team,
    )


def load_reference_data_into_db(conn: sqlite3.Connection, players_path: Path, match_path: Path) -> None:
    """
    Replace the players and deliveries tables with the contents of the seed files.
    Both files are parsed before anything is deleted.
    """
    players = read_players_file(players_path)
    deliveries = read_match_file(match_path)
    cur = conn.cursor()
    cur.execute("DELETE FROM players")
    cur.execute("DELETE FROM deliveries")
    for p in players:
        cur.execute(
            "INSERT OR REPLACE INTO players (name_key, name, role, team) VALUES (?, ?, ?, ?)",
            (p.name.casefold(), p.name, p.role.value, p.team),
        )
    for seq, ball in enumerate(deliveries, start=1):
        cur.execute(
            f"INSERT INTO deliveries (seq, {_DELIVERY_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (seq,) + _delivery_to_tuple(ball),
        )
    conn.commit()
    logger.info("Loaded %d players and %d deliveries", len(players), len(deliveries))


def _player_from_row(row: sqlite3.Row) -> Player:
    return Player.from_dict({"name": row["name"], "role": row["role"], "team": row["team"]})


def get_player(conn: sqlite3.Connection, name: str) -> Player | None:
    """Fetch one player by name, case-insensitively."""
    row = conn.execute(
        "SELECT name, role, team FROM players WHERE name_key = ?",
        (name.casefold(),),
    ).fetchone()
    if row is None:
        return None
    return _player_from_row(row)


def list_players(
    conn: sqlite3.Connection,
    team: str | None = None,
    role: str | None = None,
) -> list[Player]:
    """List players ordered by team then name, optionally filtered by team and role value."""
    sql = "SELECT name, role, team FROM players"
    clauses, args = [], []
    if team:
        clauses.append("team = ?")
        args.append(team)
    if role:
        clauses.append("role = ?")
        args.append(role)
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " ORDER BY team, name"
    return [_player_from_row(r) for r in conn.execute(sql, args).fetchall()]


def list_deliveries(conn: sqlite3.Connection) -> list[BallEvent]:
    """All deliveries of the match in delivery order."""
    rows = conn.execute(f"SELECT {_DELIVERY_COLUMNS} FROM deliveries ORDER BY seq").fetchall()
    return [
        BallEvent(
            batter=r["batter"],
            bowler=r["bowler"],
            non_striker=r["non_striker"],
            batsman_run=r["batsman_run"],
            extras_run=r["extras_run"],
            is_wicket_delivery=bool(r["is_wicket_delivery"]),
            player_out=r["player_out"],
            kind=r["kind"],
            fielders_involved=r["fielders_involved"],
            innings=r["innings"],
            over=r["over_number"],
            ball_number=r["ball_number"],
            extra_type=r["extra_type"],
            batting_team=r["batting_team"],
        )
        for r in rows
    ]


class SqliteReferenceData:
    """Reference-data provider backed by the players and deliveries tables."""

    def players(self, conn: sqlite3.Connection) -> list[Player]:
        return list_players(conn)

    def deliveries(self, conn: sqlite3.Connection) -> list[BallEvent]:
        return list_deliveries(conn)
