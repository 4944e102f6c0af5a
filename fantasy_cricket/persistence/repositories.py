"""
Repository interfaces for fantasy data.
No business logic, only read/write operations.
"""
from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone

from fantasy_cricket.models import TeamEntry


# ---------- TeamRepository ----------


class TeamRepository:
    """CRUD for teams and team_players. Teams are never deleted."""

    def create(self, conn: sqlite3.Connection, team: TeamEntry, id: str | None = None) -> TeamEntry:
        tid = id or team.id or str(uuid.uuid4())
        now = datetime.now(timezone.utc).isoformat()
        conn.execute(
            "INSERT INTO teams (id, name, captain, vice_captain, total_points, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (tid, team.name, team.captain, team.vice_captain, team.total_points, now),
        )
        for pos, name in enumerate(team.players, start=1):
            conn.execute(
                "INSERT INTO team_players (team_id, player_name, position) VALUES (?, ?, ?)",
                (tid, name, pos),
            )
        conn.commit()
        return TeamEntry(
            name=team.name,
            players=list(team.players),
            captain=team.captain,
            vice_captain=team.vice_captain,
            total_points=team.total_points,
            id=tid,
        )

    def get(self, conn: sqlite3.Connection, team_id: str) -> TeamEntry | None:
        row = conn.execute(
            "SELECT id, name, captain, vice_captain, total_points FROM teams WHERE id = ?",
            (team_id,),
        ).fetchone()
        if row is None:
            return None
        return self._from_row(row, self.get_players(conn, row["id"]))

    def get_players(self, conn: sqlite3.Connection, team_id: str) -> list[str]:
        """Return player names for team, ordered by position."""
        rows = conn.execute(
            "SELECT player_name FROM team_players WHERE team_id = ? ORDER BY position",
            (team_id,),
        ).fetchall()
        return [r["player_name"] for r in rows]

    def list_all(self, conn: sqlite3.Connection) -> list[TeamEntry]:
        rows = conn.execute(
            "SELECT id, name, captain, vice_captain, total_points FROM teams ORDER BY created_at, rowid"
        ).fetchall()
        rosters: dict[str, list[str]] = {}
        for r in conn.execute("SELECT team_id, player_name FROM team_players ORDER BY team_id, position"):
            rosters.setdefault(r["team_id"], []).append(r["player_name"])
        return [self._from_row(r, rosters.get(r["id"], [])) for r in rows]

    def update_total_points(self, conn: sqlite3.Connection, team_id: str, total_points: float) -> None:
        conn.execute("UPDATE teams SET total_points = ? WHERE id = ?", (total_points, team_id))
        conn.commit()

    @staticmethod
    def _from_row(row: sqlite3.Row, players: list[str]) -> TeamEntry:
        return TeamEntry(
            name=row["name"],
            players=players,
            captain=row["captain"],
            vice_captain=row["vice_captain"],
            total_points=row["total_points"],
            id=row["id"],
        )
