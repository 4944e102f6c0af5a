from __future__ import annotations

import sqlite3
from typing import Protocol

from fantasy_cricket.models import BallEvent, Player, TeamEntry


class ReferenceDataProvider(Protocol):
    def players(self, conn: sqlite3.Connection) -> list[Player]: ...

    def deliveries(self, conn: sqlite3.Connection) -> list[BallEvent]: ...


class TeamStore(Protocol):
    def create(self, conn: sqlite3.Connection, team: TeamEntry, id: str | None = None) -> TeamEntry: ...

    def get(self, conn: sqlite3.Connection, team_id: str) -> TeamEntry | None: ...

    def list_all(self, conn: sqlite3.Connection) -> list[TeamEntry]: ...

    def update_total_points(self, conn: sqlite3.Connection, team_id: str, total_points: float) -> None: ...
