"""
Contest service: wires roster validation and scoring to storage.
Add team: validate, then persist. Process result: score every stored team, write totals back.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any

from fantasy_cricket.models import Player, TeamEntry
from fantasy_cricket.persistence.repositories import TeamRepository
from fantasy_cricket.reference_data import SqliteReferenceData
from fantasy_cricket.scoring import build_ledger, player_breakdown, score_team
from fantasy_cricket.services.ports import ReferenceDataProvider, TeamStore
from fantasy_cricket.validation import ValidationResult, build_player_index, validate_team

logger = logging.getLogger(__name__)


# ---------- Exceptions ----------


class TeamValidationError(ValueError):
    """Roster broke a team rule; carries the ValidationResult."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(result.message)
        self.result = result


class TeamNotFoundError(LookupError):
    """No stored team with the given id."""


class NoResultsError(LookupError):
    """Winners requested before any team has been scored."""


# ---------- Helpers ----------


def _with_reference_names(team: TeamEntry, index: dict[str, Player]) -> TeamEntry:
    """Copy of a validated team with every name spelled as in the player table."""
    def name(n: str) -> str:
        return index[n.casefold()].name

    return TeamEntry(
        name=team.name,
        players=[name(p) for p in team.players],
        captain=name(team.captain),
        vice_captain=name(team.vice_captain),
    )


# ---------- ContestService ----------


class ContestService:
    """
    Orchestration for one match's contest.
    Reference data and team storage are injected; defaults are the sqlite implementations.
    """

    def __init__(
        self,
        reference: ReferenceDataProvider | None = None,
        teams: TeamStore | None = None,
    ) -> None:
        self._reference = reference or SqliteReferenceData()
        self._teams = teams or TeamRepository()

    def add_team(self, conn: sqlite3.Connection, team: TeamEntry) -> TeamEntry:
        """
        Validate and store a team entry.
        Raises TeamValidationError on a rule violation; PlayerNotFoundError propagates.
        Nothing is written unless the roster is valid.
        """
        index = build_player_index(self._reference.players(conn))
        result = validate_team(team, index)
        if not result.is_valid:
            logger.info("Rejected team %r: %s", team.name, result.violation.value)
            raise TeamValidationError(result)
        created = self._teams.create(conn, _with_reference_names(team, index))
        logger.info("Added team %r (%s)", created.name, created.id)
        return created

    def process_result(self, conn: sqlite3.Connection) -> list[TeamEntry]:
        """Score every stored team against the match deliveries and persist totals."""
        ledger = build_ledger(self._reference.deliveries(conn))
        scored: list[TeamEntry] = []
        for team in self._teams.list_all(conn):
            team.total_points = score_team(ledger, team)
            self._teams.update_total_points(conn, team.id, team.total_points)
            scored.append(team)
        logger.info("Processed match result for %d teams", len(scored))
        return scored

    def get_winners(self, conn: sqlite3.Connection) -> list[TeamEntry]:
        """
        Teams tied on the highest total. Unscored teams are ignored.
        Raises NoResultsError when no team has a score yet.
        """
        scored = [t for t in self._teams.list_all(conn) if t.is_scored]
        if not scored:
            raise NoResultsError("No team results yet; process the match result first")
        top = max(t.total_points for t in scored)
        return [t for t in scored if t.total_points == top]

    def get_team(self, conn: sqlite3.Connection, team_id: str) -> TeamEntry:
        team = self._teams.get(conn, team_id)
        if team is None:
            raise TeamNotFoundError(f"Team not found: {team_id}")
        return team

    def get_team_breakdown(self, conn: sqlite3.Connection, team_id: str) -> dict[str, Any]:
        """Stored team plus per-player points from the current deliveries."""
        team = self.get_team(conn, team_id)
        ledger = build_ledger(self._reference.deliveries(conn))
        return {
            **team.to_dict(),
            "breakdown": player_breakdown(ledger, team),
            "computed_points": score_team(ledger, team),
        }
