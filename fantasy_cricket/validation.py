"""
Roster validation for fantasy team entries.
Pure: the player reference table is passed in, nothing is read from storage.

Checks run in a fixed order and the first failure wins. A name missing from
the reference table is not a verdict: it raises PlayerNotFoundError.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from .models import ROLE_LABELS, Player, PlayerNotFoundError, Role, TeamEntry

TEAM_SIZE = 11
MAX_SOURCE_TEAMS = 2
ROLE_MIN = 1
ROLE_MAX = 8

# Order in which role bounds are checked.
ROLE_CHECK_ORDER = (Role.WICKETKEEPER, Role.BATTER, Role.ALL_ROUNDER, Role.BOWLER)


class Violation(str, Enum):
    WRONG_ROSTER_SIZE = "wrong_roster_size"
    DUPLICATE_PLAYER = "duplicate_player"
    CAPTAIN_NOT_IN_ROSTER = "captain_not_in_roster"
    VICE_CAPTAIN_NOT_IN_ROSTER = "vice_captain_not_in_roster"
    TOO_MANY_SOURCE_TEAMS = "too_many_source_teams"
    ROLE_COUNT_OUT_OF_RANGE = "role_count_out_of_range"


class Bound(str, Enum):
    MIN = "min"
    MAX = "max"


_MESSAGES: dict[Violation, str] = {
    Violation.WRONG_ROSTER_SIZE: f"A team must have exactly {TEAM_SIZE} players.",
    Violation.DUPLICATE_PLAYER: "Duplicate players are not allowed.",
    Violation.CAPTAIN_NOT_IN_ROSTER: "Captain must be one of the players in the team.",
    Violation.VICE_CAPTAIN_NOT_IN_ROSTER: "Vice-Captain must be one of the players in the team.",
    Violation.TOO_MANY_SOURCE_TEAMS: f"Players must be from a maximum of {MAX_SOURCE_TEAMS} teams.",
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_team. violation is None for a valid roster."""
    violation: Violation | None = None
    role: Role | None = None
    bound: Bound | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls()

    @property
    def is_valid(self) -> bool:
        return self.violation is None

    @property
    def message(self) -> str | None:
        if self.violation is None:
            return None
        if self.violation == Violation.ROLE_COUNT_OUT_OF_RANGE and self.role is not None:
            which = "at least" if self.bound == Bound.MIN else "at most"
            limit = ROLE_MIN if self.bound == Bound.MIN else ROLE_MAX
            return (
                f"Team must have between {ROLE_MIN} and {ROLE_MAX} {ROLE_LABELS[self.role]} "
                f"({which} {limit})."
            )
        return _MESSAGES[self.violation]

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"valid": self.is_valid}
        if self.violation is not None:
            d["violation"] = self.violation.value
            d["message"] = self.message
        if self.role is not None:
            d["role"] = self.role.value
        if self.bound is not None:
            d["bound"] = self.bound.value
        return d


def build_player_index(players: Iterable[Player]) -> dict[str, Player]:
    """Case-insensitive name -> Player. Later duplicates of a name are ignored."""
    index: dict[str, Player] = {}
    for p in players:
        index.setdefault(p.name.casefold(), p)
    return index


def resolve_players(names: Iterable[str], index: dict[str, Player]) -> list[Player]:
    """Look up every name; raise PlayerNotFoundError on the first miss."""
    resolved: list[Player] = []
    for name in names:
        player = index.get(name.casefold())
        if player is None:
            raise PlayerNotFoundError(name)
        resolved.append(player)
    return resolved


def _role_violation(resolved: list[Player]) -> ValidationResult | None:
    counts = Counter(p.role for p in resolved)
    for role in ROLE_CHECK_ORDER:
        n = counts.get(role, 0)
        if n < ROLE_MIN:
            return ValidationResult(Violation.ROLE_COUNT_OUT_OF_RANGE, role=role, bound=Bound.MIN)
        if n > ROLE_MAX:
            return ValidationResult(Violation.ROLE_COUNT_OUT_OF_RANGE, role=role, bound=Bound.MAX)
    return None


def validate_team(team: TeamEntry, players: Iterable[Player] | dict[str, Player]) -> ValidationResult:
    """
    Validate a team entry against the player reference table.
    players may be an iterable of Player or an index from build_player_index.
    Raises PlayerNotFoundError if any roster name is unknown.
    """
    roster = list(team.players)

    if len(roster) != TEAM_SIZE:
        return ValidationResult(Violation.WRONG_ROSTER_SIZE)
    if len(set(roster)) != len(roster):
        return ValidationResult(Violation.DUPLICATE_PLAYER)
    if team.captain not in roster:
        return ValidationResult(Violation.CAPTAIN_NOT_IN_ROSTER)
    if team.vice_captain not in roster:
        return ValidationResult(Violation.VICE_CAPTAIN_NOT_IN_ROSTER)

    index = players if isinstance(players, dict) else build_player_index(players)
    resolved = resolve_players(roster, index)

    if len({p.team for p in resolved}) > MAX_SOURCE_TEAMS:
        return ValidationResult(Violation.TOO_MANY_SOURCE_TEAMS)

    return _role_violation(resolved) or ValidationResult.ok()
