"""
Data models for the fantasy cricket backend.
Domain objects only; no persistence or API logic.

Players and ball events are reference data for one match; team entries are
submitted by fans, validated, stored, and later scored.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------- Errors ----------


class ReferenceDataError(LookupError):
    """Reference data is missing or malformed (not a roster rule violation)."""


class PlayerNotFoundError(ReferenceDataError):
    """A roster names a player the reference table does not know."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Player {name} not found.")
        self.name = name


# ---------- Role ----------


class Role(str, Enum):
    WICKETKEEPER = "WICKETKEEPER"
    BATTER = "BATTER"
    ALL_ROUNDER = "ALL-ROUNDER"
    BOWLER = "BOWLER"


# Short codes and spelling variants seen in player feeds, keyed after normalisation.
_ROLE_ALIASES: dict[str, Role] = {
    "WK": Role.WICKETKEEPER,
    "WICKET-KEEPER": Role.WICKETKEEPER,
    "KEEPER": Role.WICKETKEEPER,
    "BAT": Role.BATTER,
    "BATSMAN": Role.BATTER,
    "AR": Role.ALL_ROUNDER,
    "ALLROUNDER": Role.ALL_ROUNDER,
    "BWL": Role.BOWLER,
    "BOWL": Role.BOWLER,
}

# Human-readable plural used in role-count messages.
ROLE_LABELS: dict[Role, str] = {
    Role.WICKETKEEPER: "wicketkeepers",
    Role.BATTER: "batters",
    Role.ALL_ROUNDER: "all-rounders",
    Role.BOWLER: "bowlers",
}


def parse_role(value: str | None) -> Role:
    """
    Normalise a role string to one of the four roles.
    Raises ReferenceDataError if the value is empty or unrecognised.
    """
    if not value:
        raise ReferenceDataError("Player role is missing")
    key = value.strip().upper().replace("_", "-").replace(" ", "-")
    try:
        return Role(key)
    except ValueError:
        pass
    role = _ROLE_ALIASES.get(key)
    if role is None:
        raise ReferenceDataError(f"Unknown player role: {value!r}")
    return role


# ---------- Player ----------


@dataclass(frozen=True)
class Player:
    """One row of the player reference table."""
    name: str
    role: Role
    team: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        """Build from a seed record ({"Player", "Role", "Team"}) or a lowercase dict."""
        name = data.get("Player", data.get("name"))
        if not name:
            raise ReferenceDataError(f"Player record has no name: {data!r}")
        return cls(
            name=str(name).strip(),
            role=parse_role(data.get("Role", data.get("role"))),
            team=str(data.get("Team", data.get("team", ""))).strip(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "role": self.role.value, "team": self.team}


# ---------- BallEvent ----------

FIELDERS_SEPARATOR = ", "


def _text(value: Any) -> str:
    """Feed strings: None and the "NA" placeholder both mean empty."""
    if value is None:
        return ""
    s = str(value).strip()
    return "" if s.upper() == "NA" else s


def _int(value: Any) -> int:
    if value in (None, "", "NA"):
        return 0
    return int(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass(frozen=True)
class BallEvent:
    """
    One delivery of the match. Only batter/bowler/runs/wicket/kind/fielders
    feed scoring; the rest is carried for display and debugging.
    """
    batter: str
    bowler: str = ""
    non_striker: str = ""
    batsman_run: int = 0
    extras_run: int = 0
    is_wicket_delivery: bool = False
    player_out: str = ""
    kind: str = ""
    fielders_involved: str = ""
    innings: int | None = None
    over: int | None = None
    ball_number: int | None = None
    extra_type: str = ""
    batting_team: str = ""

    @property
    def fielders(self) -> list[str]:
        """Fielders credited on this delivery, in feed order."""
        if not self.fielders_involved:
            return []
        return [f for f in self.fielders_involved.split(FIELDERS_SEPARATOR) if f]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BallEvent:
        """Accepts both the feed spelling (isWicketDelivery, non-striker, ballnumber) and snake_case."""
        innings = data.get("innings")
        over = data.get("over", data.get("overs"))
        ball_number = data.get("ball_number", data.get("ballnumber"))
        return cls(
            batter=_text(data.get("batter")),
            bowler=_text(data.get("bowler")),
            non_striker=_text(data.get("non_striker", data.get("non-striker"))),
            batsman_run=_int(data.get("batsman_run")),
            extras_run=_int(data.get("extras_run")),
            is_wicket_delivery=_flag(data.get("isWicketDelivery", data.get("is_wicket_delivery", False))),
            player_out=_text(data.get("player_out")),
            kind=_text(data.get("kind")),
            fielders_involved=_text(data.get("fielders_involved")),
            innings=int(innings) if innings is not None else None,
            over=int(over) if over is not None else None,
            ball_number=int(ball_number) if ball_number is not None else None,
            extra_type=_text(data.get("extra_type")),
            batting_team=_text(data.get("batting_team", data.get("BattingTeam"))),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "batter": self.batter,
            "bowler": self.bowler,
            "non_striker": self.non_striker,
            "batsman_run": self.batsman_run,
            "extras_run": self.extras_run,
            "isWicketDelivery": self.is_wicket_delivery,
            "player_out": self.player_out,
            "kind": self.kind,
            "fielders_involved": self.fielders_involved,
        }
        if self.innings is not None:
            d["innings"] = self.innings
        if self.over is not None:
            d["over"] = self.over
        if self.ball_number is not None:
            d["ball_number"] = self.ball_number
        if self.extra_type:
            d["extra_type"] = self.extra_type
        if self.batting_team:
            d["batting_team"] = self.batting_team
        return d


# ---------- TeamEntry ----------


@dataclass
class TeamEntry:
    """
    A fan's fantasy team: 11 player names plus captain and vice-captain.
    total_points stays None until a match result has been processed.
    """
    name: str
    players: list[str] = field(default_factory=list)
    captain: str = ""
    vice_captain: str = ""
    total_points: float | None = None
    id: str | None = None

    @property
    def is_scored(self) -> bool:
        return self.total_points is not None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "name": self.name,
            "players": list(self.players),
            "captain": self.captain,
            "viceCaptain": self.vice_captain,
        }
        if self.id is not None:
            d["id"] = self.id
        if self.total_points is not None:
            d["totalPoints"] = self.total_points
        return d
