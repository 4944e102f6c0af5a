"""
Fantasy scoring for cricket teams.
Points come from one match's ball-by-ball log; team totals apply captaincy multipliers.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Any, Iterable

from .models import BallEvent, TeamEntry


# ---------- Batting ----------
RUN_POINTS = 1  # per run off the bat; extras never score
FOUR_BONUS = 1
SIX_BONUS = 2

# ---------- Bowling ----------
WICKET_POINTS = 25  # any dismissal except run out
BOWLED_LBW_BONUS = 8
BOWLED_LBW_KINDS = frozenset({"bowled", "lbw"})
RUN_OUT_KIND = "run out"

# ---------- Fielding ----------
FIELDING_POINTS = 8  # each listed fielder, not shared

# ---------- Captaincy ----------
CAPTAIN_MULTIPLIER = 2
VICE_CAPTAIN_MULTIPLIER = 1.5


def _batting_points(ball: BallEvent) -> int:
    points = ball.batsman_run * RUN_POINTS
    if ball.batsman_run == 4:
        points += FOUR_BONUS
    elif ball.batsman_run == 6:
        points += SIX_BONUS
    return points


def _bowling_points(ball: BallEvent) -> int:
    if not ball.is_wicket_delivery or ball.kind == RUN_OUT_KIND:
        return 0
    points = WICKET_POINTS
    if ball.kind in BOWLED_LBW_KINDS:
        points += BOWLED_LBW_BONUS
    return points


def build_ledger(deliveries: Iterable[BallEvent]) -> dict[str, float]:
    """
    Accumulate points per player name over the deliveries, in order.
    Names that appear in the log but on no roster still get an entry.
    """
    ledger: dict[str, float] = defaultdict(float)
    for ball in deliveries:
        if ball.batter:
            ledger[ball.batter] += _batting_points(ball)
        if ball.bowler:
            ledger[ball.bowler] += _bowling_points(ball)
        if ball.is_wicket_delivery:
            for fielder in ball.fielders:
                ledger[fielder] += FIELDING_POINTS
    return dict(ledger)


def player_multiplier(player: str, team: TeamEntry) -> float:
    """Captain x2, vice-captain x1.5, everyone else x1. Captain wins if both."""
    if player == team.captain:
        return CAPTAIN_MULTIPLIER
    if player == team.vice_captain:
        return VICE_CAPTAIN_MULTIPLIER
    return 1


def score_team(ledger: dict[str, float], team: TeamEntry) -> float:
    """Sum the team's players' ledger points with captaincy multipliers applied."""
    total = 0.0
    for player in team.players:
        total += ledger.get(player, 0) * player_multiplier(player, team)
    return total


def compute_team_score(deliveries: Iterable[BallEvent], team: TeamEntry) -> float:
    """
    Compute one team's total fantasy points from the match deliveries.
    Builds a fresh ledger on every call; nothing is shared between calls.
    """
    return score_team(build_ledger(deliveries), team)


def player_breakdown(ledger: dict[str, float], team: TeamEntry) -> list[dict[str, Any]]:
    """Per-player base points, multiplier and contribution, in roster order."""
    rows: list[dict[str, Any]] = []
    for player in team.players:
        base = ledger.get(player, 0)
        mult = player_multiplier(player, team)
        rows.append({
            "player": player,
            "base_points": base,
            "multiplier": mult,
            "points": base * mult,
            "is_captain": player == team.captain,
            "is_vice_captain": player == team.vice_captain,
        })
    return rows
