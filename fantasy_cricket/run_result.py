"""
Process the match result for every stored team and print the standings.
Run from project root: python -m fantasy_cricket.run_result
"""
from __future__ import annotations

import argparse
from pathlib import Path

from fantasy_cricket.config import Settings, setup_logging
from fantasy_cricket.models import TeamEntry
from fantasy_cricket.persistence import get_connection, init_db
from fantasy_cricket.services import ContestService, NoResultsError


def _ensure_db(settings: Settings, seed: bool) -> None:
    if seed:
        if not settings.players_path.exists():
            raise SystemExit(f"Players file not found: {settings.players_path}")
        if not settings.match_path.exists():
            raise SystemExit(f"Match file not found: {settings.match_path}")
        init_db(settings.db_path, settings.players_path, settings.match_path)
    else:
        init_db(settings.db_path)


def _print_standings(teams: list[TeamEntry], winners: list[TeamEntry]) -> None:
    winner_ids = {t.id for t in winners}
    ranked = sorted(teams, key=lambda t: t.total_points or 0, reverse=True)
    print()
    print("=" * 60)
    print("  MATCH RESULT: fantasy standings")
    print("=" * 60)
    for pos, team in enumerate(ranked, start=1):
        mark = "*" if team.id in winner_ids else " "
        print(f" {mark}{pos:>3}. {team.name:<36} {team.total_points:>8.1f}  (C {team.captain}, VC {team.vice_captain})")
    print()
    names = ", ".join(t.name for t in winners)
    print(f"  Winner{'s' if len(winners) > 1 else ''}: {names}  [{winners[0].total_points:.1f} pts]")
    print()


def run(db_path: Path | None = None, seed: bool = True) -> None:
    settings = Settings.from_env()
    if db_path is not None:
        settings.db_path = db_path
    _ensure_db(settings, seed)

    service = ContestService()
    conn = get_connection(settings.db_path)
    try:
        teams = service.process_result(conn)
        try:
            winners = service.get_winners(conn)
        except NoResultsError:
            print("\n  No teams entered; nothing to score.\n")
            return
    finally:
        conn.close()
    _print_standings(teams, winners)


def main():
    parser = argparse.ArgumentParser(description="Score all stored fantasy teams against the match.")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path")
    parser.add_argument("--no-seed", action="store_true", help="Do not reload players/match from the seed files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()
    setup_logging("DEBUG" if args.verbose else "WARNING")
    run(db_path=args.db, seed=not args.no_seed)


if __name__ == "__main__":
    main()
