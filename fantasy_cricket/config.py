"""
Process configuration from environment variables (.env supported).
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, "1" if default else "0").lower()
    return raw in ("1", "true", "yes", "on")


@dataclass
class Settings:
    db_path: Path
    players_path: Path
    match_path: Path
    seed_on_startup: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            db_path=Path(_get_env("FANTASY_DB_PATH", str(DATA_DIR / "app.db"))),
            players_path=Path(_get_env("FANTASY_PLAYERS_PATH", str(DATA_DIR / "players.json"))),
            match_path=Path(_get_env("FANTASY_MATCH_PATH", str(DATA_DIR / "match.json"))),
            seed_on_startup=_get_env_bool("FANTASY_SEED_ON_STARTUP", True),
            log_level=_get_env("FANTASY_LOG_LEVEL", "INFO").upper(),
        )


def validate_settings(settings: Settings) -> None:
    if settings.log_level not in _LOG_LEVELS:
        raise RuntimeError(f"FANTASY_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
    if settings.seed_on_startup:
        for path in (settings.players_path, settings.match_path):
            if not path.is_file():
                raise RuntimeError(f"Seed file not found: {path}")


def setup_logging(level: str = "INFO") -> None:
    """Configure logging to output to stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
