"""Fantasy cricket backend: roster validation and ball-by-ball scoring for one match."""

from .models import BallEvent, Player, PlayerNotFoundError, ReferenceDataError, Role, TeamEntry
from .scoring import build_ledger, compute_team_score
from .validation import ValidationResult, Violation, validate_team

__all__ = [
    "BallEvent",
    "Player",
    "PlayerNotFoundError",
    "ReferenceDataError",
    "Role",
    "TeamEntry",
    "ValidationResult",
    "Violation",
    "build_ledger",
    "compute_team_score",
    "validate_team",
]
