"""
Service layer: orchestration between the pure validator/calculator and storage.
"""
from .contest_service import (
    ContestService,
    NoResultsError,
    TeamNotFoundError,
    TeamValidationError,
)
from .ports import ReferenceDataProvider, TeamStore

__all__ = [
    "ContestService",
    "NoResultsError",
    "TeamNotFoundError",
    "TeamValidationError",
    "ReferenceDataProvider",
    "TeamStore",
]
