"""
Persistence layer for fantasy data.
Storage only: connections, schema and repositories.
"""
from .db import get_connection, get_db_path, init_db, set_db_path
from .repositories import TeamRepository

__all__ = [
    "get_connection",
    "get_db_path",
    "init_db",
    "set_db_path",
    "TeamRepository",
]
