"""Database infrastructure for SQLite persistence."""

from authflow.infrastructure.database.connection import (
    Database,
    close_database,
    get_database,
    init_database,
)

__all__ = [
    "Database",
    "close_database",
    "get_database",
    "init_database",
]
