"""SQLite storage for user accounts."""

import sqlite3
from pathlib import Path

import aiosqlite
import structlog

logger = structlog.get_logger()

# Email uniqueness is enforced here, not by callers
_CREATE_TABLES = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT UNIQUE NOT NULL,
    hashed_password TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);
"""


class Database:
    """One aiosqlite connection to the accounts database.

    Every statement is committed as it runs, so callers never observe a
    half-applied write.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._connection: aiosqlite.Connection | None = None

    @property
    def path(self) -> Path:
        return self._db_path

    async def connect(self) -> None:
        """Open the file, creating it and the users table if missing."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = await aiosqlite.connect(self._db_path)
        self._connection.row_factory = aiosqlite.Row

        await self._connection.executescript(_CREATE_TABLES)
        await self._connection.commit()

        logger.info("database_connected", path=str(self._db_path))

    async def disconnect(self) -> None:
        if self._connection:
            await self._connection.close()
            self._connection = None
            logger.info("database_disconnected", path=str(self._db_path))

    async def execute(
        self,
        sql: str,
        parameters: tuple[object, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """Run one statement and commit it.

        Raises:
            RuntimeError: If connect() has not been called.
            sqlite3.Error: If SQLite rejects the statement.
        """
        if not self._connection:
            raise RuntimeError("Database not connected")

        cursor = await self._connection.execute(sql, parameters or ())
        await self._connection.commit()
        return cursor

    async def fetch_one(
        self,
        sql: str,
        parameters: tuple[object, ...] | None = None,
    ) -> sqlite3.Row | None:
        """Run a query and return its first row, if any."""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()


# Shared instance owned by the application lifespan
_database: Database | None = None


def get_database() -> Database:
    """Return the database opened by init_database().

    Raises:
        RuntimeError: If the application has not opened it yet.
    """
    if _database is None:
        raise RuntimeError("Database not initialized. Call init_database first.")
    return _database


async def init_database(db_path: str | Path) -> Database:
    """Open the shared database at ``db_path``."""
    global _database
    _database = Database(db_path)
    await _database.connect()
    return _database


async def close_database() -> None:
    """Disconnect and forget the shared database."""
    global _database
    if _database is not None:
        await _database.disconnect()
        _database = None
