"""User repository for database operations."""

import sqlite3
from datetime import UTC, datetime
from typing import Protocol

import structlog

from authflow.infrastructure.database import Database
from authflow.modules.auth.exceptions import EmailTakenError
from authflow.modules.auth.models import User

logger = structlog.get_logger()


class UserStore(Protocol):
    """The two datastore operations the credential service relies on.

    Implementations must enforce email uniqueness on ``create`` by raising
    EmailTakenError, even when a concurrent caller won the race.
    """

    async def get_by_email(self, email: str) -> User | None: ...

    async def create(self, email: str, hashed_password: str) -> User: ...


class UserRepository:
    """SQLite-backed UserStore.

    Emails are stored and matched exactly as submitted.
    """

    def __init__(self, database: Database) -> None:
        """Initialize the repository.

        Args:
            database: Database connection.
        """
        self._db = database

    async def create(self, email: str, hashed_password: str) -> User:
        """Create a new user.

        Args:
            email: User's email address.
            hashed_password: bcrypt hash of the password.

        Returns:
            The created User with its assigned id.

        Raises:
            EmailTakenError: If email already exists.
        """
        now = datetime.now(UTC).isoformat()

        try:
            cursor = await self._db.execute(
                """
                INSERT INTO users (email, hashed_password, created_at)
                VALUES (?, ?, ?)
                """,
                (email, hashed_password, now),
            )
        except sqlite3.IntegrityError as e:
            if "UNIQUE constraint failed" in str(e):
                raise EmailTakenError(email) from e
            raise

        user_id = cursor.lastrowid
        if user_id is None:
            raise RuntimeError("Insert did not return a row id")

        logger.info("user_created", user_id=user_id, email=email)

        return User(
            id=user_id,
            email=email,
            hashed_password=hashed_password,
            created_at=datetime.fromisoformat(now),
        )

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email.

        Args:
            email: The user's email address.

        Returns:
            User if found, None otherwise.
        """
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE email = ?",
            (email,),
        )

        if row is None:
            return None

        return User.from_row(dict(row))

    async def first(self) -> User | None:
        """Return the earliest created user, if any."""
        row = await self._db.fetch_one("SELECT * FROM users ORDER BY id LIMIT 1")
        return User.from_row(dict(row)) if row else None

    async def count(self) -> int:
        """Count total users.

        Returns:
            Number of users.
        """
        row = await self._db.fetch_one("SELECT COUNT(*) as count FROM users")
        return int(row["count"]) if row else 0

    async def delete_all(self) -> int:
        """Delete every user.

        Returns:
            Number of users removed.
        """
        cursor = await self._db.execute("DELETE FROM users")
        deleted = cursor.rowcount
        logger.info("users_deleted", count=deleted)
        return deleted
