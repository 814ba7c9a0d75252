"""User domain model."""

from dataclasses import dataclass
from datetime import datetime

from authflow.modules.auth.schemas import AuthUser


@dataclass
class User:
    """A registered account.

    Attributes:
        id: Unique user identifier assigned by the datastore.
        email: User's email address (unique, used for login).
        hashed_password: bcrypt hash of the password.
        created_at: When the user was created.
    """

    id: int
    email: str
    hashed_password: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, object]) -> "User":
        """Create a User from a database row.

        Args:
            row: Database row as a dictionary.

        Returns:
            User instance.
        """
        return cls(
            id=int(str(row["id"])),
            email=str(row["email"]),
            hashed_password=str(row["hashed_password"]),
            created_at=datetime.fromisoformat(str(row["created_at"])),
        )

    def to_public(self) -> AuthUser:
        """Identity safe to return to clients and embed in tokens."""
        return AuthUser(id=self.id, email=self.email)
