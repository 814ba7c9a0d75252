"""Shared fixtures for authflow tests."""

import tempfile
from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime
from pathlib import Path

import httpx
import pytest

from authflow.client.api import AuthApiClient
from authflow.infrastructure.database import Database
from authflow.modules.auth.models import User
from authflow.modules.auth.password import hash_password
from authflow.modules.auth.repository import UserRepository
from authflow.modules.auth.service import AuthService
from authflow.modules.auth.tokens import TokenIssuer

TEST_SECRET = "test-secret-key-for-testing-only"
# Lowest bcrypt work factor keeps the suite fast
TEST_ROUNDS = 4


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """Create a temporary test database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db = Database(Path(tmpdir) / "test.db")
        await db.connect()
        yield db
        await db.disconnect()


@pytest.fixture
async def repository(database: Database) -> UserRepository:
    """Create a user repository with test database."""
    return UserRepository(database)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, expire_minutes=60)


@pytest.fixture
async def auth_service(repository: UserRepository, token_issuer: TokenIssuer) -> AuthService:
    """Create an auth service backed by the test database."""
    return AuthService(repository, token_issuer, bcrypt_rounds=TEST_ROUNDS)


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Build a User whose hash matches the given password."""

    def _make(
        user_id: int = 1,
        email: str = "test@example.com",
        password: str = "Password123!",
    ) -> User:
        return User(
            id=user_id,
            email=email,
            hashed_password=hash_password(password, rounds=TEST_ROUNDS),
            created_at=datetime.now(UTC),
        )

    return _make


@pytest.fixture
def mock_api() -> Callable[[Callable[[httpx.Request], object]], AuthApiClient]:
    """Build an AuthApiClient whose requests are answered by ``handler``."""

    def _make(handler: Callable[[httpx.Request], object]) -> AuthApiClient:
        transport = httpx.MockTransport(handler)  # type: ignore[arg-type]
        return AuthApiClient(httpx.AsyncClient(transport=transport, base_url="http://test"))

    return _make
