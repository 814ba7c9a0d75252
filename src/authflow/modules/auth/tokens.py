"""JWT issuance and verification."""

from datetime import UTC, datetime, timedelta

import jwt
import structlog

from authflow.modules.auth.exceptions import InvalidTokenError
from authflow.modules.auth.schemas import AuthUser, TokenPayload

logger = structlog.get_logger()


class TokenIssuer:
    """Signs and verifies bearer tokens carrying ``{id, email}``."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ) -> None:
        """Initialize the issuer.

        Args:
            secret: Secret key for JWT signing.
            algorithm: Algorithm for JWT signing.
            expire_minutes: Minutes until token expiration.

        Raises:
            ValueError: If the secret is empty.
        """
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self._expire_minutes * 60

    def issue(self, user: AuthUser) -> str:
        """Create a signed token for a user.

        Args:
            user: Identity to embed.

        Returns:
            Encoded JWT string.
        """
        now = datetime.now(UTC)
        expires = now + timedelta(minutes=self._expire_minutes)

        # JWT requires integer timestamps for exp and iat
        payload = {
            "id": user.id,
            "email": user.email,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenPayload:
        """Verify and decode a token.

        Args:
            token: JWT token string.

        Returns:
            Decoded token payload.

        Raises:
            InvalidTokenError: If the token is invalid or expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
            return TokenPayload(
                id=payload["id"],
                email=payload["email"],
                exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
                iat=datetime.fromtimestamp(payload["iat"], tz=UTC),
            )

        except jwt.ExpiredSignatureError as e:
            logger.warning("token_expired")
            raise InvalidTokenError("Token has expired") from e

        except (jwt.InvalidTokenError, KeyError) as e:
            logger.warning("token_invalid", error=str(e))
            raise InvalidTokenError("Invalid token") from e
