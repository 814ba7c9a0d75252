"""Credential service: login and registration."""

import asyncio

import structlog

from authflow.config import Settings, resolve_jwt_secret
from authflow.infrastructure.observability import traced
from authflow.modules.auth.exceptions import (
    EmailTakenError,
    InternalAuthError,
    InvalidCredentialsError,
    InvalidEmailFormatError,
    MissingFieldsError,
    PasswordMismatchError,
    WeakPasswordError,
)
from authflow.modules.auth.models import User
from authflow.modules.auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from authflow.modules.auth.repository import UserStore
from authflow.modules.auth.schemas import AuthResult, TokenPayload
from authflow.modules.auth.tokens import TokenIssuer
from authflow.modules.auth.validation import (
    CredentialIssue,
    validate_email,
    validate_password,
)

logger = structlog.get_logger()


class AuthService:
    """Service for authentication operations.

    Orchestrates validation, hashing, the user store, and token issuance.
    Domain rejections are raised as AuthError subclasses; anything else
    that goes wrong is logged and re-raised as InternalAuthError.
    """

    def __init__(
        self,
        store: UserStore,
        token_issuer: TokenIssuer,
        *,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        """Initialize the auth service.

        Args:
            store: Datastore for user lookup and creation.
            token_issuer: Signs tokens for authenticated users.
            bcrypt_rounds: Work factor for new password hashes.
        """
        self._store = store
        self._tokens = token_issuer
        self._bcrypt_rounds = bcrypt_rounds

    @traced("auth.authenticate")
    async def authenticate(self, email: str | None, password: str | None) -> AuthResult:
        """Authenticate a user by email and password.

        Args:
            email: User's email address.
            password: Plain text password.

        Returns:
            AuthResult with a fresh token and the user's identity.

        Raises:
            MissingFieldsError: If either field is empty.
            InvalidCredentialsError: If the user is unknown or the password is wrong.
            InternalAuthError: If the datastore or signing fails.
        """
        if not email or not password:
            raise MissingFieldsError("Email and password are required")

        try:
            user = await self._store.get_by_email(email)
        except Exception as e:
            raise self._internal_error("authenticate", e) from e

        if user is None:
            logger.warning("auth_failed_user_not_found", email=email)
            raise InvalidCredentialsError()

        if not await self._password_matches(password, user):
            logger.warning("auth_failed_invalid_password", email=email)
            raise InvalidCredentialsError()

        result = self._issue_token(user, "authenticate")
        logger.info("user_authenticated", user_id=user.id, email=email)
        return result

    @traced("auth.register")
    async def register_account(
        self,
        email: str | None,
        password: str | None,
        confirm_password: str | None,
    ) -> AuthResult:
        """Register a new account and log it in.

        Args:
            email: Email address for the new account.
            password: Plain text password.
            confirm_password: Repeated password.

        Returns:
            AuthResult for the newly created user.

        Raises:
            MissingFieldsError: If any field is empty.
            InvalidEmailFormatError: If the email is malformed.
            WeakPasswordError: If the password is under 8 characters.
            PasswordMismatchError: If the confirmation differs.
            EmailTakenError: If the email already has an account.
            InternalAuthError: If the datastore, hashing or signing fails.
        """
        if not email or not password or not confirm_password:
            raise MissingFieldsError("Email, password, and confirm password are required")

        if validate_email(email) is not None:
            raise InvalidEmailFormatError()

        # Composition rules are advisory and enforced by the client form only
        if validate_password(password) is CredentialIssue.PASSWORD_TOO_SHORT:
            raise WeakPasswordError()

        if password != confirm_password:
            raise PasswordMismatchError()

        try:
            existing = await self._store.get_by_email(email)
        except Exception as e:
            raise self._internal_error("register", e) from e

        if existing is not None:
            logger.info("registration_rejected_email_taken", email=email)
            raise EmailTakenError(email)

        try:
            hashed = await asyncio.to_thread(hash_password, password, self._bcrypt_rounds)
            user = await self._store.create(email, hashed)
        except EmailTakenError:
            # A concurrent registration created the account first
            logger.info("registration_lost_race", email=email)
            raise
        except Exception as e:
            raise self._internal_error("register", e) from e

        result = self._issue_token(user, "register")
        logger.info("user_registered", user_id=user.id, email=email)
        return result

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a token issued by this service.

        Raises:
            InvalidTokenError: If the token is invalid or expired.
        """
        return self._tokens.decode(token)

    async def _password_matches(self, password: str, user: User) -> bool:
        # A hash that cannot be checked counts as a mismatch
        try:
            return await asyncio.to_thread(verify_password, password, user.hashed_password)
        except Exception as e:
            logger.warning(
                "password_verification_error",
                user_id=user.id,
                error_type=type(e).__name__,
            )
            return False

    def _issue_token(self, user: User, operation: str) -> AuthResult:
        public = user.to_public()
        try:
            token = self._tokens.issue(public)
        except Exception as e:
            raise self._internal_error(operation, e) from e
        return AuthResult(token=token, user=public)

    @staticmethod
    def _internal_error(operation: str, error: Exception) -> InternalAuthError:
        logger.error(
            "auth_internal_error",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
        )
        return InternalAuthError(operation)


def build_auth_service(store: UserStore, settings: Settings) -> AuthService:
    """Wire the credential service from settings.

    Raises:
        ConfigurationError: If no JWT secret is set in production.
    """
    issuer = TokenIssuer(
        resolve_jwt_secret(settings),
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_expire_minutes,
    )
    return AuthService(store, issuer, bcrypt_rounds=settings.bcrypt_rounds)
