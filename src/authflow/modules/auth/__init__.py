"""Authentication module: credential validation, login and registration."""

from authflow.modules.auth.exceptions import (
    AuthError,
    CredentialValidationError,
    EmailTakenError,
    InternalAuthError,
    InvalidCredentialsError,
    InvalidEmailFormatError,
    InvalidTokenError,
    MissingFieldsError,
    PasswordMismatchError,
    WeakPasswordError,
)
from authflow.modules.auth.models import User
from authflow.modules.auth.password import hash_password, verify_password
from authflow.modules.auth.repository import UserRepository, UserStore
from authflow.modules.auth.schemas import (
    AuthResponse,
    AuthResult,
    AuthUser,
    LoginRequest,
    RegisterRequest,
    TokenPayload,
)
from authflow.modules.auth.service import AuthService
from authflow.modules.auth.tokens import TokenIssuer

__all__ = [
    "AuthError",
    "AuthResponse",
    "AuthResult",
    "AuthService",
    "AuthUser",
    "CredentialValidationError",
    "EmailTakenError",
    "InternalAuthError",
    "InvalidCredentialsError",
    "InvalidEmailFormatError",
    "InvalidTokenError",
    "LoginRequest",
    "MissingFieldsError",
    "PasswordMismatchError",
    "RegisterRequest",
    "TokenIssuer",
    "TokenPayload",
    "User",
    "UserRepository",
    "UserStore",
    "WeakPasswordError",
    "hash_password",
    "verify_password",
]
