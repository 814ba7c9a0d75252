"""Authentication exceptions.

Every exception carries the message that is safe to show to a client.
Internal failures keep their cause on ``__cause__`` for logging only.
"""


class AuthError(Exception):
    """Base exception for authentication operations."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CredentialValidationError(AuthError):
    """Raised when submitted credentials fail validation."""


class MissingFieldsError(CredentialValidationError):
    """Raised when a required credential field is empty."""


class InvalidEmailFormatError(CredentialValidationError):
    """Raised when the email does not look like local@domain.tld."""

    def __init__(self) -> None:
        super().__init__("Please enter a valid email address")


class WeakPasswordError(CredentialValidationError):
    """Raised when the password is shorter than the minimum length."""

    def __init__(self) -> None:
        super().__init__("Password must be at least 8 characters")


class PasswordMismatchError(CredentialValidationError):
    """Raised when password and confirmation differ."""

    def __init__(self) -> None:
        super().__init__("Passwords do not match")


class InvalidCredentialsError(AuthError):
    """Raised for an unknown email or a wrong password.

    Both cases share one message so callers cannot enumerate accounts.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class EmailTakenError(AuthError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str | None = None) -> None:
        self.email = email
        super().__init__("An account with this email already exists")


class InvalidTokenError(AuthError):
    """Raised when a token is malformed, tampered with, or expired."""


class InternalAuthError(AuthError):
    """Raised when the datastore, hashing, or signing fails unexpectedly."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__("Internal server error")
