"""Credential validation rules.

Pure functions shared by the registration endpoint and the client form.
Each ``validate_*`` function returns the first issue found, or None.
"""

import re
from dataclasses import dataclass
from enum import Enum

MIN_PASSWORD_LENGTH = 8

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LOWERCASE = re.compile(r"[a-z]")
_UPPERCASE = re.compile(r"[A-Z]")
_NUMBER = re.compile(r"\d")
_SPECIAL = re.compile(r"""[!@#$%^&*()_+={}\[\]|:;"'<>?,./]""")


class CredentialIssue(Enum):
    """A validation failure and its user-facing message."""

    EMPTY_EMAIL = "Email is required"
    INVALID_EMAIL_FORMAT = "Please enter a valid email address"
    EMPTY_PASSWORD = "Password is required"
    PASSWORD_TOO_SHORT = "Password must be at least 8 characters"
    MISSING_LOWERCASE = "Password must contain lowercase letter"
    MISSING_UPPERCASE = "Password must contain uppercase letter"
    MISSING_NUMBER = "Password must contain number"
    MISSING_SPECIAL = "Password must contain special character"
    MISSING_CONFIRM_PASSWORD = "Confirm password is required"
    PASSWORD_MISMATCH = "Passwords do not match"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class PasswordStrength:
    """Advisory strength feedback for a password.

    Attributes:
        score: Number of satisfied requirements (0-5).
        label: "Weak", "Fair", "Good" or "Strong".
        requirements: Requirement name to whether it is met, in display order.
    """

    score: int
    label: str
    requirements: dict[str, bool]


def validate_email(email: str) -> CredentialIssue | None:
    if not email:
        return CredentialIssue.EMPTY_EMAIL
    if not _EMAIL_PATTERN.match(email):
        return CredentialIssue.INVALID_EMAIL_FORMAT
    return None


def validate_password(password: str) -> CredentialIssue | None:
    if not password:
        return CredentialIssue.EMPTY_PASSWORD
    if len(password) < MIN_PASSWORD_LENGTH:
        return CredentialIssue.PASSWORD_TOO_SHORT
    return None


def validate_password_composition(password: str) -> CredentialIssue | None:
    """Validate length plus the sign-up composition rules.

    Checks run in order: presence, length, lowercase, uppercase, number,
    special character. Only the first failure is reported.
    """
    issue = validate_password(password)
    if issue is not None:
        return issue
    if not _LOWERCASE.search(password):
        return CredentialIssue.MISSING_LOWERCASE
    if not _UPPERCASE.search(password):
        return CredentialIssue.MISSING_UPPERCASE
    if not _NUMBER.search(password):
        return CredentialIssue.MISSING_NUMBER
    if not _SPECIAL.search(password):
        return CredentialIssue.MISSING_SPECIAL
    return None


def validate_confirm_password(password: str, confirm_password: str) -> CredentialIssue | None:
    if not confirm_password:
        return CredentialIssue.MISSING_CONFIRM_PASSWORD
    if password != confirm_password:
        return CredentialIssue.PASSWORD_MISMATCH
    return None


def validate_password_strength(password: str) -> PasswordStrength:
    """Score a password against the five composition requirements."""
    requirements = {
        "length": len(password) >= MIN_PASSWORD_LENGTH,
        "lowercase": bool(_LOWERCASE.search(password)),
        "uppercase": bool(_UPPERCASE.search(password)),
        "number": bool(_NUMBER.search(password)),
        "special": bool(_SPECIAL.search(password)),
    }
    score = sum(requirements.values())

    if score < 2:
        label = "Weak"
    elif score < 4:
        label = "Fair"
    elif score < 6:
        label = "Good"
    else:
        label = "Strong"

    return PasswordStrength(score=score, label=label, requirements=requirements)
