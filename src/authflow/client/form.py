"""Headless sign-in / sign-up form logic.

Holds the view-only state a form needs on top of the session store:
which mode is shown, which fields were touched, field errors, password
strength feedback, and whether the user dismissed the current error.
Dismissing an error never touches the store.
"""

from dataclasses import dataclass, field

from authflow.client.store import SessionState, SessionStore
from authflow.modules.auth.validation import (
    PasswordStrength,
    validate_confirm_password,
    validate_email,
    validate_password_composition,
    validate_password_strength,
)

FIELDS = ("email", "password", "confirm_password")


@dataclass
class FieldErrors:
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = None

    def any(self) -> bool:
        return bool(self.email or self.password or self.confirm_password)


@dataclass
class AuthForm:
    """Form controller bound to a SessionStore."""

    store: SessionStore
    is_sign_up: bool = False
    touched: set[str] = field(default_factory=set)
    errors: FieldErrors = field(default_factory=FieldErrors)
    password_strength: PasswordStrength | None = None
    error_dismissed: bool = False

    @property
    def state(self) -> SessionState:
        return self.store.get_state()

    @property
    def title(self) -> str:
        return "Create Account" if self.is_sign_up else "Sign In"

    @property
    def display_error(self) -> str | None:
        """Store error to show, unless the user dismissed it."""
        if self.error_dismissed:
            return None
        return self.state.error

    @property
    def can_submit(self) -> bool:
        # confirm_password errors only exist in sign-up mode
        return not self.state.is_loading and not self.errors.any()

    def set_email(self, value: str) -> None:
        self.store.set_email(value)
        self.touch("email")

    def set_password(self, value: str) -> None:
        self.store.set_password(value)
        self.touch("password")

    def set_confirm_password(self, value: str) -> None:
        self.store.set_confirm_password(value)
        self.touch("confirm_password")

    def touch(self, name: str) -> None:
        """Mark a field as visited and refresh its feedback."""
        if name not in FIELDS:
            raise ValueError(f"Unknown field: {name}")
        self.touched.add(name)
        self._revalidate()

    def toggle_mode(self) -> None:
        """Switch between sign-in and sign-up, clearing all feedback."""
        self.is_sign_up = not self.is_sign_up
        self.errors = FieldErrors()
        self.touched.clear()
        self.password_strength = None
        self.error_dismissed = True

    def dismiss_error(self) -> None:
        self.error_dismissed = True

    async def submit(self) -> bool:
        """Validate every field, then log in or register.

        Returns:
            True if a request was sent to the store, False if validation
            stopped the submission.
        """
        state = self.state
        email_issue = validate_email(state.email)
        password_issue = validate_password_composition(state.password)
        confirm_issue = (
            validate_confirm_password(state.password, state.confirm_password)
            if self.is_sign_up
            else None
        )

        self.touched.update({"email", "password"})
        if self.is_sign_up:
            self.touched.add("confirm_password")
        self._revalidate()

        if email_issue or password_issue or confirm_issue:
            return False

        self.error_dismissed = False
        if self.is_sign_up:
            await self.store.register()
        else:
            await self.store.login()
        return True

    def _revalidate(self) -> None:
        state = self.state
        if "email" in self.touched:
            issue = validate_email(state.email)
            self.errors.email = issue.message if issue else None
        if "password" in self.touched:
            issue = validate_password_composition(state.password)
            self.errors.password = issue.message if issue else None
            self.password_strength = validate_password_strength(state.password)
        if "confirm_password" in self.touched and self.is_sign_up:
            issue = validate_confirm_password(state.password, state.confirm_password)
            self.errors.confirm_password = issue.message if issue else None
