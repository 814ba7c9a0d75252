"""Client session store.

An explicit state container for one client session. Create one per
session and pass it where it is needed; nothing here is global.

State changes go through ``dispatch`` (or the matching convenience
methods). Subscribers are called with the new state after every change.
Only one login or register call should be in flight at a time; the store
does not serialize them itself.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

import structlog

from authflow.client.api import ApiResponse, AuthApiClient
from authflow.client.storage import KeyValueStorage

logger = structlog.get_logger()

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionStatus(Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    ANONYMOUS_WITH_ERROR = "anonymous_with_error"


@dataclass(frozen=True)
class SessionUser:
    """Identity of the signed-in user."""

    id: int
    email: str

    @classmethod
    def from_dict(cls, data: Any) -> "SessionUser":
        """Build from a decoded ``{id, email}`` object.

        Raises:
            ValueError: If the object does not describe a user.
        """
        if not isinstance(data, dict):
            raise ValueError("User data must be an object")
        user_id = data.get("id")
        email = data.get("email")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise ValueError("User id must be an integer")
        if not isinstance(email, str):
            raise ValueError("User email must be a string")
        return cls(id=user_id, email=email)

    def to_json(self) -> str:
        return json.dumps({"id": self.id, "email": self.email})


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the session and the credentials being entered."""

    email: str = ""
    password: str = ""
    confirm_password: str = ""
    is_loading: bool = False
    is_logged_in: bool = False
    user: SessionUser | None = None
    token: str | None = None
    error: str | None = None

    @property
    def status(self) -> SessionStatus:
        if self.is_loading:
            return SessionStatus.AUTHENTICATING
        if self.is_logged_in:
            return SessionStatus.AUTHENTICATED
        if self.error:
            return SessionStatus.ANONYMOUS_WITH_ERROR
        return SessionStatus.ANONYMOUS


@dataclass(frozen=True)
class SetEmail:
    email: str


@dataclass(frozen=True)
class SetPassword:
    password: str


@dataclass(frozen=True)
class SetConfirmPassword:
    confirm_password: str


@dataclass(frozen=True)
class Login:
    pass


@dataclass(frozen=True)
class Register:
    pass


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class Initialize:
    pass


Action = SetEmail | SetPassword | SetConfirmPassword | Login | Register | Logout | Initialize
Listener = Callable[[SessionState], None]


class SessionStore:
    """State machine for login, registration, logout and restore."""

    def __init__(
        self,
        api: AuthApiClient,
        storage: KeyValueStorage,
        *,
        initial_state: SessionState | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            api: Client for the auth endpoints.
            storage: Durable storage for the token and user.
            initial_state: Starting state; defaults to an empty session.
        """
        self._api = api
        self._storage = storage
        self._state = initial_state or SessionState()
        self._listeners: list[Listener] = []

    def get_state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state changes.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def dispatch(self, action: Action) -> SessionState:
        """Apply an action and return the resulting state."""
        match action:
            case SetEmail(email=email):
                self.set_email(email)
            case SetPassword(password=password):
                self.set_password(password)
            case SetConfirmPassword(confirm_password=confirm_password):
                self.set_confirm_password(confirm_password)
            case Login():
                await self.login()
            case Register():
                await self.register()
            case Logout():
                self.logout()
            case Initialize():
                self.initialize()
            case _:
                raise TypeError(f"Unknown action: {action!r}")
        return self._state

    def set_email(self, email: str) -> None:
        self._set(email=email)

    def set_password(self, password: str) -> None:
        self._set(password=password)

    def set_confirm_password(self, confirm_password: str) -> None:
        self._set(confirm_password=confirm_password)

    async def login(self) -> None:
        """Submit the current email and password to the login endpoint."""
        state = self._state
        await self._authenticate("login", lambda: self._api.login(state.email, state.password))

    async def register(self) -> None:
        """Submit the current credentials to the register endpoint.

        Success logs the new account in, exactly like login.
        """
        state = self._state
        await self._authenticate(
            "register",
            lambda: self._api.register(state.email, state.password, state.confirm_password),
        )

    def logout(self) -> None:
        """Forget the session in memory and in durable storage."""
        self._storage.remove_item(TOKEN_KEY)
        self._storage.remove_item(USER_KEY)
        self._set(
            is_logged_in=False,
            user=None,
            token=None,
            email="",
            password="",
            confirm_password="",
        )
        logger.info("session_logged_out")

    def initialize(self) -> None:
        """Restore a session saved by a previous run.

        Nothing happens unless both the token and the user are stored.
        Stored data that cannot be parsed is treated as corrupt: it is
        removed and the session stays anonymous without an error.
        """
        token = self._storage.get_item(TOKEN_KEY)
        user_json = self._storage.get_item(USER_KEY)
        if not token or not user_json:
            return

        try:
            user = SessionUser.from_dict(json.loads(user_json))
        except ValueError as e:
            logger.warning("session_restore_failed", error=str(e))
            self._storage.remove_item(TOKEN_KEY)
            self._storage.remove_item(USER_KEY)
            self._set(is_logged_in=False, token=None, user=None)
            return

        self._set(is_logged_in=True, token=token, user=user)
        logger.info("session_restored", user_id=user.id)

    async def _authenticate(
        self,
        operation: str,
        call: Callable[[], Awaitable[ApiResponse]],
    ) -> None:
        self._set(is_loading=True, error=None)

        try:
            response = await call()
        except asyncio.CancelledError:
            self._set(is_loading=False)
            raise
        except Exception as e:
            logger.warning(
                "session_request_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._reject(str(e) or type(e).__name__)
            return

        if not response.ok:
            logger.info(
                "session_request_rejected",
                operation=operation,
                status_code=response.status_code,
            )
            self._reject(response.message)
            return

        try:
            token = response.data["token"]
            user = SessionUser.from_dict(response.data.get("user"))
            if not isinstance(token, str) or not token:
                raise ValueError("Response token must be a non-empty string")
        except (KeyError, ValueError) as e:
            logger.warning("session_response_invalid", operation=operation, error=str(e))
            self._reject("Unexpected response from server")
            return

        try:
            self._storage.set_item(TOKEN_KEY, token)
            self._storage.set_item(USER_KEY, user.to_json())
        except Exception as e:
            logger.error(
                "session_persist_failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._reject("Could not save session")
            return

        self._set(
            is_loading=False,
            is_logged_in=True,
            user=user,
            token=token,
            error=None,
            email="",
            password="",
            confirm_password="",
        )
        logger.info("session_authenticated", operation=operation, user_id=user.id)

    def _reject(self, message: str) -> None:
        self._set(
            is_loading=False,
            error=message,
            is_logged_in=False,
            user=None,
            token=None,
        )

    def _set(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)
