"""Client-side session handling for the auth API."""

from authflow.client.api import ApiResponse, AuthApiClient
from authflow.client.form import AuthForm
from authflow.client.storage import FileStorage, KeyValueStorage, MemoryStorage
from authflow.client.store import (
    Action,
    Initialize,
    Login,
    Logout,
    Register,
    SessionState,
    SessionStatus,
    SessionStore,
    SessionUser,
    SetConfirmPassword,
    SetEmail,
    SetPassword,
)

__all__ = [
    "Action",
    "ApiResponse",
    "AuthApiClient",
    "AuthForm",
    "FileStorage",
    "Initialize",
    "KeyValueStorage",
    "Login",
    "Logout",
    "MemoryStorage",
    "Register",
    "SessionState",
    "SessionStatus",
    "SessionStore",
    "SessionUser",
    "SetConfirmPassword",
    "SetEmail",
    "SetPassword",
]
