"""HTTP client for the authentication endpoints."""

from dataclasses import dataclass, field
from typing import Any

import httpx

LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"


@dataclass(frozen=True)
class ApiResponse:
    """Decoded response from an auth endpoint.

    Attributes:
        ok: True for a 2xx status.
        status_code: HTTP status code.
        data: JSON object returned by the server.
    """

    ok: bool
    status_code: int
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        """Server-provided message, or a generic one naming the status."""
        message = self.data.get("message")
        if isinstance(message, str) and message:
            return message
        return f"Request failed with status {self.status_code}"


class AuthApiClient:
    """Calls the login and register endpoints.

    Transport failures (httpx.HTTPError) and non-JSON bodies (ValueError)
    propagate to the caller; no retries are attempted.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """Initialize the client.

        Args:
            http_client: Client configured with the server's base URL.
        """
        self._http = http_client

    @classmethod
    def create(cls, base_url: str, *, timeout: float | None = None) -> "AuthApiClient":
        """Build a client with its own connection pool.

        Args:
            base_url: Server root, e.g. "http://localhost:8000".
            timeout: Seconds before a request is abandoned; None waits forever.
        """
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def login(self, email: str, password: str) -> ApiResponse:
        return await self._post(LOGIN_PATH, {"email": email, "password": password})

    async def register(self, email: str, password: str, confirm_password: str) -> ApiResponse:
        return await self._post(
            REGISTER_PATH,
            {"email": email, "password": password, "confirmPassword": confirm_password},
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _post(self, path: str, payload: dict[str, str]) -> ApiResponse:
        response = await self._http.post(path, json=payload)
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response body from {path}")
        return ApiResponse(ok=response.is_success, status_code=response.status_code, data=data)
