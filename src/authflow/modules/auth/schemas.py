"""Pydantic schemas for authentication API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """Public identity of a user (excludes sensitive data)."""

    id: int
    email: str


class LoginRequest(BaseModel):
    """Schema for login request.

    Fields are optional so that a missing field reaches the service and is
    reported as a 400 with a readable message rather than a schema error.
    """

    email: str | None = None
    password: str | None = None


class RegisterRequest(BaseModel):
    """Schema for registration request."""

    model_config = ConfigDict(populate_by_name=True)

    email: str | None = None
    password: str | None = None
    confirm_password: str | None = Field(default=None, alias="confirmPassword")


class AuthResult(BaseModel):
    """Token and identity produced by a successful login or registration."""

    token: str
    user: AuthUser


class AuthResponse(BaseModel):
    """Schema for a successful login or registration response."""

    success: bool = True
    token: str
    user: AuthUser
    message: str


class ErrorResponse(BaseModel):
    """Schema for every failed authentication response."""

    message: str


class TokenPayload(BaseModel):
    """Schema for JWT token payload."""

    id: int
    email: str
    exp: datetime  # Expiration time
    iat: datetime  # Issued at time
