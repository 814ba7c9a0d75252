"""Authentication API routes."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from authflow.modules.auth.exceptions import (
    AuthError,
    CredentialValidationError,
    EmailTakenError,
    InternalAuthError,
    InvalidCredentialsError,
)
from authflow.modules.auth.schemas import (
    AuthResponse,
    AuthResult,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
)
from authflow.modules.auth.service import AuthService

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["authentication"])

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Most specific class wins; lookup walks the exception's MRO.
_STATUS_CODES: dict[type[AuthError], int] = {
    CredentialValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    EmailTakenError: status.HTTP_409_CONFLICT,
    InternalAuthError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid or missing input"},
    500: {"model": ErrorResponse, "description": "Unexpected server failure"},
    503: {"description": "Authentication service not configured"},
}


def get_auth_service(request: Request) -> AuthService:
    """Return the AuthService attached to the application at startup."""
    service: AuthService | None = getattr(request.app.state, "auth_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service not configured",
        )
    return service


def status_code_for(error: AuthError) -> int:
    """Map a domain error to its HTTP status code."""
    for cls in type(error).__mro__:
        if cls in _STATUS_CODES:
            return _STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(error: AuthError) -> JSONResponse:
    code = status_code_for(error)
    message = error.message if code < 500 else INTERNAL_ERROR_MESSAGE
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=code,
        content=ErrorResponse(message=message).model_dump(),
        headers=headers,
    )


def _internal_error_response(operation: str, error: Exception) -> JSONResponse:
    logger.error(
        "auth_request_failed",
        operation=operation,
        error=str(error),
        error_type=type(error).__name__,
        exc_info=error,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message=INTERNAL_ERROR_MESSAGE).model_dump(),
    )


def _success_response(result: AuthResult, message: str) -> JSONResponse:
    body = AuthResponse(token=result.token, user=result.user, message=message)
    return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump())


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        **_ERROR_RESPONSES,
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
    summary="Login with email and password",
    description="Authenticate and receive a JWT token.",
)
async def login(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Authenticate user and return JWT token.

    The body is parsed here rather than by FastAPI so that a malformed body
    is answered like any other unexpected failure.
    """
    try:
        data = LoginRequest.model_validate(await request.json())
        result = await auth_service.authenticate(data.email, data.password)
    except AuthError as e:
        return _error_response(e)
    except Exception as e:
        return _internal_error_response("login", e)

    return _success_response(result, "Login successful")


@router.post(
    "/register",
    response_model=AuthResponse,
    responses={
        **_ERROR_RESPONSES,
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
    summary="Register a new user",
    description="Create an account and receive a JWT token for it.",
)
async def register(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    """Register a new user and log them in."""
    try:
        data = RegisterRequest.model_validate(await request.json())
        result = await auth_service.register_account(
            data.email, data.password, data.confirm_password
        )
    except AuthError as e:
        return _error_response(e)
    except Exception as e:
        return _internal_error_response("register", e)

    return _success_response(result, "Account created successfully")
