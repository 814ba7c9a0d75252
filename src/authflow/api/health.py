"""Health check endpoints."""

from typing import Literal

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from authflow.config import Settings
from authflow.infrastructure.database import get_database

logger = structlog.get_logger()
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["healthy", "unhealthy"]
    version: str
    auth_configured: bool


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint with database verification.

    Raises:
        HTTPException: 503 if the database is unavailable.
    """
    try:
        db = get_database()
        await db.execute("SELECT 1")
    except Exception as e:
        logger.error("health_check_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=503,
            detail=f"Service unhealthy: {type(e).__name__}",
        ) from e

    settings: Settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        auth_configured=getattr(request.app.state, "auth_service", None) is not None,
    )
