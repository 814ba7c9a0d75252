"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from authflow.api.health import router as health_router
from authflow.config import Settings, get_settings
from authflow.infrastructure.database import close_database, init_database
from authflow.infrastructure.observability import (
    configure_logging,
    init_observability,
    shutdown_observability,
)
from authflow.modules.auth.repository import UserRepository
from authflow.modules.auth.routes import router as auth_api_router
from authflow.modules.auth.service import build_auth_service

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings

    database = await init_database(settings.database_path)
    try:
        app.state.auth_service = build_auth_service(UserRepository(database), settings)
        logger.info("auth_service_initialized", environment=settings.environment)
        yield
    finally:
        app.state.auth_service = None
        await close_database()
        shutdown_observability()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(debug=settings.debug)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    application.state.settings = settings

    init_observability(
        settings.app_name,
        settings.app_version,
        otlp_endpoint=settings.otlp_endpoint,
        console_export=settings.trace_console_export,
        enabled=settings.tracing_enabled,
        sample_rate=settings.trace_sample_rate,
        app=application,
    )

    application.include_router(health_router, prefix="/health", tags=["health"])
    application.include_router(auth_api_router)
    return application


app = create_app()
