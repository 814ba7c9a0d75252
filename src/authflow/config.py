"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

import structlog
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()

# Development-only signing secret. Production must set JWT_SECRET_KEY.
DEV_FALLBACK_JWT_SECRET = "default-secret-key"  # nosec B105


class ConfigurationError(Exception):
    """Raised when required configuration is missing or unsafe."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "authflow"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "production"] = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_path: str = "./data/authflow.db"

    # Authentication
    jwt_secret_key: SecretStr | None = None  # Secret for JWT signing
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60  # Token expiration in minutes
    bcrypt_rounds: int = 10  # bcrypt work factor

    # Session client
    api_base_url: str = "http://localhost:8000"
    session_file: str = "./data/session.json"  # Durable client storage
    client_timeout_seconds: float | None = None  # None waits indefinitely

    # Observability
    tracing_enabled: bool = False
    otlp_endpoint: str | None = None  # e.g. "http://localhost:4318"
    trace_console_export: bool = False
    trace_sample_rate: float = 1.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def resolve_jwt_secret(settings: Settings) -> str:
    """Return the JWT signing secret for the current environment.

    Args:
        settings: Application settings.

    Returns:
        The configured secret, or the development fallback outside production.

    Raises:
        ConfigurationError: If no secret is configured in production.
    """
    if settings.jwt_secret_key is not None:
        secret = settings.jwt_secret_key.get_secret_value()
        if secret:
            return secret

    if settings.environment == "production":
        raise ConfigurationError("JWT_SECRET_KEY must be set in production")

    logger.warning(
        "jwt_secret_fallback_in_use",
        environment=settings.environment,
        hint="set JWT_SECRET_KEY before deploying",
    )
    return DEV_FALLBACK_JWT_SECRET
