"""Tests for application configuration."""

import pytest

from authflow.config import (
    DEV_FALLBACK_JWT_SECRET,
    ConfigurationError,
    Settings,
    resolve_jwt_secret,
)


class TestSettings:
    """Tests for Settings defaults and environment loading."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JWT_EXPIRE_MINUTES", raising=False)
        monkeypatch.delenv("BCRYPT_ROUNDS", raising=False)

        settings = Settings(_env_file=None)

        assert settings.jwt_expire_minutes == 60
        assert settings.bcrypt_rounds == 10
        assert settings.client_timeout_seconds is None

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JWT_SECRET_KEY", "from-env")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.environment == "production"
        assert resolve_jwt_secret(settings) == "from-env"


class TestResolveJwtSecret:
    """Tests for resolve_jwt_secret."""

    def test_configured_secret(self) -> None:
        settings = Settings(_env_file=None, jwt_secret_key="configured")

        assert resolve_jwt_secret(settings) == "configured"

    @pytest.mark.parametrize("secret", [None, ""])
    def test_development_fallback(self, secret: str | None) -> None:
        settings = Settings(_env_file=None, jwt_secret_key=secret, environment="development")

        assert resolve_jwt_secret(settings) == DEV_FALLBACK_JWT_SECRET

    @pytest.mark.parametrize("secret", [None, ""])
    def test_production_requires_secret(self, secret: str | None) -> None:
        settings = Settings(_env_file=None, jwt_secret_key=secret, environment="production")

        with pytest.raises(ConfigurationError):
            resolve_jwt_secret(settings)

    def test_secret_not_in_repr(self) -> None:
        settings = Settings(_env_file=None, jwt_secret_key="super-secret")

        assert "super-secret" not in repr(settings)
