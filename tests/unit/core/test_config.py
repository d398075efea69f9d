"""Unit tests for src/core/config.py."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from src.core.config import DEVELOPMENT_JWT_SECRET, DatabaseConfig, Settings, get_settings


@pytest.mark.unit
class TestSettings:
    """Test environment-dependent settings behavior."""

    def test_get_settings_is_cached(self) -> None:
        """Verify repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_nested_values_come_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify double-underscore variables populate nested configs."""
        monkeypatch.setenv("AUTH_CONFIG__TOKEN_EXPIRE_HOURS", "8")
        monkeypatch.setenv("AUDIT_CONFIG__ENABLED", "false")

        settings = Settings()

        check.equal(settings.auth_config.token_expire_hours, 8)
        check.is_false(settings.audit_config.enabled)

    def test_development_defaults(self) -> None:
        """Verify development keeps the console formatter and plain cookies."""
        settings = Settings(environment="development")

        check.equal(settings.log_config.log_formatter_type, "console")
        check.is_false(settings.auth_config.cookie_secure)

    def test_production_tightens_defaults(self) -> None:
        """Verify production switches to JSON logs, secure cookies and sampled OTLP traces."""
        settings = Settings(environment="production")

        check.equal(settings.log_config.log_formatter_type, "json")
        check.is_true(settings.auth_config.cookie_secure)
        check.equal(settings.observability_config.exporter_type, "otlp")
        check.equal(settings.observability_config.trace_sample_rate, 0.1)

    def test_production_rejects_development_secret(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Verify production refuses to start with the built-in JWT secret."""
        monkeypatch.delenv("AUTH_CONFIG__JWT_SECRET", raising=False)

        with pytest.raises(ValidationError, match="AUTH_CONFIG__JWT_SECRET"):
            Settings(environment="production")

    def test_development_accepts_development_secret(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("AUTH_CONFIG__JWT_SECRET", raising=False)

        settings = Settings(environment="development")

        assert settings.auth_config.jwt_secret.get_secret_value() == DEVELOPMENT_JWT_SECRET

    def test_empty_docs_url_disables_docs(self) -> None:
        settings = Settings(docs_url="", redoc_url="")

        check.is_none(settings.docs_url)
        check.is_none(settings.redoc_url)


@pytest.mark.unit
class TestDatabaseConfig:
    """Test database URL validation."""

    @pytest.mark.parametrize(
        "url",
        [
            "postgresql+asyncpg://user:pass@db:5432/decodegov",
            "sqlite+aiosqlite:///./decodegov.db",
        ],
    )
    def test_supported_drivers_are_accepted(self, url: str) -> None:
        assert DatabaseConfig(database_url=url).database_url == url

    @pytest.mark.parametrize(
        "url",
        ["postgresql://user:pass@db/decodegov", "mysql+aiomysql://db/decodegov"],
    )
    def test_unsupported_drivers_are_rejected(self, url: str) -> None:
        """Verify only async drivers the engine factory knows are allowed."""
        with pytest.raises(ValidationError):
            DatabaseConfig(database_url=url)

    def test_is_sqlite(self) -> None:
        check.is_true(DatabaseConfig(database_url="sqlite+aiosqlite://").is_sqlite)
        check.is_false(
            DatabaseConfig(database_url="postgresql+asyncpg://u:p@h/d").is_sqlite
        )
