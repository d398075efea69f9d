"""Project-wide fixtures and pytest configuration.

The test environment is fixed before any application module is imported:
an in-memory SQLite database, a known JWT secret and a cheap password hash.
"""

import os
from collections.abc import Generator

import pytest

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("DATABASE_CONFIG__DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTH_CONFIG__JWT_SECRET", "test-secret")
os.environ.setdefault("AUTH_CONFIG__PASSWORD_HASH_ITERATIONS", "10000")
os.environ.setdefault("LOG_CONFIG__LOG_LEVEL", "WARNING")

from src.core.config import get_settings  # noqa: E402
from src.core.context import RequestContext  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that run the application against SQLite"
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Give every test a fresh Settings instance."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Keep correlation and user ids from leaking between tests."""
    RequestContext.clear()
    yield
    RequestContext.clear()
