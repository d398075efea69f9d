"""Shared fixtures for integration tests.

Each test gets a fresh in-memory SQLite database with the full schema. The
request-scoped session dependency and the session provider used by the audit
middleware are both pointed at it, so writes made through the API are visible
to the assertions below.
"""

from collections.abc import AsyncGenerator, AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import src.infrastructure.database.models  # noqa: F401 - registers the tables
from src.api.main import create_app
from src.core.config import get_settings
from src.core.logging import _state
from src.core.security import TokenPayload, create_access_token, hash_password
from src.infrastructure.database.base import Base
from src.infrastructure.database.dependencies import get_db
from src.infrastructure.database.models import Usuario
from src.infrastructure.database.session import close_database, create_database_engine

TEST_PASSWORD = "senha-forte-123"  # noqa: S105

type SessionProvider = Callable[[], AbstractAsyncContextManager[AsyncSession]]


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with every table created."""
    engine = create_database_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def session_provider(session_factory: async_sessionmaker[AsyncSession]) -> SessionProvider:
    """Commit-or-rollback sessions, the same contract as ``get_async_session``."""

    @asynccontextmanager
    async def provider() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return provider


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for arranging rows and checking what the API persisted."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def app(session_provider: SessionProvider) -> AsyncGenerator[FastAPI]:
    """Application wired to the test database."""
    _state.configured = True
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        async with session_provider() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    application.state.session_provider = session_provider

    yield application

    application.dependency_overrides.clear()
    # /health checks the process-wide engine
    await close_database()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Unauthenticated HTTP client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def usuario(db_session: AsyncSession) -> Usuario:
    """An active user whose password is ``TEST_PASSWORD``."""
    usuario = Usuario(
        nome="Ana Gestora",
        email="ana.gestora@gov.br",
        senha=hash_password(TEST_PASSWORD, get_settings().auth_config.password_hash_iterations),
        ativo=True,
    )
    db_session.add(usuario)
    await db_session.commit()
    return usuario


@pytest.fixture
def auth_headers(usuario: Usuario) -> dict[str, str]:
    token = create_access_token(
        TokenPayload(user_id=str(usuario.id), email=usuario.email),
        get_settings().auth_config,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_client(app: FastAPI, auth_headers: dict[str, str]) -> AsyncGenerator[AsyncClient]:
    """HTTP client sending a valid bearer token on every request."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test", headers=auth_headers
    ) as ac:
        yield ac
