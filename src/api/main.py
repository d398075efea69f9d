"""FastAPI application factory for the DECODE-GOV API.

``create_app`` wires logging, tracing, exception handlers, the middleware
chain, every entity router and the ``/health`` check. Middleware run in
reverse order of registration, so they are added innermost first.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlalchemy.pool import QueuePool

from src.api.middleware.audit import AuditMiddleware
from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.middleware.security_headers import SecurityHeadersMiddleware
from src.api.routes import ROUTERS
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.core.observability import instrument_app, setup_tracing
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    get_async_session,
    get_engine,
)


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Verify the database on startup and dispose the pool on shutdown.

    Raises:
        RuntimeError: If the database cannot be reached during startup.
    """
    is_healthy, error_msg = await check_database_connection()
    if not is_healthy:
        logger.error("Database connection failed during startup: {}", error_msg)
        msg = f"Database connection failed: {error_msg}"
        raise RuntimeError(msg)

    logger.info("Database connection successful")
    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown initiated")
    await close_database()
    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=settings.app_description,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    # the audit middleware opens its own sessions; tests swap this provider
    application.state.session_provider = get_async_session

    register_exception_handlers(application)

    # 5. CORS (innermost, so preflight answers still get the headers below)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_config.allow_origins,
        allow_methods=settings.cors_config.allow_methods,
        allow_headers=["*"],
        allow_credentials=True,
    )

    # 4. Audit trail for successful writes
    application.add_middleware(
        AuditMiddleware,
        audit_config=settings.audit_config,
        auth_config=settings.auth_config,
    )

    # 3. Request logging
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)

    # 2. Correlation id
    application.add_middleware(RequestContextMiddleware)

    # 1. Security headers (first to see the request, last to touch the response)
    application.add_middleware(
        SecurityHeadersMiddleware, hsts_enabled=settings.auth_config.cookie_secure
    )

    for router in ROUTERS:
        application.include_router(router)

    @application.get("/health", tags=["health"])
    async def health() -> dict[str, object]:
        """Liveness check; reports ``degraded`` when the database is unreachable."""
        health_status: dict[str, object] = {"status": "healthy", "database": False}

        is_healthy, error_msg = await check_database_connection()
        health_status["database"] = is_healthy

        if is_healthy:
            pool = get_engine().pool
            if isinstance(pool, QueuePool):
                logger.bind(
                    metric_type="db.pool.health",
                    checked_out=pool.checkedout(),
                    size=pool.size(),
                    overflow=pool.overflow(),
                ).info("Database pool health check")
        else:
            logger.warning("Database health check failed: {}", error_msg)
            health_status["status"] = "degraded"

        return health_status

    instrument_app(application, settings)

    return application


app = create_app()
