"""Alembic environment for the DECODE-GOV schema.

The database URL is taken from the application settings rather than
alembic.ini, and importing the models package registers every table on the
metadata used for autogenerate.
"""

import asyncio
import logging
from typing import Any

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

import src.infrastructure.database.models  # noqa: F401 - registers the tables
from src.core.config import get_settings
from src.infrastructure.database.base import Base

logger = logging.getLogger("alembic.env")
target_metadata = Base.metadata


def _configure(**kwargs: Any) -> None:  # noqa: ANN401
    settings = get_settings()
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        # SQLite cannot ALTER constraints in place
        render_as_batch=settings.database_config.is_sqlite,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting to a database."""
    logger.info("Running migrations in offline mode")
    _configure(
        url=get_settings().database_config.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Apply migrations over a short-lived, unpooled async engine."""
    logger.info("Running migrations in online mode")
    db_config = get_settings().database_config
    connectable = async_engine_from_config(
        {
            "sqlalchemy.url": db_config.database_url,
            "sqlalchemy.echo": db_config.echo,
        },
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
