"""FastAPI dependency injection for database session management.

Each request gets its own ``AsyncSession``; it is committed when the route
returns normally and rolled back when any exception escapes, including the
``DecodeGovError`` subclasses raised by controllers.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.session import get_async_session


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Provide a request-scoped database session.

    Yields:
        AsyncGenerator[AsyncSession]: Session committed on success, rolled back
            on error.
    """
    async with get_async_session() as session:
        yield session


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
