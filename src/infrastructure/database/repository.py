"""Base repository pattern implementation for database operations.

This module provides a generic repository that implements the CRUD
operations every catalogued entity needs, on top of an injected
``AsyncSession``. Relationship loading is explicit: callers pass loader
options (``selectinload``) for the relations they intend to serialize.
"""

import re
import uuid
from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger
from sqlalchemy import ColumnElement, func, select
from sqlalchemy import delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from src.core.types import OrderBy
from src.infrastructure.database.base import BaseModel

DEFAULT_PAGINATION_LIMIT = 20
DEFAULT_ORDER: OrderBy = {"id": "asc"}
# credential columns, never accepted in orderBy
UNORDERABLE_COLUMNS = frozenset({"senha", "secret_key"})

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_column_name(field: str) -> str:
    """Translate an API field name (``createdAt``) to its column (``created_at``)."""
    return _CAMEL_BOUNDARY.sub("_", field).lower()


class BaseRepository[T: BaseModel]:
    """Generic async repository for a single model class.

    Args:
        session: The async SQLAlchemy session to use for operations.
        model_class: The SQLAlchemy model class this repository manages.

    Example:
        repository = BaseRepository(session, Sistema)
        sistema = await repository.get_by_id(sistema_id)
    """

    def __init__(self, session: AsyncSession, model_class: type[T]) -> None:
        self.session = session
        self.model_class = model_class

    @property
    def name(self) -> str:
        return self.model_class.__name__

    def resolve_order_by(self, order_by: OrderBy | None) -> list[ColumnElement[Any]]:
        """Build ORDER BY clauses, falling back to ``id`` ascending.

        Unknown or credential columns and unknown directions discard the whole
        ordering rather than applying part of it.
        """
        columns = self.model_class.__table__.columns
        clauses: list[ColumnElement[Any]] = []
        for field, direction in (order_by or DEFAULT_ORDER).items():
            column_name = to_column_name(field)
            if (
                column_name not in columns
                or column_name in UNORDERABLE_COLUMNS
                or direction not in ("asc", "desc")
            ):
                logger.debug(
                    "Ignoring orderBy {}={} on {}, using id asc",
                    field,
                    direction,
                    self.name,
                )
                return [self.model_class.id.asc()]
            column = columns[column_name]
            clauses.append(column.desc() if direction == "desc" else column.asc())
        return clauses or [self.model_class.id.asc()]

    async def get_by_id(
        self, entity_id: uuid.UUID, options: Sequence[ORMOption] = ()
    ) -> T | None:
        """Retrieve a model instance by its ID.

        Rows already in the session are reloaded so that eager-loading
        options also apply to them.

        Args:
            entity_id: The primary key ID of the model to retrieve.
            options: Loader options for relationships to populate.

        Returns:
            T | None: The model instance if found, None otherwise.
        """
        logger.debug("Fetching {} by ID: {}", self.name, entity_id)

        stmt = (
            select(self.model_class)
            .where(self.model_class.id == entity_id)
            .options(*options)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_many(
        self,
        *,
        where: Sequence[ColumnElement[bool]] = (),
        order_by: OrderBy | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGINATION_LIMIT,
        options: Sequence[ORMOption] = (),
    ) -> list[T]:
        """Retrieve a filtered, ordered page of model instances.

        Args:
            where: Filter conditions combined with AND.
            order_by: Column to direction mapping; defaults to ``id`` ascending.
            skip: Number of records to skip.
            limit: Maximum number of records to return.
            options: Loader options for relationships to populate.

        Returns:
            list[T]: List of model instances.
        """
        logger.debug(
            "Fetching {} - skip: {}, limit: {}, filters: {}",
            self.name,
            skip,
            limit,
            len(where),
        )

        stmt = (
            select(self.model_class)
            .where(*where)
            .order_by(*self.resolve_order_by(order_by))
            .offset(skip)
            .limit(limit)
            .options(*options)
        )
        result = await self.session.execute(stmt)
        instances = list(result.scalars().all())

        logger.debug("Retrieved {} {} instances", len(instances), self.name)
        return instances

    async def count(self, *where: ColumnElement[bool]) -> int:
        """Count instances matching all ``where`` conditions."""
        stmt = select(func.count()).select_from(self.model_class).where(*where)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def exists(self, entity_id: uuid.UUID) -> bool:
        """Check if a model instance exists by its ID."""
        return await self.count(self.model_class.id == entity_id) > 0

    async def find_one_by(self, **kwargs: object) -> T | None:
        """Find the first instance whose attributes equal the given values."""
        stmt = select(self.model_class).filter_by(**kwargs).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, obj: T) -> T:
        """Persist a new instance and load its server-generated values.

        Args:
            obj: The model instance to create.

        Returns:
            T: The created instance with timestamps populated.
        """
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)

        logger.info("Created {} instance with ID: {}", self.name, obj.id)
        return obj

    async def update(self, instance: T, data: Mapping[str, object]) -> T:
        """Apply partial data to an instance and flush it.

        Args:
            instance: The loaded instance to modify.
            data: Attribute names and new values.

        Returns:
            T: The updated instance.
        """
        for key, value in data.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
            else:
                logger.warning(
                    "Attempted to update non-existent field '{}' on {}",
                    key,
                    self.name,
                )

        await self.session.flush()
        await self.session.refresh(instance)

        logger.info(
            "Updated {} instance ID {} - fields: {}",
            self.name,
            instance.id,
            list(data.keys()),
        )
        return instance

    async def delete(self, entity_id: uuid.UUID) -> bool:
        """Delete a row by ID with a single DELETE statement.

        Returns:
            bool: True if a row was removed.
        """
        stmt = sql_delete(self.model_class).where(self.model_class.id == entity_id)
        result = await self.session.execute(stmt)
        deleted = bool(result.rowcount)

        if deleted:
            logger.info("Deleted {} instance with ID: {}", self.name, entity_id)
        else:
            logger.debug("{} instance not found for deletion - ID: {}", self.name, entity_id)
        return deleted
