"""Request-handling helpers shared by every entity controller.

Controllers compose these functions instead of inheriting from a common base:
id validation, pagination normalization, translation of store failures into
``DecodeGovError`` subclasses and the dependent-row check run before deletes.
"""

import math
import uuid
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import orjson
from loguru import logger
from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.orm.interfaces import ORMOption

from src.core.exceptions import (
    ConflictError,
    DecodeGovError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from src.core.types import OrderBy
from src.infrastructure.constants import (
    FOREIGN_KEY_VIOLATION_SQLSTATE,
    UNIQUE_VIOLATION_SQLSTATE,
)
from src.infrastructure.database.base import BaseModel
from src.infrastructure.database.repository import (
    DEFAULT_ORDER,
    DEFAULT_PAGINATION_LIMIT,
    BaseRepository,
)

MAX_PAGE_SIZE = 100
# largest OFFSET a signed 64-bit bind parameter can carry
MAX_SKIP = 2**63 - 1
INVALID_MARKER = "inválido"


@dataclass(frozen=True, slots=True)
class Pagination:
    skip: int = 0
    take: int = DEFAULT_PAGINATION_LIMIT
    order_by: OrderBy = field(default_factory=lambda: dict(DEFAULT_ORDER))


@dataclass(frozen=True, slots=True)
class DependentCheck:
    """A child column referencing the row about to be deleted.

    ``message`` is formatted with ``count`` when referencing rows exist.
    """

    column: InstrumentedAttribute[Any]
    message: str


def validate_id(value: str) -> uuid.UUID:
    """Parse a path id, rejecting anything that is not a UUID."""
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError) as e:
        raise ValidationError("ID inválido", context={"id": value}) from e


def parse_order_by(raw: str | None) -> OrderBy:
    """Decode a JSON ``orderBy`` object, falling back to ``id`` ascending.

    Column names are checked later against the model; here only the shape is
    validated.
    """
    if not raw:
        return dict(DEFAULT_ORDER)
    try:
        parsed = orjson.loads(raw)
    except orjson.JSONDecodeError:
        logger.debug("Malformed orderBy {!r}, using id asc", raw)
        return dict(DEFAULT_ORDER)

    if (
        not isinstance(parsed, dict)
        or not parsed
        or not all(isinstance(k, str) and v in ("asc", "desc") for k, v in parsed.items())
    ):
        return dict(DEFAULT_ORDER)
    return parsed


def parse_pagination(
    skip: int | None = None,
    take: int | None = None,
    order_by: str | None = None,
) -> Pagination:
    """Normalize paging input; out-of-range values are clamped, never rejected."""
    return Pagination(
        skip=min(max(skip or 0, 0), MAX_SKIP),
        take=DEFAULT_PAGINATION_LIMIT if take is None else min(max(take, 1), MAX_PAGE_SIZE),
        order_by=parse_order_by(order_by),
    )


def _sqlstate(error: IntegrityError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_store_error(error: Exception, entity: str) -> DecodeGovError:
    """Map a persistence failure to the error reported to the client.

    Unique violations become conflicts, foreign key violations and messages
    flagged as invalid become bad requests, a missing row becomes not found.
    Anything else is logged with its traceback and reported as a generic
    internal error.
    """
    if isinstance(error, DecodeGovError):
        return error

    if isinstance(error, IntegrityError):
        sqlstate = _sqlstate(error)
        text = str(error.orig).lower()
        if sqlstate == UNIQUE_VIOLATION_SQLSTATE or "unique" in text:
            return ConflictError(context={"entity": entity}, cause=error)
        if sqlstate == FOREIGN_KEY_VIOLATION_SQLSTATE or "foreign key" in text:
            return ValidationError(
                "Referência inválida", context={"entity": entity}, cause=error
            )

    if isinstance(error, NoResultFound):
        return NotFoundError(context={"entity": entity}, cause=error)

    if INVALID_MARKER in str(error):
        return ValidationError(str(error), context={"entity": entity}, cause=error)

    logger.opt(exception=error).error(
        "Unhandled store error on {}: {}", entity, type(error).__name__
    )
    return StoreError(context={"entity": entity}, cause=error)


@contextmanager
def store_errors(entity: str) -> Iterator[None]:
    """Translate store exceptions raised inside the block.

    Example:
        with store_errors("Sistema"):
            await repository.create(sistema)
    """
    try:
        yield
    except DecodeGovError:
        raise
    except (SQLAlchemyError, ValueError) as e:
        raise translate_store_error(e, entity) from e


async def ensure_no_dependents(
    session: AsyncSession, entity_id: uuid.UUID, checks: Iterable[DependentCheck]
) -> None:
    """Refuse a delete while other rows still reference ``entity_id``.

    Each check runs a COUNT immediately before the delete; a row inserted
    between the count and the delete is not detected.
    """
    for check in checks:
        stmt = select(func.count()).where(check.column == entity_id)
        count = (await session.execute(stmt)).scalar() or 0
        if count > 0:
            raise ValidationError(
                check.message.format(count=count),
                context={"id": str(entity_id), "dependents": count},
            )


async def ensure_exists(
    session: AsyncSession, model: type[BaseModel], entity_id: object, message: str
) -> None:
    """Reject a payload whose optional reference points at a missing row.

    Raises:
        ValidationError: With ``message`` when ``entity_id`` is set but not found.
    """
    if entity_id is None:
        return
    with store_errors(model.__name__):
        found = await session.get(model, entity_id)
    if found is None:
        raise ValidationError(message, context={"id": str(entity_id)})


def search_filter(model: type[BaseModel], search: str | None) -> list[ColumnElement[bool]]:
    """Case-insensitive substring match on ``nome``, ``descricao`` and ``sigla``.

    Only the columns the model actually has take part.
    """
    if not search:
        return []
    columns = [
        getattr(model, name)
        for name in ("nome", "descricao", "sigla")
        if hasattr(model, name)
    ]
    return [or_(*(column.icontains(search, autoescape=True) for column in columns))]


def envelope(message: str, data: object) -> dict[str, object]:
    return {"message": message, "data": data}


def paged_envelope(
    message: str, data: object, total: int, pagination: Pagination
) -> dict[str, object]:
    """Envelope with the ``pagination`` totals used by the audit and MFA lists."""
    return {
        "message": message,
        "data": data,
        "pagination": {
            "total": total,
            "skip": pagination.skip,
            "take": pagination.take,
            "pages": math.ceil(total / pagination.take),
        },
    }


async def fetch_or_404[T: BaseModel](
    repository: BaseRepository[T],
    entity_id: uuid.UUID,
    options: Sequence[ORMOption] = (),
    message: str = "Registro não encontrado",
) -> T:
    """Load a row with its relations or raise ``NotFoundError``."""
    with store_errors(repository.name):
        instance = await repository.get_by_id(entity_id, options)
    if instance is None:
        raise NotFoundError(message, context={"entity": repository.name, "id": str(entity_id)})
    return instance


async def find_page[T: BaseModel](
    repository: BaseRepository[T],
    pagination: Pagination,
    where: Sequence[ColumnElement[bool]] = (),
    options: Sequence[ORMOption] = (),
) -> list[T]:
    with store_errors(repository.name):
        return await repository.find_many(
            where=where,
            order_by=pagination.order_by,
            skip=pagination.skip,
            limit=pagination.take,
            options=options,
        )


async def create_entity[T: BaseModel](
    repository: BaseRepository[T], instance: T, options: Sequence[ORMOption] = ()
) -> T:
    """Insert ``instance`` and reload it with the relations to serialize."""
    with store_errors(repository.name):
        created = await repository.create(instance)
    return await fetch_or_404(repository, created.id, options)


async def update_entity[T: BaseModel](
    repository: BaseRepository[T],
    entity_id: uuid.UUID,
    changes: dict[str, object],
    options: Sequence[ORMOption] = (),
    not_found: str = "Registro não encontrado",
) -> T:
    instance = await fetch_or_404(repository, entity_id, message=not_found)
    with store_errors(repository.name):
        await repository.update(instance, changes)
    return await fetch_or_404(repository, entity_id, options)


async def delete_entity[T: BaseModel](
    repository: BaseRepository[T],
    entity_id: uuid.UUID,
    checks: Iterable[DependentCheck] = (),
    options: Sequence[ORMOption] = (),
    not_found: str = "Registro não encontrado",
) -> T:
    """Delete a row unless referenced, returning it as it was before removal."""
    instance = await fetch_or_404(repository, entity_id, options, message=not_found)
    await ensure_no_dependents(repository.session, entity_id, checks)
    with store_errors(repository.name):
        if not await repository.delete(entity_id):
            raise NotFoundError(not_found)
    return instance
