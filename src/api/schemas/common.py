"""Shared schema building blocks: camelCase models and the response envelope."""

import uuid
from datetime import UTC, datetime
from typing import ClassVar, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API schemas: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EntityRead(CamelModel):
    """Fields every persisted entity exposes."""

    id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None


def as_naive_utc(value: datetime) -> datetime:
    """Drop the offset after converting to UTC; naive values are taken as UTC.

    SQLite hands back naive datetimes and clients may send either form, so
    comparisons between stored and incoming dates go through this first.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class PartialUpdate(CamelModel):
    """Base for PUT payloads where every field is optional.

    Fields named in ``non_nullable`` may be omitted but not sent as null.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> Self:
        for name in self.model_fields_set & self.non_nullable:
            if getattr(self, name) is None:
                msg = f"{to_camel(name)} não pode ser nulo"
                raise ValueError(msg)
        return self

    def changes(self) -> dict[str, object]:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Success response wrapper: ``{ message, data }``."""

    message: str = Field(..., examples=["Sistemas encontrados"])
    data: DataT


class PageInfo(BaseModel):
    total: int
    skip: int
    take: int
    pages: int


class PagedEnvelope(Envelope[DataT], Generic[DataT]):
    """Envelope carrying pagination totals alongside the page of data."""

    pagination: PageInfo
