"""Query-string dependencies shared by the listing routes."""

from typing import Annotated

from fastapi import Depends, Query

from src.api.controllers.helpers import Pagination, parse_pagination


def pagination_params(
    skip: Annotated[int | None, Query(description="Registros a pular")] = None,
    take: Annotated[int | None, Query(description="Registros por página (1-100)")] = None,
    order_by: Annotated[
        str | None,
        Query(alias="orderBy", description='Ordenação em JSON, ex.: {"nome":"asc"}'),
    ] = None,
) -> Pagination:
    """Read ``skip``/``take``/``orderBy``; out-of-range values are clamped."""
    return parse_pagination(skip, take, order_by)


Paging = Annotated[Pagination, Depends(pagination_params)]
Search = Annotated[str | None, Query(description="Busca por nome ou descrição")]
