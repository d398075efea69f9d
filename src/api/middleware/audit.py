"""Audit trail middleware.

Writes on audited collections (``POST /{entity}``, ``PUT|PATCH|DELETE
/{entity}/{id}``) are recorded in ``log_auditoria`` once the route has
succeeded. The row as it was before the change is read first; the ``data``
member of the response body becomes the after-snapshot. The audit write uses
its own session so a failure there is logged and never fails the request.
"""

import uuid
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

import orjson
from loguru import logger
from pydantic.alias_generators import to_camel
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import iterate_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.api.controllers.auditoria import write_audit_log
from src.api.middleware.auth import authenticate_request
from src.core.config import AuditConfig, AuthConfig
from src.core.exceptions import UnauthorizedError
from src.infrastructure.database.base import BaseModel
from src.infrastructure.database.models import (
    AtribuicaoPapelDominio,
    Banco,
    ClassificacaoInformacao,
    Coluna,
    Comunidade,
    Definicao,
    DimensaoQualidade,
    ListaReferencia,
    Papel,
    PoliticaInterna,
    Processo,
    RegraNegocio,
    RegraQualidade,
    Sistema,
    Tabela,
    TipoDados,
    Usuario,
)
from src.infrastructure.database.models.enums import OperacaoAuditoria

type SessionProvider = Callable[[], AbstractAsyncContextManager[AsyncSession]]

MODELS_BY_PATH: dict[str, type[BaseModel]] = {
    "usuarios": Usuario,
    "sistemas": Sistema,
    "bancos": Banco,
    "tabelas": Tabela,
    "tipos-dados": TipoDados,
    "colunas": Coluna,
    "comunidades": Comunidade,
    "processos": Processo,
    "politicas-internas": PoliticaInterna,
    "papeis": Papel,
    "atribuicoes": AtribuicaoPapelDominio,
    "dimensoes-qualidade": DimensaoQualidade,
    "regras-qualidade": RegraQualidade,
    "definicoes": Definicao,
    "listas-referencia": ListaReferencia,
    "regras-negocio": RegraNegocio,
    "classificacoes-informacao": ClassificacaoInformacao,
}

OPERATIONS = {
    "POST": OperacaoAuditoria.CREATE,
    "PUT": OperacaoAuditoria.UPDATE,
    "PATCH": OperacaoAuditoria.UPDATE,
    "DELETE": OperacaoAuditoria.DELETE,
}

# never copied into a snapshot
OMITTED_COLUMNS = frozenset({"senha"})


def snapshot(instance: BaseModel) -> dict[str, Any]:
    """Column values of ``instance`` keyed by their API (camelCase) names."""
    return {
        to_camel(attr.key): getattr(instance, attr.key)
        for attr in inspect(instance).mapper.column_attrs
        if attr.key not in OMITTED_COLUMNS
    }


def audit_target(
    method: str, path: str, audited: set[str]
) -> tuple[str, OperacaoAuditoria, uuid.UUID | None] | None:
    """Classify a request as an audited write, or return None.

    Only plain collection and item routes qualify; action routes such as
    ``/usuarios/login`` are not entity writes.
    """
    operacao = OPERATIONS.get(method)
    if operacao is None:
        return None

    parts = [part for part in path.split("/") if part]
    if not parts or parts[0] not in audited or parts[0] not in MODELS_BY_PATH:
        return None

    if operacao is OperacaoAuditoria.CREATE:
        return (parts[0], operacao, None) if len(parts) == 1 else None
    if len(parts) != 2:  # noqa: PLR2004 - /{entity}/{id}
        return None
    try:
        return parts[0], operacao, uuid.UUID(parts[1])
    except ValueError:
        return None


class AuditMiddleware(BaseHTTPMiddleware):
    """Record successful entity writes in the audit trail.

    Args:
        app: The ASGI application.
        audit_config: Which collections are audited, and the on/off switch.
        auth_config: Used to identify the calling user from the token.
    """

    def __init__(
        self, app: ASGIApp, *, audit_config: AuditConfig, auth_config: AuthConfig
    ) -> None:
        super().__init__(app)
        self.enabled = audit_config.enabled
        self.audited = set(audit_config.audited_entities)
        self.auth_config = auth_config

    def _session_provider(self, request: Request) -> SessionProvider:
        return request.app.state.session_provider

    def _user_id(self, request: Request) -> uuid.UUID | None:
        try:
            return uuid.UUID(authenticate_request(request, self.auth_config).user_id)
        except (UnauthorizedError, ValueError):
            return None

    async def _load_before(
        self, request: Request, entidade: str, entity_id: uuid.UUID
    ) -> dict[str, Any] | None:
        model = MODELS_BY_PATH[entidade]
        try:
            async with self._session_provider(request)() as session:
                instance = await session.get(model, entity_id)
                return snapshot(instance) if instance is not None else None
        except SQLAlchemyError as e:
            logger.warning("Could not capture audit snapshot for {} {}: {}", entidade, entity_id, e)
            return None

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        target = audit_target(request.method, request.url.path, self.audited) if self.enabled else None
        if target is None:
            return await call_next(request)

        entidade, operacao, entity_id = target
        dados_antes = None
        if entity_id is not None:
            dados_antes = await self._load_before(request, entidade, entity_id)

        response = await call_next(request)
        if response.status_code >= 400:  # noqa: PLR2004
            return response

        body = b"".join([chunk async for chunk in _body_chunks(response)])
        response.body_iterator = iterate_in_threadpool(iter([body]))

        try:
            dados_depois = orjson.loads(body).get("data") if body else None
        except (orjson.JSONDecodeError, AttributeError):
            dados_depois = None

        record_id = entity_id
        if record_id is None and isinstance(dados_depois, dict):
            record_id = dados_depois.get("id")
        if record_id is None:
            logger.warning("Audit skipped for {} {}: no entity id", request.method, request.url.path)
            return response

        try:
            async with self._session_provider(request)() as session:
                await write_audit_log(
                    session,
                    entidade,
                    str(record_id),
                    operacao,
                    dados_antes=dados_antes,
                    dados_depois=None if operacao is OperacaoAuditoria.DELETE else dados_depois,
                    usuario_id=self._user_id(request),
                )
        except SQLAlchemyError as e:
            logger.opt(exception=e).warning(
                "Failed to write audit log for {} {}", operacao, entidade
            )
        return response


async def _body_chunks(response: Response) -> AsyncIterator[bytes]:
    async for chunk in response.body_iterator:  # type: ignore[attr-defined]
        yield chunk if isinstance(chunk, bytes) else chunk.encode()
