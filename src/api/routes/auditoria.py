"""Audit trail queries. Logs are append-only: update and delete answer 405."""

import uuid
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.controllers.auditoria import LogAuditoriaController
from src.api.controllers.helpers import validate_id
from src.api.dependencies import Paging
from src.api.middleware.auth import require_authentication
from src.api.schemas.auditoria import (
    AtividadesUsuario,
    LogAuditoriaCreate,
    LogAuditoriaRead,
    RelatorioEntidade,
)
from src.api.schemas.common import Envelope, PagedEnvelope
from src.infrastructure.database.dependencies import DatabaseSession
from src.infrastructure.database.models.enums import OperacaoAuditoria

router = APIRouter(
    prefix="/auditoria", tags=["auditoria"], dependencies=[Depends(require_authentication)]
)


@router.get("", response_model=PagedEnvelope[list[LogAuditoriaRead]])
async def list_logs(
    db: DatabaseSession,
    paging: Paging,
    entidade: str | None = None,
    entidade_id: Annotated[str | None, Query(alias="entidadeId")] = None,
    operacao: OperacaoAuditoria | None = None,
    usuario_id: Annotated[uuid.UUID | None, Query(alias="usuarioId")] = None,
    data_inicio: Annotated[datetime | None, Query(alias="dataInicio")] = None,
    data_fim: Annotated[datetime | None, Query(alias="dataFim")] = None,
) -> dict:
    return await LogAuditoriaController(db).find_many(
        paging, entidade, entidade_id, operacao, usuario_id, data_inicio, data_fim
    )


@router.get(
    "/relatorio/{entidade}/{entidade_id}", response_model=Envelope[RelatorioEntidade]
)
async def relatorio_entidade(entidade: str, entidade_id: str, db: DatabaseSession) -> dict:
    return await LogAuditoriaController(db).relatorio_entidade(
        entidade, validate_id(entidade_id)
    )


@router.get(
    "/usuario/{usuario_id}/atividades", response_model=Envelope[AtividadesUsuario]
)
async def atividades_usuario(
    usuario_id: str,
    db: DatabaseSession,
    paging: Paging,
    dias: Annotated[int, Query(ge=1, le=365)] = 30,
) -> dict:
    return await LogAuditoriaController(db).atividades_usuario(
        validate_id(usuario_id), dias, paging
    )


@router.get("/{log_id}", response_model=Envelope[LogAuditoriaRead])
async def get_log(log_id: str, db: DatabaseSession) -> dict:
    return await LogAuditoriaController(db).find_by_id(validate_id(log_id))


@router.post(
    "", response_model=Envelope[LogAuditoriaRead], status_code=status.HTTP_201_CREATED
)
async def create_log(payload: LogAuditoriaCreate, db: DatabaseSession) -> dict:
    return await LogAuditoriaController(db).create(payload)


@router.put("/{log_id}", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def update_log(log_id: str) -> None:
    LogAuditoriaController.update()


@router.delete("/{log_id}", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def delete_log(log_id: str) -> None:
    LogAuditoriaController.delete()
