"""Audit trail queries and the writer used by the audit middleware and MFA flows."""

import uuid
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import orjson
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.api.controllers.helpers import (
    Pagination,
    create_entity,
    envelope,
    fetch_or_404,
    find_page,
    paged_envelope,
    store_errors,
)
from src.api.schemas.auditoria import LogAuditoriaCreate
from src.core.exceptions import MethodNotAllowedError, ValidationError
from src.core.types import JsonValue
from src.infrastructure.database.models import LogAuditoria, Usuario
from src.infrastructure.database.models.enums import OperacaoAuditoria
from src.infrastructure.database.repository import BaseRepository

NEWEST_FIRST = {"timestamp": "desc"}


def to_json_text(value: JsonValue) -> str | None:
    """Serialize a snapshot for storage; ``None`` stays ``None``."""
    if value is None:
        return None
    return orjson.dumps(value, default=str).decode()


async def write_audit_log(
    session: AsyncSession,
    entidade: str,
    entidade_id: str,
    operacao: OperacaoAuditoria,
    dados_antes: JsonValue = None,
    dados_depois: JsonValue = None,
    usuario_id: uuid.UUID | None = None,
) -> LogAuditoria:
    """Append one row to the audit trail within ``session``."""
    log = LogAuditoria(
        entidade=entidade,
        entidade_id=entidade_id,
        operacao=operacao,
        dados_antes=to_json_text(dados_antes),
        dados_depois=to_json_text(dados_depois),
        usuario_id=usuario_id,
    )
    session.add(log)
    await session.flush()
    logger.debug("Audit {} {} {}", operacao, entidade, entidade_id)
    return log


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


def _count_by_operation(logs: Sequence[LogAuditoria]) -> dict[str, int]:
    counts = Counter(log.operacao for log in logs)
    return {operacao.value: counts.get(operacao, 0) for operacao in OperacaoAuditoria}


class LogAuditoriaController:
    options = (selectinload(LogAuditoria.usuario),)

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = BaseRepository(session, LogAuditoria)

    async def find_many(
        self,
        pagination: Pagination,
        entidade: str | None = None,
        entidade_id: str | None = None,
        operacao: OperacaoAuditoria | None = None,
        usuario_id: uuid.UUID | None = None,
        data_inicio: datetime | None = None,
        data_fim: datetime | None = None,
    ) -> dict:
        where = []
        if entidade:
            where.append(LogAuditoria.entidade == entidade)
        if entidade_id:
            where.append(LogAuditoria.entidade_id == entidade_id)
        if operacao is not None:
            where.append(LogAuditoria.operacao == operacao)
        if usuario_id is not None:
            where.append(LogAuditoria.usuario_id == usuario_id)
        if data_inicio is not None:
            where.append(LogAuditoria.timestamp >= _as_utc(data_inicio))
        if data_fim is not None:
            where.append(LogAuditoria.timestamp <= _as_utc(data_fim))

        ordered = Pagination(pagination.skip, pagination.take, NEWEST_FIRST)
        logs = await find_page(self.repository, ordered, where, self.options)
        with store_errors("LogAuditoria"):
            total = await self.repository.count(*where)
        return paged_envelope("Logs de auditoria encontrados", logs, total, pagination)

    async def find_by_id(self, log_id: uuid.UUID) -> dict:
        log = await fetch_or_404(
            self.repository, log_id, self.options, "Log de auditoria não encontrado"
        )
        return envelope("Log de auditoria encontrado", log)

    async def create(self, payload: LogAuditoriaCreate) -> dict:
        with store_errors("Usuario"):
            usuario = await self.session.get(Usuario, payload.usuario_id)
        if usuario is None:
            raise ValidationError("Usuário não encontrado")
        log = await create_entity(
            self.repository, LogAuditoria(**payload.model_dump()), self.options
        )
        return envelope("Log de auditoria criado com sucesso", log)

    @staticmethod
    def update() -> None:
        raise MethodNotAllowedError("Logs de auditoria não podem ser alterados")

    @staticmethod
    def delete() -> None:
        raise MethodNotAllowedError("Logs de auditoria não podem ser excluídos")

    async def relatorio_entidade(self, entidade: str, entidade_id: uuid.UUID) -> dict:
        """Summarize every recorded operation on one catalogued row, oldest first."""
        where = [
            LogAuditoria.entidade == entidade,
            LogAuditoria.entidade_id == str(entidade_id),
        ]
        with store_errors("LogAuditoria"):
            total = await self.repository.count(*where)
            logs = await self.repository.find_many(
                where=where,
                order_by={"timestamp": "asc"},
                limit=max(total, 1),
                options=self.options,
            )

        estatisticas = {
            "total_operacoes": len(logs),
            "operacoes_por_tipo": _count_by_operation(logs),
            "primeira_operacao": logs[0].timestamp if logs else None,
            "ultima_operacao": logs[-1].timestamp if logs else None,
            "usuarios_envolvidos": len({log.usuario_id for log in logs if log.usuario_id}),
        }
        return envelope(
            "Relatório de auditoria gerado",
            {
                "entidade": entidade,
                "entidade_id": str(entidade_id),
                "estatisticas": estatisticas,
                "logs": logs,
            },
        )

    async def atividades_usuario(
        self, usuario_id: uuid.UUID, dias: int, pagination: Pagination
    ) -> dict:
        desde = datetime.now(UTC) - timedelta(days=dias)
        where = [LogAuditoria.usuario_id == usuario_id, LogAuditoria.timestamp >= desde]
        ordered = Pagination(pagination.skip, pagination.take, NEWEST_FIRST)
        logs = await find_page(self.repository, ordered, where, self.options)

        estatisticas = {
            "total_operacoes": len(logs),
            "operacoes_por_tipo": _count_by_operation(logs),
            "entidades_afetadas": sorted({log.entidade for log in logs}),
            "dias_analisados": dias,
        }
        return envelope(
            "Atividades do usuário encontradas",
            {"usuario_id": usuario_id, "estatisticas": estatisticas, "logs": logs},
        )
