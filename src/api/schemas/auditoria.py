"""Audit trail schemas.

Snapshots are stored as JSON text; on the way out they are parsed back into
objects so clients never have to decode a string field.
"""

import uuid
from datetime import datetime
from typing import Any

import orjson
from pydantic import Field, field_validator

from src.api.schemas.common import CamelModel, EntityRead
from src.api.schemas.usuario import UsuarioSummary
from src.infrastructure.database.models.enums import OperacaoAuditoria


def _parse_snapshot(value: Any) -> Any:  # noqa: ANN401 - arbitrary JSON
    if isinstance(value, str):
        try:
            return orjson.loads(value)
        except orjson.JSONDecodeError:
            return value
    return value


class LogAuditoriaRead(EntityRead):
    entidade: str
    entidade_id: str
    operacao: OperacaoAuditoria
    timestamp: datetime
    dados_antes: Any = None
    dados_depois: Any = None
    usuario_id: uuid.UUID | None = None
    usuario: UsuarioSummary | None = None

    @field_validator("dados_antes", "dados_depois", mode="before")
    @classmethod
    def parse_snapshot(cls, value: Any) -> Any:  # noqa: ANN401
        return _parse_snapshot(value)


class LogAuditoriaCreate(CamelModel):
    entidade: str = Field(min_length=1, max_length=100)
    entidade_id: str = Field(min_length=1, max_length=64)
    operacao: OperacaoAuditoria
    dados_antes: str | None = None
    dados_depois: str | None = None
    usuario_id: uuid.UUID


class OperacoesPorTipo(CamelModel):
    create: int = Field(0, alias="CREATE")
    update: int = Field(0, alias="UPDATE")
    delete: int = Field(0, alias="DELETE")


class EstatisticasEntidade(CamelModel):
    total_operacoes: int
    operacoes_por_tipo: OperacoesPorTipo
    primeira_operacao: datetime | None = None
    ultima_operacao: datetime | None = None
    usuarios_envolvidos: int


class RelatorioEntidade(CamelModel):
    entidade: str
    entidade_id: str
    estatisticas: EstatisticasEntidade
    logs: list[LogAuditoriaRead]


class EstatisticasUsuario(CamelModel):
    total_operacoes: int
    operacoes_por_tipo: OperacoesPorTipo
    entidades_afetadas: list[str]
    dias_analisados: int


class AtividadesUsuario(CamelModel):
    usuario_id: uuid.UUID
    estatisticas: EstatisticasUsuario
    logs: list[LogAuditoriaRead]
