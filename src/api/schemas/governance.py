"""Request and response models for the governance entities.

Communities, processes, internal policies, roles, role assignments, business
rules, information classifications and the data-quality dimensions and rules
built on top of them.
"""

import uuid
from datetime import datetime
from typing import ClassVar, Self

from pydantic import Field, model_validator

from src.api.schemas.catalog import (
    ColunaSummary,
    DefinicaoSummary,
    SistemaSummary,
    TabelaSummary,
)
from src.api.schemas.common import CamelModel, EntityRead, PartialUpdate, as_naive_utc
from src.api.schemas.usuario import UsuarioSummary
from src.infrastructure.database.models.enums import (
    Complexidade,
    Prioridade,
    StatusPolitica,
    StatusRegraNegocio,
    TipoEntidade,
    TipoRegraNegocio,
)

DATA_TERMINO_MESSAGE = "Data de término deve ser posterior à data de início de vigência"
DATA_FIM_MESSAGE = "Data de fim deve ser posterior à data de início de vigência"


class ComunidadeSummary(EntityRead):
    nome: str
    descricao: str | None = None


class ProcessoSummary(EntityRead):
    nome: str
    descricao: str | None = None
    comunidade_id: uuid.UUID


class PoliticaSummary(EntityRead):
    nome: str
    status: StatusPolitica
    versao: str


class PapelSummary(EntityRead):
    nome: str
    descricao: str | None = None


class DimensaoSummary(EntityRead):
    nome: str
    descricao: str | None = None


# Comunidade


class ComunidadeCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    parent_id: uuid.UUID | None = None


class ComunidadeUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    parent_id: uuid.UUID | None = None


class ComunidadeRead(ComunidadeSummary):
    parent_id: uuid.UUID | None = None
    processos: list[ProcessoSummary] = []


# Processo


class ProcessoCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    comunidade_id: uuid.UUID


class ProcessoUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome", "comunidade_id"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    comunidade_id: uuid.UUID | None = None


class ProcessoRead(ProcessoSummary):
    comunidade: ComunidadeSummary | None = None


# PoliticaInterna


class PoliticaInternaCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = Field(default=None, min_length=1)
    categoria: str | None = Field(default=None, min_length=1, max_length=100)
    objetivo: str | None = Field(default=None, min_length=1)
    escopo: str | None = Field(default=None, min_length=1)
    responsavel: str | None = Field(default=None, min_length=1, max_length=255)
    data_criacao: datetime
    data_inicio_vigencia: datetime
    data_termino: datetime | None = None
    status: StatusPolitica = StatusPolitica.EM_ELABORACAO
    versao: str = Field(default="1.0", min_length=1, max_length=20)
    anexos_url: str | None = Field(default=None, max_length=500)
    relacionamento: str | None = None
    observacoes: str | None = None

    @model_validator(mode="after")
    def check_vigencia(self) -> Self:
        termino = self.data_termino
        if termino is not None and as_naive_utc(termino) <= as_naive_utc(self.data_inicio_vigencia):
            raise ValueError(DATA_TERMINO_MESSAGE)
        return self


class PoliticaInternaUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"nome", "data_criacao", "data_inicio_vigencia", "status", "versao"}
    )

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    categoria: str | None = Field(default=None, max_length=100)
    objetivo: str | None = None
    escopo: str | None = None
    responsavel: str | None = Field(default=None, max_length=255)
    data_criacao: datetime | None = None
    data_inicio_vigencia: datetime | None = None
    data_termino: datetime | None = None
    status: StatusPolitica | None = None
    versao: str | None = Field(default=None, min_length=1, max_length=20)
    anexos_url: str | None = Field(default=None, max_length=500)
    relacionamento: str | None = None
    observacoes: str | None = None


class PoliticaInternaRead(PoliticaSummary):
    descricao: str | None = None
    categoria: str | None = None
    objetivo: str | None = None
    escopo: str | None = None
    responsavel: str | None = None
    data_criacao: datetime
    data_inicio_vigencia: datetime
    data_termino: datetime | None = None
    anexos_url: str | None = None
    relacionamento: str | None = None
    observacoes: str | None = None


# Papel


class PapelCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str = Field(min_length=1)
    politica_id: uuid.UUID
    ativo: bool = True


class PapelUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"nome", "descricao", "politica_id", "ativo"}
    )

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = Field(default=None, min_length=1)
    politica_id: uuid.UUID | None = None
    ativo: bool | None = None


class PapelRead(PapelSummary):
    politica_id: uuid.UUID
    ativo: bool
    politica: PoliticaSummary | None = None


# AtribuicaoPapelDominio


class AtribuicaoCreate(CamelModel):
    papel_id: uuid.UUID
    dominio_id: uuid.UUID
    tipo_entidade: TipoEntidade
    documento_atribuicao: str | None = Field(default=None, max_length=500)
    onboarding: bool = False
    data_inicio_vigencia: datetime
    data_termino: datetime | None = None
    observacoes: str | None = None


class AtribuicaoUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"papel_id", "dominio_id", "tipo_entidade", "onboarding", "data_inicio_vigencia"}
    )

    papel_id: uuid.UUID | None = None
    dominio_id: uuid.UUID | None = None
    tipo_entidade: TipoEntidade | None = None
    documento_atribuicao: str | None = Field(default=None, max_length=500)
    onboarding: bool | None = None
    data_inicio_vigencia: datetime | None = None
    data_termino: datetime | None = None
    observacoes: str | None = None


class AtribuicaoRead(EntityRead):
    papel_id: uuid.UUID
    dominio_id: uuid.UUID
    tipo_entidade: TipoEntidade
    documento_atribuicao: str | None = None
    onboarding: bool
    data_inicio_vigencia: datetime
    data_termino: datetime | None = None
    observacoes: str | None = None
    papel: PapelSummary | None = None
    dominio: ComunidadeSummary | None = None


# DimensaoQualidade


class DimensaoQualidadeCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    politica_id: uuid.UUID


class DimensaoQualidadeUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome", "politica_id"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    politica_id: uuid.UUID | None = None


class DimensaoQualidadeRead(DimensaoSummary):
    politica_id: uuid.UUID
    politica: PoliticaSummary | None = None


# RegraQualidade


class RegraQualidadeCreate(CamelModel):
    descricao: str = Field(min_length=1)
    dimensao_id: uuid.UUID
    tabela_id: uuid.UUID | None = None
    coluna_id: uuid.UUID | None = None
    responsavel_id: uuid.UUID


class RegraQualidadeUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"descricao", "dimensao_id", "responsavel_id"}
    )

    descricao: str | None = Field(default=None, min_length=1)
    dimensao_id: uuid.UUID | None = None
    tabela_id: uuid.UUID | None = None
    coluna_id: uuid.UUID | None = None
    responsavel_id: uuid.UUID | None = None


class RegraQualidadeRead(EntityRead):
    descricao: str
    dimensao_id: uuid.UUID
    tabela_id: uuid.UUID | None = None
    coluna_id: uuid.UUID | None = None
    responsavel_id: uuid.UUID
    dimensao: DimensaoSummary | None = None
    tabela: TabelaSummary | None = None
    coluna: ColunaSummary | None = None
    responsavel: UsuarioSummary | None = None


# RegraNegocio


class RegraNegocioCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    codigo: str = Field(min_length=1, max_length=50)
    descricao: str = Field(min_length=1)
    observacoes: str | None = None
    tipo_regra: TipoRegraNegocio
    prioridade: Prioridade = Prioridade.MEDIA
    complexidade: Complexidade = Complexidade.MEDIA
    processo_id: uuid.UUID
    sistema_id: uuid.UUID | None = None
    versao: str = Field(default="1.0", min_length=1, max_length=20)
    status: StatusRegraNegocio = StatusRegraNegocio.ATIVA
    data_inicio_vigencia: datetime | None = None
    data_fim_vigencia: datetime | None = None
    ativo: bool = True

    @model_validator(mode="after")
    def check_vigencia(self) -> Self:
        inicio, fim = self.data_inicio_vigencia, self.data_fim_vigencia
        if inicio is not None and fim is not None and as_naive_utc(fim) <= as_naive_utc(inicio):
            raise ValueError(DATA_FIM_MESSAGE)
        return self


class RegraNegocioUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {
            "nome",
            "codigo",
            "descricao",
            "tipo_regra",
            "prioridade",
            "complexidade",
            "processo_id",
            "versao",
            "status",
            "ativo",
        }
    )

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    codigo: str | None = Field(default=None, min_length=1, max_length=50)
    descricao: str | None = Field(default=None, min_length=1)
    observacoes: str | None = None
    tipo_regra: TipoRegraNegocio | None = None
    prioridade: Prioridade | None = None
    complexidade: Complexidade | None = None
    processo_id: uuid.UUID | None = None
    sistema_id: uuid.UUID | None = None
    versao: str | None = Field(default=None, min_length=1, max_length=20)
    status: StatusRegraNegocio | None = None
    data_inicio_vigencia: datetime | None = None
    data_fim_vigencia: datetime | None = None
    ativo: bool | None = None


class RegraNegocioRead(EntityRead):
    nome: str
    codigo: str
    descricao: str
    observacoes: str | None = None
    tipo_regra: TipoRegraNegocio
    prioridade: Prioridade
    complexidade: Complexidade
    processo_id: uuid.UUID
    sistema_id: uuid.UUID | None = None
    versao: str
    status: StatusRegraNegocio
    data_inicio_vigencia: datetime | None = None
    data_fim_vigencia: datetime | None = None
    ativo: bool
    processo: ProcessoSummary | None = None
    sistema: SistemaSummary | None = None


# ClassificacaoInformacao


class ClassificacaoInformacaoCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    politica_id: uuid.UUID
    termo_id: uuid.UUID | None = None
    ativo: bool = True


class ClassificacaoInformacaoUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome", "politica_id", "ativo"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    politica_id: uuid.UUID | None = None
    termo_id: uuid.UUID | None = None
    ativo: bool | None = None


class AtribuirTermoRequest(CamelModel):
    termo_id: uuid.UUID


class ClassificacaoInformacaoRead(EntityRead):
    nome: str
    descricao: str | None = None
    politica_id: uuid.UUID
    termo_id: uuid.UUID | None = None
    ativo: bool
    politica: PoliticaSummary | None = None
    termo: DefinicaoSummary | None = None
