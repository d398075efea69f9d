"""Request and response models for the technical catalog entities."""

import uuid
from typing import ClassVar

import orjson
from pydantic import Field, PositiveInt, field_validator

from src.api.schemas.common import CamelModel, EntityRead, PartialUpdate
from src.infrastructure.database.models.enums import CategoriaTipoDados


# Summaries used when an entity is nested inside another response


class SistemaSummary(EntityRead):
    nome: str
    descricao: str | None = None


class BancoSummary(EntityRead):
    nome: str
    descricao: str | None = None
    tipo: str | None = None


class TabelaSummary(EntityRead):
    nome: str
    descricao: str | None = None
    banco_id: uuid.UUID | None = None
    sistema_id: uuid.UUID | None = None


class TipoDadosSummary(EntityRead):
    nome: str
    categoria: CategoriaTipoDados


class ColunaSummary(EntityRead):
    nome: str
    descricao: str | None = None
    tabela_id: uuid.UUID
    tipo_dados_id: uuid.UUID | None = None


class DefinicaoSummary(EntityRead):
    nome: str
    sigla: str | None = None


# Sistema


class SistemaCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None


class SistemaUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None


class SistemaRead(SistemaSummary):
    tabelas: list[TabelaSummary] = []


# Banco


class BancoCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    servidor: str | None = Field(default=None, max_length=255)
    porta: PositiveInt | None = None
    tipo: str | None = Field(default=None, max_length=100)


class BancoUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    servidor: str | None = Field(default=None, max_length=255)
    porta: PositiveInt | None = None
    tipo: str | None = Field(default=None, max_length=100)


class BancoRead(BancoSummary):
    servidor: str | None = None
    porta: int | None = None
    total_tabelas: int = 0


# Tabela


class TabelaCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    banco_id: uuid.UUID | None = None
    sistema_id: uuid.UUID | None = None


class TabelaUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    banco_id: uuid.UUID | None = None
    sistema_id: uuid.UUID | None = None


class TabelaRead(TabelaSummary):
    banco: BancoSummary | None = None
    sistema: SistemaSummary | None = None
    colunas: list[ColunaSummary] = []


# TipoDados


class TipoDadosCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    categoria: CategoriaTipoDados = CategoriaTipoDados.PRIMITIVO
    formato: str | None = Field(default=None, max_length=100)
    permite_nulo: bool = True
    ativo: bool = True


class TipoDadosUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"nome", "categoria", "permite_nulo", "ativo"}
    )

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    categoria: CategoriaTipoDados | None = None
    formato: str | None = Field(default=None, max_length=100)
    permite_nulo: bool | None = None
    ativo: bool | None = None


class TipoDadosRead(TipoDadosSummary):
    descricao: str | None = None
    formato: str | None = None
    permite_nulo: bool
    ativo: bool


# Coluna


class ColunaCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    obrigatorio: bool = False
    unicidade: bool = False
    ativo: bool = True
    tabela_id: uuid.UUID
    tipo_dados_id: uuid.UUID | None = None
    politica_interna_id: uuid.UUID | None = None


class ColunaUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"nome", "obrigatorio", "unicidade", "ativo", "tabela_id"}
    )

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    obrigatorio: bool | None = None
    unicidade: bool | None = None
    ativo: bool | None = None
    tabela_id: uuid.UUID | None = None
    tipo_dados_id: uuid.UUID | None = None
    politica_interna_id: uuid.UUID | None = None


class ColunaRead(ColunaSummary):
    obrigatorio: bool
    unicidade: bool
    ativo: bool
    politica_interna_id: uuid.UUID | None = None
    tabela: TabelaSummary | None = None
    tipo_dados: TipoDadosSummary | None = None


# Definicao


class DefinicaoCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    sigla: str | None = Field(default=None, max_length=50)


class DefinicaoUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    sigla: str | None = Field(default=None, max_length=50)


class DefinicaoRead(DefinicaoSummary):
    descricao: str | None = None


# ListaReferencia


def normalize_valores(value: object) -> list[str]:
    """Accept a JSON array (or its text) and return its unique, trimmed values.

    Raises:
        ValueError: If the input is not an array or holds blank values.
    """
    if isinstance(value, (str, bytes)):
        try:
            value = orjson.loads(value)
        except orjson.JSONDecodeError as e:
            msg = "Formato JSON inválido para valores"
            raise ValueError(msg) from e
    if not isinstance(value, list):
        msg = "Valores devem ser fornecidos como um array JSON"
        raise ValueError(msg)

    valores = list(dict.fromkeys(str(item).strip() for item in value))
    if not valores:
        msg = "Valores são obrigatórios"
        raise ValueError(msg)
    if "" in valores:
        msg = "Valores não podem estar vazios"
        raise ValueError(msg)
    return valores


class ListaReferenciaCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=255)
    descricao: str | None = None
    valores: list[str]
    tabela_id: uuid.UUID | None = None
    coluna_id: uuid.UUID | None = None

    @field_validator("valores", mode="before")
    @classmethod
    def parse_valores(cls, value: object) -> list[str]:
        return normalize_valores(value)


class ListaReferenciaUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome", "valores"})

    nome: str | None = Field(default=None, min_length=1, max_length=255)
    descricao: str | None = None
    valores: list[str] | None = None
    tabela_id: uuid.UUID | None = None
    coluna_id: uuid.UUID | None = None

    @field_validator("valores", mode="before")
    @classmethod
    def parse_valores(cls, value: object) -> list[str] | None:
        return None if value is None else normalize_valores(value)


class ListaReferenciaRead(EntityRead):
    nome: str
    descricao: str | None = None
    valores: list[str]
    tabela_id: uuid.UUID | None = None
    coluna_id: uuid.UUID | None = None
    tabela: TabelaSummary | None = None
    coluna: ColunaSummary | None = None

    @field_validator("valores", mode="before")
    @classmethod
    def decode_valores(cls, value: object) -> object:
        # stored as JSON text
        return orjson.loads(value) if isinstance(value, str) else value
