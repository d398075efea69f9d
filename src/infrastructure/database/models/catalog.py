"""Technical catalog: systems, databases, tables, columns, data types and
the glossary and reference lists attached to them.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    select,
)
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from src.infrastructure.database.base import BaseModel
from src.infrastructure.database.models.enums import CategoriaTipoDados, enum_column

if TYPE_CHECKING:
    from src.infrastructure.database.models.governance import RegraQualidade


class Sistema(BaseModel):
    __tablename__ = "sistema"

    nome: Mapped[str] = mapped_column(String(255), unique=True)
    descricao: Mapped[str | None] = mapped_column(Text)

    tabelas: Mapped[list[Tabela]] = relationship(
        back_populates="sistema", passive_deletes=True
    )


class Banco(BaseModel):
    __tablename__ = "banco"

    nome: Mapped[str] = mapped_column(String(255), unique=True)
    descricao: Mapped[str | None] = mapped_column(Text)
    servidor: Mapped[str | None] = mapped_column(String(255))
    porta: Mapped[int | None] = mapped_column(Integer)
    tipo: Mapped[str | None] = mapped_column(String(100))

    tabelas: Mapped[list[Tabela]] = relationship(
        back_populates="banco", passive_deletes=True
    )

    if TYPE_CHECKING:
        total_tabelas: int


class Tabela(BaseModel):
    __tablename__ = "tabela"

    nome: Mapped[str] = mapped_column(String(255))
    descricao: Mapped[str | None] = mapped_column(Text)
    banco_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("banco.id"))
    sistema_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("sistema.id"))

    banco: Mapped[Banco | None] = relationship(back_populates="tabelas")
    sistema: Mapped[Sistema | None] = relationship(back_populates="tabelas")
    colunas: Mapped[list[Coluna]] = relationship(
        back_populates="tabela", passive_deletes=True
    )


class TipoDados(BaseModel):
    __tablename__ = "tipo_dados"

    nome: Mapped[str] = mapped_column(String(255), unique=True)
    descricao: Mapped[str | None] = mapped_column(Text)
    categoria: Mapped[CategoriaTipoDados] = mapped_column(
        enum_column(CategoriaTipoDados), default=CategoriaTipoDados.PRIMITIVO
    )
    formato: Mapped[str | None] = mapped_column(String(100))
    permite_nulo: Mapped[bool] = mapped_column(Boolean, default=True)
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)

    colunas: Mapped[list[Coluna]] = relationship(
        back_populates="tipo_dados", passive_deletes=True
    )


class Coluna(BaseModel):
    __tablename__ = "coluna"
    __table_args__ = (UniqueConstraint("tabela_id", "nome"),)

    nome: Mapped[str] = mapped_column(String(255))
    descricao: Mapped[str | None] = mapped_column(Text)
    obrigatorio: Mapped[bool] = mapped_column(Boolean, default=False)
    unicidade: Mapped[bool] = mapped_column(Boolean, default=False)
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)
    tabela_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("tabela.id"))
    tipo_dados_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("tipo_dados.id")
    )
    politica_interna_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("politica_interna.id")
    )

    tabela: Mapped[Tabela] = relationship(back_populates="colunas")
    tipo_dados: Mapped[TipoDados | None] = relationship(back_populates="colunas")
    regras_qualidade: Mapped[list[RegraQualidade]] = relationship(
        back_populates="coluna", passive_deletes=True
    )
    listas_referencia: Mapped[list[ListaReferencia]] = relationship(
        back_populates="coluna", passive_deletes=True
    )


# needs Tabela, so it is attached once both classes exist
Banco.total_tabelas = column_property(
    select(func.count(Tabela.id))
    .where(Tabela.banco_id == Banco.id)
    .correlate_except(Tabela)
    .scalar_subquery()
)


class Definicao(BaseModel):
    """A business glossary term."""

    __tablename__ = "definicao"

    nome: Mapped[str] = mapped_column(String(255), unique=True)
    descricao: Mapped[str | None] = mapped_column(Text)
    sigla: Mapped[str | None] = mapped_column(String(50))


class ListaReferencia(BaseModel):
    """Closed list of allowed values, optionally bound to a table or column.

    ``valores`` holds a JSON array of unique strings.
    """

    __tablename__ = "lista_referencia"

    nome: Mapped[str] = mapped_column(String(255))
    descricao: Mapped[str | None] = mapped_column(Text)
    valores: Mapped[str] = mapped_column(Text)
    tabela_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("tabela.id"))
    coluna_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("coluna.id"))

    tabela: Mapped[Tabela | None] = relationship()
    coluna: Mapped[Coluna | None] = relationship(back_populates="listas_referencia")
