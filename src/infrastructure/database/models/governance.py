"""Governance model: communities, processes, policies, roles, business and
quality rules, and information classification.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.base import BaseModel
from src.infrastructure.database.models.enums import (
    Complexidade,
    Prioridade,
    StatusPolitica,
    StatusRegraNegocio,
    TipoEntidade,
    TipoRegraNegocio,
    enum_column,
)

if TYPE_CHECKING:
    from src.infrastructure.database.models.catalog import Coluna, Definicao, Sistema, Tabela
    from src.infrastructure.database.models.identity import Usuario


class Comunidade(BaseModel):
    """A data domain; communities may nest under a parent community."""

    __tablename__ = "comunidade"

    nome: Mapped[str] = mapped_column(String(255), unique=True)
    descricao: Mapped[str | None] = mapped_column(Text)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("comunidade.id"))

    processos: Mapped[list[Processo]] = relationship(
        back_populates="comunidade", passive_deletes=True
    )


class Processo(BaseModel):
    __tablename__ = "processo"

    nome: Mapped[str] = mapped_column(String(255))
    descricao: Mapped[str | None] = mapped_column(Text)
    comunidade_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("comunidade.id"))

    comunidade: Mapped[Comunidade] = relationship(back_populates="processos")


class PoliticaInterna(BaseModel):
    __tablename__ = "politica_interna"

    nome: Mapped[str] = mapped_column(String(255))
    descricao: Mapped[str | None] = mapped_column(Text)
    categoria: Mapped[str | None] = mapped_column(String(100))
    objetivo: Mapped[str | None] = mapped_column(Text)
    escopo: Mapped[str | None] = mapped_column(Text)
    responsavel: Mapped[str | None] = mapped_column(String(255))
    data_criacao: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    data_inicio_vigencia: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    data_termino: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[StatusPolitica] = mapped_column(
        enum_column(StatusPolitica), default=StatusPolitica.EM_ELABORACAO
    )
    versao: Mapped[str] = mapped_column(String(20), default="1.0")
    anexos_url: Mapped[str | None] = mapped_column(String(500))
    relacionamento: Mapped[str | None] = mapped_column(Text)
    observacoes: Mapped[str | None] = mapped_column(Text)


class Papel(BaseModel):
    __tablename__ = "papel"

    nome: Mapped[str] = mapped_column(String(255))
    descricao: Mapped[str] = mapped_column(Text)
    politica_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("politica_interna.id"))
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)

    politica: Mapped[PoliticaInterna] = relationship()


class AtribuicaoPapelDominio(BaseModel):
    """Assignment of a role to a community for a kind of catalogued entity."""

    __tablename__ = "atribuicao_papel_dominio"

    papel_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("papel.id"))
    dominio_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("comunidade.id"))
    tipo_entidade: Mapped[TipoEntidade] = mapped_column(enum_column(TipoEntidade))
    documento_atribuicao: Mapped[str | None] = mapped_column(String(500))
    onboarding: Mapped[bool] = mapped_column(Boolean, default=False)
    data_inicio_vigencia: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    data_termino: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    observacoes: Mapped[str | None] = mapped_column(Text)

    papel: Mapped[Papel] = relationship()
    dominio: Mapped[Comunidade] = relationship()


class DimensaoQualidade(BaseModel):
    __tablename__ = "dimensao_qualidade"

    nome: Mapped[str] = mapped_column(String(255))
    descricao: Mapped[str | None] = mapped_column(Text)
    politica_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("politica_interna.id"))

    politica: Mapped[PoliticaInterna] = relationship()


class RegraQualidade(BaseModel):
    __tablename__ = "regra_qualidade"

    descricao: Mapped[str] = mapped_column(Text)
    dimensao_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("dimensao_qualidade.id")
    )
    tabela_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("tabela.id"))
    coluna_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("coluna.id"))
    responsavel_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("usuario.id"))

    dimensao: Mapped[DimensaoQualidade] = relationship()
    tabela: Mapped[Tabela | None] = relationship()
    coluna: Mapped[Coluna | None] = relationship(back_populates="regras_qualidade")
    responsavel: Mapped[Usuario] = relationship()


class RegraNegocio(BaseModel):
    __tablename__ = "regra_negocio"

    nome: Mapped[str] = mapped_column(String(255))
    codigo: Mapped[str] = mapped_column(String(50), unique=True)
    descricao: Mapped[str] = mapped_column(Text)
    observacoes: Mapped[str | None] = mapped_column(Text)
    tipo_regra: Mapped[TipoRegraNegocio] = mapped_column(enum_column(TipoRegraNegocio))
    prioridade: Mapped[Prioridade] = mapped_column(
        enum_column(Prioridade), default=Prioridade.MEDIA
    )
    complexidade: Mapped[Complexidade] = mapped_column(
        enum_column(Complexidade), default=Complexidade.MEDIA
    )
    processo_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("processo.id"))
    sistema_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("sistema.id"))
    versao: Mapped[str] = mapped_column(String(20), default="1.0")
    status: Mapped[StatusRegraNegocio] = mapped_column(
        enum_column(StatusRegraNegocio), default=StatusRegraNegocio.ATIVA
    )
    data_inicio_vigencia: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    data_fim_vigencia: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)

    processo: Mapped[Processo] = relationship()
    sistema: Mapped[Sistema | None] = relationship()


class ClassificacaoInformacao(BaseModel):
    """Information classification level defined by a policy.

    May point at the glossary term (``Definicao``) it classifies.
    """

    __tablename__ = "classificacao_informacao"

    nome: Mapped[str] = mapped_column(String(255))
    descricao: Mapped[str | None] = mapped_column(Text)
    politica_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("politica_interna.id"))
    termo_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("definicao.id"))
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)

    politica: Mapped[PoliticaInterna] = relationship()
    termo: Mapped[Definicao | None] = relationship()
