"""Users, audit trail and multi-factor authentication."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.base import BaseModel
from src.infrastructure.database.models.enums import (
    OperacaoAuditoria,
    TipoCodigoMfa,
    TipoMfa,
    enum_column,
)


class Usuario(BaseModel):
    __tablename__ = "usuario"

    nome: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    senha: Mapped[str] = mapped_column(String(255))
    ativo: Mapped[bool] = mapped_column(Boolean, default=True)


class LogAuditoria(BaseModel):
    """One recorded mutation; before/after snapshots are stored as JSON text."""

    __tablename__ = "log_auditoria"

    entidade: Mapped[str] = mapped_column(String(100), index=True)
    entidade_id: Mapped[str] = mapped_column(String(64), index=True)
    operacao: Mapped[OperacaoAuditoria] = mapped_column(
        enum_column(OperacaoAuditoria)
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    dados_antes: Mapped[str | None] = mapped_column(Text)
    dados_depois: Mapped[str | None] = mapped_column(Text)
    usuario_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("usuario.id", ondelete="SET NULL")
    )

    usuario: Mapped[Usuario | None] = relationship()


class ConfiguracaoMfa(BaseModel):
    __tablename__ = "configuracao_mfa"

    usuario_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("usuario.id", ondelete="CASCADE")
    )
    tipo: Mapped[TipoMfa] = mapped_column(enum_column(TipoMfa))
    telefone: Mapped[str | None] = mapped_column(String(20))
    email: Mapped[str | None] = mapped_column(String(255))
    secret_key: Mapped[str | None] = mapped_column(String(128))
    ativo: Mapped[bool] = mapped_column(Boolean, default=False)
    ativado_em: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    desativado_em: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    ultima_verificacao: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )

    usuario: Mapped[Usuario] = relationship()
    codigos: Mapped[list[CodigoMfa]] = relationship(
        back_populates="configuracao", passive_deletes=True
    )


class CodigoMfa(BaseModel):
    __tablename__ = "codigo_mfa"

    configuracao_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("configuracao_mfa.id", ondelete="CASCADE")
    )
    codigo: Mapped[str] = mapped_column(String(16))
    tipo: Mapped[TipoCodigoMfa] = mapped_column(enum_column(TipoCodigoMfa))
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    usado: Mapped[bool] = mapped_column(Boolean, default=False)

    configuracao: Mapped[ConfiguracaoMfa] = relationship(back_populates="codigos")
