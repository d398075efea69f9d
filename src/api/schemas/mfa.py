"""Multi-factor authentication schemas.

Configurations are always serialized with the TOTP secret hidden and the
phone number reduced to its last four digits.
"""

import uuid
from datetime import datetime

from pydantic import Field, field_serializer

from src.api.schemas.common import CamelModel, EntityRead
from src.api.schemas.usuario import UsuarioSummary
from src.core.constants import MASKED_SECRET
from src.infrastructure.database.models.enums import TipoMfa

VISIBLE_PHONE_DIGITS = 4


def mask_phone(telefone: str | None) -> str | None:
    """Hide every digit of a phone number except the last four."""
    if not telefone:
        return None
    visible = telefone[-VISIBLE_PHONE_DIGITS:]
    return "*" * max(len(telefone) - VISIBLE_PHONE_DIGITS, 0) + visible


class ConfiguracaoMfaRead(EntityRead):
    usuario_id: uuid.UUID
    tipo: TipoMfa
    telefone: str | None = None
    email: str | None = None
    secret_key: str | None = None
    ativo: bool
    ativado_em: datetime | None = None
    desativado_em: datetime | None = None
    ultima_verificacao: datetime | None = None
    usuario: UsuarioSummary | None = None

    @field_serializer("secret_key")
    def hide_secret(self, value: str | None) -> str | None:
        return MASKED_SECRET if value else None

    @field_serializer("telefone")
    def hide_phone(self, value: str | None) -> str | None:
        return mask_phone(value)


class MfaSetupRequest(CamelModel):
    usuario_id: uuid.UUID
    tipo: TipoMfa
    telefone: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, max_length=255)
    secret_key: str | None = Field(default=None, pattern=r"^[0-9a-fA-F]{32,128}$")


class MfaSetupData(CamelModel):
    configuracao_id: uuid.UUID
    tipo: TipoMfa
    codigo: str | None = None
    qr_code_data: str | None = None
    secret_key: str | None = None
    mensagem: str


class MfaEnableRequest(CamelModel):
    usuario_id: uuid.UUID
    codigo: str = Field(min_length=1, max_length=16)


class ConfiguracaoAtivada(CamelModel):
    id: uuid.UUID
    tipo: TipoMfa
    ativo: bool
    ativado_em: datetime | None = None


class MfaEnableData(CamelModel):
    configuracao: ConfiguracaoAtivada
    codigos_backup: list[str]


class MfaVerifyRequest(CamelModel):
    usuario_id: uuid.UUID
    codigo: str = Field(min_length=1, max_length=16)
    tipo: TipoMfa


class MfaVerifyData(CamelModel):
    verificado: bool
    tipo: TipoMfa
    timestamp: datetime


class MfaDisableRequest(CamelModel):
    codigo: str = Field(min_length=1, max_length=16)


class MfaDisableData(CamelModel):
    id: uuid.UUID
    ativo: bool
    desativado_em: datetime | None = None
