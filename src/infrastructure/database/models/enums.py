"""Enumerations shared by the ORM models and the API schemas."""

from enum import StrEnum

from sqlalchemy import Enum


class CategoriaTipoDados(StrEnum):
    PRIMITIVO = "PRIMITIVO"
    COMPLEXO = "COMPLEXO"
    ESTRUTURADO = "ESTRUTURADO"
    SEMI_ESTRUTURADO = "SEMI_ESTRUTURADO"
    NAO_ESTRUTURADO = "NAO_ESTRUTURADO"


class StatusPolitica(StrEnum):
    EM_ELABORACAO = "Em_elaboracao"
    VIGENTE = "Vigente"
    REVOGADA = "Revogada"


class TipoEntidade(StrEnum):
    """Kinds of catalogued object a role assignment can target."""

    POLITICA = "Politica"
    PAPEL = "Papel"
    ATRIBUICAO = "Atribuicao"
    PROCESSO = "Processo"
    TERMO = "Termo"
    KPI = "KPI"
    REGRA_NEGOCIO = "RegraNegocio"
    REGRA_QUALIDADE = "RegraQualidade"
    DOMINIO = "Dominio"
    SISTEMA = "Sistema"
    TABELA = "Tabela"
    COLUNA = "Coluna"


class TipoRegraNegocio(StrEnum):
    VALIDACAO = "VALIDACAO"
    TRANSFORMACAO = "TRANSFORMACAO"
    CALCULO = "CALCULO"
    CONTROLE = "CONTROLE"
    NEGOCIO = "NEGOCIO"


class Prioridade(StrEnum):
    BAIXA = "BAIXA"
    MEDIA = "MEDIA"
    ALTA = "ALTA"
    CRITICA = "CRITICA"


class Complexidade(StrEnum):
    BAIXA = "BAIXA"
    MEDIA = "MEDIA"
    ALTA = "ALTA"


class StatusRegraNegocio(StrEnum):
    ATIVA = "ATIVA"
    INATIVA = "INATIVA"
    EM_DESENVOLVIMENTO = "EM_DESENVOLVIMENTO"
    DESCONTINUADA = "DESCONTINUADA"


class OperacaoAuditoria(StrEnum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class TipoMfa(StrEnum):
    SMS = "SMS"
    EMAIL = "EMAIL"
    TOTP = "TOTP"


class TipoCodigoMfa(StrEnum):
    SETUP = "SETUP"
    BACKUP = "BACKUP"


def enum_column(enum_cls: type[StrEnum]) -> Enum:
    """Portable VARCHAR-backed enum column storing member values."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
