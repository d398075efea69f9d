"""ORM models. Importing this package registers every table on ``Base.metadata``."""

from src.infrastructure.database.models.catalog import (
    Banco,
    Coluna,
    Definicao,
    ListaReferencia,
    Sistema,
    Tabela,
    TipoDados,
)
from src.infrastructure.database.models.governance import (
    AtribuicaoPapelDominio,
    ClassificacaoInformacao,
    Comunidade,
    DimensaoQualidade,
    Papel,
    PoliticaInterna,
    Processo,
    RegraNegocio,
    RegraQualidade,
)
from src.infrastructure.database.models.identity import (
    CodigoMfa,
    ConfiguracaoMfa,
    LogAuditoria,
    Usuario,
)

__all__ = [
    "AtribuicaoPapelDominio",
    "Banco",
    "ClassificacaoInformacao",
    "CodigoMfa",
    "Coluna",
    "Comunidade",
    "ConfiguracaoMfa",
    "Definicao",
    "DimensaoQualidade",
    "ListaReferencia",
    "LogAuditoria",
    "Papel",
    "PoliticaInterna",
    "Processo",
    "RegraNegocio",
    "RegraQualidade",
    "Sistema",
    "Tabela",
    "TipoDados",
    "Usuario",
]
