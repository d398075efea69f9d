from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.controllers.helpers import envelope, store_errors
from src.infrastructure.database.models import (
    Coluna,
    Comunidade,
    PoliticaInterna,
    Processo,
    Sistema,
    Tabela,
    Usuario,
)

METRICAS = {
    "total_usuarios": Usuario,
    "total_sistemas": Sistema,
    "total_processos": Processo,
    "total_tabelas": Tabela,
    "total_colunas": Coluna,
    "total_politicas": PoliticaInterna,
    "total_comunidades": Comunidade,
}


class DashboardController:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def metricas_gerais(self) -> dict:
        """Row counts per catalogued entity."""
        metricas = {}
        with store_errors("Dashboard"):
            for name, model in METRICAS.items():
                stmt = select(func.count()).select_from(model)
                metricas[name] = (await self.session.execute(stmt)).scalar() or 0
        return envelope("Métricas gerais obtidas com sucesso", metricas)
