from fastapi import APIRouter, Depends

from src.api.controllers.dashboard import DashboardController
from src.api.middleware.auth import require_authentication
from src.api.schemas.common import Envelope
from src.api.schemas.dashboard import MetricasGerais
from src.infrastructure.database.dependencies import DatabaseSession

router = APIRouter(
    prefix="/dashboard", tags=["dashboard"], dependencies=[Depends(require_authentication)]
)


@router.get("/metricas", response_model=Envelope[MetricasGerais])
async def metricas_gerais(db: DatabaseSession) -> dict:
    return await DashboardController(db).metricas_gerais()
