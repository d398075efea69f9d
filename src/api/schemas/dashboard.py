from src.api.schemas.common import CamelModel


class MetricasGerais(CamelModel):
    """Record totals shown on the catalog home page."""

    total_usuarios: int
    total_sistemas: int
    total_processos: int
    total_tabelas: int
    total_colunas: int
    total_politicas: int
    total_comunidades: int
