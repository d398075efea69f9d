"""HTTP routers, one base path per entity."""

from fastapi import APIRouter

from src.api.routes import auditoria, catalog, dashboard, governance, mfa, usuarios

ROUTERS: tuple[APIRouter, ...] = (
    usuarios.router,
    catalog.sistemas_router,
    catalog.bancos_router,
    catalog.tabelas_router,
    catalog.tipos_dados_router,
    catalog.colunas_router,
    catalog.definicoes_router,
    catalog.listas_referencia_router,
    governance.comunidades_router,
    governance.processos_router,
    governance.politicas_router,
    governance.papeis_router,
    governance.atribuicoes_router,
    governance.dimensoes_router,
    governance.regras_router,
    governance.regras_negocio_router,
    governance.classificacoes_router,
    auditoria.router,
    mfa.router,
    dashboard.router,
)
