"""Governance routes: communities, processes, policies, roles, assignments, quality,
business rules and information classifications.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.controllers.governance import (
    AtribuicaoController,
    ClassificacaoInformacaoController,
    ComunidadeController,
    DimensaoQualidadeController,
    PapelController,
    PoliticaInternaController,
    ProcessoController,
    RegraNegocioController,
    RegraQualidadeController,
)
from src.api.controllers.helpers import validate_id
from src.api.dependencies import Paging, Search
from src.api.middleware.auth import require_authentication
from src.api.schemas.common import Envelope
from src.api.schemas.governance import (
    AtribuicaoCreate,
    AtribuicaoRead,
    AtribuicaoUpdate,
    AtribuirTermoRequest,
    ClassificacaoInformacaoCreate,
    ClassificacaoInformacaoRead,
    ClassificacaoInformacaoUpdate,
    ComunidadeCreate,
    ComunidadeRead,
    ComunidadeUpdate,
    DimensaoQualidadeCreate,
    DimensaoQualidadeRead,
    DimensaoQualidadeUpdate,
    PapelCreate,
    PapelRead,
    PapelUpdate,
    PoliticaInternaCreate,
    PoliticaInternaRead,
    PoliticaInternaUpdate,
    ProcessoCreate,
    ProcessoRead,
    ProcessoUpdate,
    RegraNegocioCreate,
    RegraNegocioRead,
    RegraNegocioUpdate,
    RegraQualidadeCreate,
    RegraQualidadeRead,
    RegraQualidadeUpdate,
)
from src.infrastructure.database.dependencies import DatabaseSession
from src.infrastructure.database.models.enums import (
    Prioridade,
    StatusPolitica,
    StatusRegraNegocio,
    TipoEntidade,
    TipoRegraNegocio,
)

AUTHENTICATED = [Depends(require_authentication)]

comunidades_router = APIRouter(
    prefix="/comunidades", tags=["comunidades"], dependencies=AUTHENTICATED
)
processos_router = APIRouter(prefix="/processos", tags=["processos"], dependencies=AUTHENTICATED)
politicas_router = APIRouter(
    prefix="/politicas-internas", tags=["politicas-internas"], dependencies=AUTHENTICATED
)
papeis_router = APIRouter(prefix="/papeis", tags=["papeis"], dependencies=AUTHENTICATED)
atribuicoes_router = APIRouter(
    prefix="/atribuicoes", tags=["atribuicoes"], dependencies=AUTHENTICATED
)
dimensoes_router = APIRouter(
    prefix="/dimensoes-qualidade", tags=["dimensoes-qualidade"], dependencies=AUTHENTICATED
)
regras_router = APIRouter(
    prefix="/regras-qualidade", tags=["regras-qualidade"], dependencies=AUTHENTICATED
)
regras_negocio_router = APIRouter(
    prefix="/regras-negocio", tags=["regras-negocio"], dependencies=AUTHENTICATED
)
classificacoes_router = APIRouter(
    prefix="/classificacoes-informacao",
    tags=["classificacoes-informacao"],
    dependencies=AUTHENTICATED,
)


# Comunidades


@comunidades_router.get("", response_model=Envelope[list[ComunidadeRead]])
async def list_comunidades(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    parent_id: Annotated[uuid.UUID | None, Query(alias="parentId")] = None,
) -> dict:
    return await ComunidadeController(db).find_many(paging, search, parent_id)


@comunidades_router.get("/{comunidade_id}", response_model=Envelope[ComunidadeRead])
async def get_comunidade(comunidade_id: str, db: DatabaseSession) -> dict:
    return await ComunidadeController(db).find_by_id(validate_id(comunidade_id))


@comunidades_router.post(
    "", response_model=Envelope[ComunidadeRead], status_code=status.HTTP_201_CREATED
)
async def create_comunidade(payload: ComunidadeCreate, db: DatabaseSession) -> dict:
    return await ComunidadeController(db).create(payload)


@comunidades_router.put("/{comunidade_id}", response_model=Envelope[ComunidadeRead])
async def update_comunidade(
    comunidade_id: str, payload: ComunidadeUpdate, db: DatabaseSession
) -> dict:
    return await ComunidadeController(db).update(validate_id(comunidade_id), payload)


@comunidades_router.delete("/{comunidade_id}", response_model=Envelope[ComunidadeRead])
async def delete_comunidade(comunidade_id: str, db: DatabaseSession) -> dict:
    return await ComunidadeController(db).delete(validate_id(comunidade_id))


# Processos


@processos_router.get("", response_model=Envelope[list[ProcessoRead]])
async def list_processos(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    comunidade_id: Annotated[uuid.UUID | None, Query(alias="comunidadeId")] = None,
) -> dict:
    return await ProcessoController(db).find_many(paging, search, comunidade_id)


@processos_router.get("/{processo_id}", response_model=Envelope[ProcessoRead])
async def get_processo(processo_id: str, db: DatabaseSession) -> dict:
    return await ProcessoController(db).find_by_id(validate_id(processo_id))


@processos_router.post(
    "", response_model=Envelope[ProcessoRead], status_code=status.HTTP_201_CREATED
)
async def create_processo(payload: ProcessoCreate, db: DatabaseSession) -> dict:
    return await ProcessoController(db).create(payload)


@processos_router.put("/{processo_id}", response_model=Envelope[ProcessoRead])
async def update_processo(
    processo_id: str, payload: ProcessoUpdate, db: DatabaseSession
) -> dict:
    return await ProcessoController(db).update(validate_id(processo_id), payload)


@processos_router.delete("/{processo_id}", response_model=Envelope[ProcessoRead])
async def delete_processo(processo_id: str, db: DatabaseSession) -> dict:
    return await ProcessoController(db).delete(validate_id(processo_id))


# Políticas internas


@politicas_router.get("", response_model=Envelope[list[PoliticaInternaRead]])
async def list_politicas(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    status_politica: Annotated[StatusPolitica | None, Query(alias="status")] = None,
) -> dict:
    return await PoliticaInternaController(db).find_many(paging, search, status_politica)


@politicas_router.get("/{politica_id}", response_model=Envelope[PoliticaInternaRead])
async def get_politica(politica_id: str, db: DatabaseSession) -> dict:
    return await PoliticaInternaController(db).find_by_id(validate_id(politica_id))


@politicas_router.post(
    "", response_model=Envelope[PoliticaInternaRead], status_code=status.HTTP_201_CREATED
)
async def create_politica(payload: PoliticaInternaCreate, db: DatabaseSession) -> dict:
    return await PoliticaInternaController(db).create(payload)


@politicas_router.put("/{politica_id}", response_model=Envelope[PoliticaInternaRead])
async def update_politica(
    politica_id: str, payload: PoliticaInternaUpdate, db: DatabaseSession
) -> dict:
    return await PoliticaInternaController(db).update(validate_id(politica_id), payload)


@politicas_router.delete("/{politica_id}", response_model=Envelope[PoliticaInternaRead])
async def delete_politica(politica_id: str, db: DatabaseSession) -> dict:
    return await PoliticaInternaController(db).delete(validate_id(politica_id))


# Papéis


@papeis_router.get("", response_model=Envelope[list[PapelRead]])
async def list_papeis(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    politica_id: Annotated[uuid.UUID | None, Query(alias="politicaId")] = None,
    ativo: bool | None = None,
) -> dict:
    return await PapelController(db).find_many(paging, search, politica_id, ativo)


@papeis_router.get("/{papel_id}", response_model=Envelope[PapelRead])
async def get_papel(papel_id: str, db: DatabaseSession) -> dict:
    return await PapelController(db).find_by_id(validate_id(papel_id))


@papeis_router.post("", response_model=Envelope[PapelRead], status_code=status.HTTP_201_CREATED)
async def create_papel(payload: PapelCreate, db: DatabaseSession) -> dict:
    return await PapelController(db).create(payload)


@papeis_router.put("/{papel_id}", response_model=Envelope[PapelRead])
async def update_papel(papel_id: str, payload: PapelUpdate, db: DatabaseSession) -> dict:
    return await PapelController(db).update(validate_id(papel_id), payload)


@papeis_router.delete("/{papel_id}", response_model=Envelope[PapelRead])
async def delete_papel(papel_id: str, db: DatabaseSession) -> dict:
    return await PapelController(db).delete(validate_id(papel_id))


# Atribuições papel/domínio


@atribuicoes_router.get("", response_model=Envelope[list[AtribuicaoRead]])
async def list_atribuicoes(
    db: DatabaseSession,
    paging: Paging,
    tipo_entidade: Annotated[TipoEntidade | None, Query(alias="tipoEntidade")] = None,
    papel_id: Annotated[uuid.UUID | None, Query(alias="papelId")] = None,
    dominio_id: Annotated[uuid.UUID | None, Query(alias="dominioId")] = None,
    onboarding: bool | None = None,
) -> dict:
    return await AtribuicaoController(db).find_many(
        paging, tipo_entidade, papel_id, dominio_id, onboarding
    )


@atribuicoes_router.get("/{atribuicao_id}", response_model=Envelope[AtribuicaoRead])
async def get_atribuicao(atribuicao_id: str, db: DatabaseSession) -> dict:
    return await AtribuicaoController(db).find_by_id(validate_id(atribuicao_id))


@atribuicoes_router.post(
    "", response_model=Envelope[AtribuicaoRead], status_code=status.HTTP_201_CREATED
)
async def create_atribuicao(payload: AtribuicaoCreate, db: DatabaseSession) -> dict:
    return await AtribuicaoController(db).create(payload)


@atribuicoes_router.put("/{atribuicao_id}", response_model=Envelope[AtribuicaoRead])
async def update_atribuicao(
    atribuicao_id: str, payload: AtribuicaoUpdate, db: DatabaseSession
) -> dict:
    return await AtribuicaoController(db).update(validate_id(atribuicao_id), payload)


@atribuicoes_router.delete("/{atribuicao_id}", response_model=Envelope[AtribuicaoRead])
async def delete_atribuicao(atribuicao_id: str, db: DatabaseSession) -> dict:
    return await AtribuicaoController(db).delete(validate_id(atribuicao_id))


# Dimensões de qualidade


@dimensoes_router.get("", response_model=Envelope[list[DimensaoQualidadeRead]])
async def list_dimensoes(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    politica_id: Annotated[uuid.UUID | None, Query(alias="politicaId")] = None,
) -> dict:
    return await DimensaoQualidadeController(db).find_many(paging, search, politica_id)


@dimensoes_router.get("/{dimensao_id}", response_model=Envelope[DimensaoQualidadeRead])
async def get_dimensao(dimensao_id: str, db: DatabaseSession) -> dict:
    return await DimensaoQualidadeController(db).find_by_id(validate_id(dimensao_id))


@dimensoes_router.post(
    "", response_model=Envelope[DimensaoQualidadeRead], status_code=status.HTTP_201_CREATED
)
async def create_dimensao(payload: DimensaoQualidadeCreate, db: DatabaseSession) -> dict:
    return await DimensaoQualidadeController(db).create(payload)


@dimensoes_router.put("/{dimensao_id}", response_model=Envelope[DimensaoQualidadeRead])
async def update_dimensao(
    dimensao_id: str, payload: DimensaoQualidadeUpdate, db: DatabaseSession
) -> dict:
    return await DimensaoQualidadeController(db).update(validate_id(dimensao_id), payload)


@dimensoes_router.delete("/{dimensao_id}", response_model=Envelope[DimensaoQualidadeRead])
async def delete_dimensao(dimensao_id: str, db: DatabaseSession) -> dict:
    return await DimensaoQualidadeController(db).delete(validate_id(dimensao_id))


# Regras de qualidade


@regras_router.get("", response_model=Envelope[list[RegraQualidadeRead]])
async def list_regras(
    db: DatabaseSession,
    paging: Paging,
    dimensao_id: Annotated[uuid.UUID | None, Query(alias="dimensaoId")] = None,
    tabela_id: Annotated[uuid.UUID | None, Query(alias="tabelaId")] = None,
    coluna_id: Annotated[uuid.UUID | None, Query(alias="colunaId")] = None,
    responsavel_id: Annotated[uuid.UUID | None, Query(alias="responsavelId")] = None,
) -> dict:
    return await RegraQualidadeController(db).find_many(
        paging, dimensao_id, tabela_id, coluna_id, responsavel_id
    )


@regras_router.get("/{regra_id}", response_model=Envelope[RegraQualidadeRead])
async def get_regra(regra_id: str, db: DatabaseSession) -> dict:
    return await RegraQualidadeController(db).find_by_id(validate_id(regra_id))


@regras_router.post(
    "", response_model=Envelope[RegraQualidadeRead], status_code=status.HTTP_201_CREATED
)
async def create_regra(payload: RegraQualidadeCreate, db: DatabaseSession) -> dict:
    return await RegraQualidadeController(db).create(payload)


@regras_router.put("/{regra_id}", response_model=Envelope[RegraQualidadeRead])
async def update_regra(regra_id: str, payload: RegraQualidadeUpdate, db: DatabaseSession) -> dict:
    return await RegraQualidadeController(db).update(validate_id(regra_id), payload)


@regras_router.delete("/{regra_id}", response_model=Envelope[RegraQualidadeRead])
async def delete_regra(regra_id: str, db: DatabaseSession) -> dict:
    return await RegraQualidadeController(db).delete(validate_id(regra_id))


# Regras de negocio


@regras_negocio_router.get("", response_model=Envelope[list[RegraNegocioRead]])
async def list_regras_negocio(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    processo_id: Annotated[uuid.UUID | None, Query(alias="processoId")] = None,
    sistema_id: Annotated[uuid.UUID | None, Query(alias="sistemaId")] = None,
    tipo_regra: Annotated[TipoRegraNegocio | None, Query(alias="tipoRegra")] = None,
    status_regra: Annotated[StatusRegraNegocio | None, Query(alias="status")] = None,
    prioridade: Prioridade | None = None,
    ativo: bool | None = None,
) -> dict:
    return await RegraNegocioController(db).find_many(
        paging, search, processo_id, sistema_id, tipo_regra, status_regra, prioridade, ativo
    )


@regras_negocio_router.get("/{regra_id}", response_model=Envelope[RegraNegocioRead])
async def get_regra_negocio(regra_id: str, db: DatabaseSession) -> dict:
    return await RegraNegocioController(db).find_by_id(validate_id(regra_id))


@regras_negocio_router.post(
    "", response_model=Envelope[RegraNegocioRead], status_code=status.HTTP_201_CREATED
)
async def create_regra_negocio(payload: RegraNegocioCreate, db: DatabaseSession) -> dict:
    return await RegraNegocioController(db).create(payload)


@regras_negocio_router.put("/{regra_id}", response_model=Envelope[RegraNegocioRead])
async def update_regra_negocio(
    regra_id: str, payload: RegraNegocioUpdate, db: DatabaseSession
) -> dict:
    return await RegraNegocioController(db).update(validate_id(regra_id), payload)


@regras_negocio_router.delete("/{regra_id}", response_model=Envelope[RegraNegocioRead])
async def delete_regra_negocio(regra_id: str, db: DatabaseSession) -> dict:
    return await RegraNegocioController(db).delete(validate_id(regra_id))


# Classificacoes de informacao


@classificacoes_router.get("", response_model=Envelope[list[ClassificacaoInformacaoRead]])
async def list_classificacoes(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    politica_id: Annotated[uuid.UUID | None, Query(alias="politicaId")] = None,
    termo_id: Annotated[uuid.UUID | None, Query(alias="termoId")] = None,
    ativo: bool | None = None,
) -> dict:
    return await ClassificacaoInformacaoController(db).find_many(
        paging, search, politica_id, termo_id, ativo
    )


@classificacoes_router.get(
    "/{classificacao_id}", response_model=Envelope[ClassificacaoInformacaoRead]
)
async def get_classificacao(classificacao_id: str, db: DatabaseSession) -> dict:
    return await ClassificacaoInformacaoController(db).find_by_id(validate_id(classificacao_id))


@classificacoes_router.post(
    "", response_model=Envelope[ClassificacaoInformacaoRead], status_code=status.HTTP_201_CREATED
)
async def create_classificacao(
    payload: ClassificacaoInformacaoCreate, db: DatabaseSession
) -> dict:
    return await ClassificacaoInformacaoController(db).create(payload)


@classificacoes_router.put(
    "/{classificacao_id}", response_model=Envelope[ClassificacaoInformacaoRead]
)
async def update_classificacao(
    classificacao_id: str, payload: ClassificacaoInformacaoUpdate, db: DatabaseSession
) -> dict:
    return await ClassificacaoInformacaoController(db).update(
        validate_id(classificacao_id), payload
    )


@classificacoes_router.put(
    "/{classificacao_id}/termo", response_model=Envelope[ClassificacaoInformacaoRead]
)
async def assign_termo_classificacao(
    classificacao_id: str, payload: AtribuirTermoRequest, db: DatabaseSession
) -> dict:
    return await ClassificacaoInformacaoController(db).assign_termo(
        validate_id(classificacao_id), payload
    )


@classificacoes_router.delete(
    "/{classificacao_id}", response_model=Envelope[ClassificacaoInformacaoRead]
)
async def delete_classificacao(classificacao_id: str, db: DatabaseSession) -> dict:
    return await ClassificacaoInformacaoController(db).delete(validate_id(classificacao_id))
