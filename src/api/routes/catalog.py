"""Technical catalog routes: systems, databases, tables, data types, columns,
glossary terms and reference lists.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.controllers.catalog import (
    BancoController,
    ColunaController,
    DefinicaoController,
    ListaReferenciaController,
    SistemaController,
    TabelaController,
    TipoDadosController,
)
from src.api.controllers.helpers import validate_id
from src.api.dependencies import Paging, Search
from src.api.middleware.auth import require_authentication
from src.api.schemas.catalog import (
    BancoCreate,
    BancoRead,
    BancoUpdate,
    ColunaCreate,
    ColunaRead,
    ColunaUpdate,
    DefinicaoCreate,
    DefinicaoRead,
    DefinicaoUpdate,
    ListaReferenciaCreate,
    ListaReferenciaRead,
    ListaReferenciaUpdate,
    SistemaCreate,
    SistemaRead,
    SistemaUpdate,
    TabelaCreate,
    TabelaRead,
    TabelaUpdate,
    TipoDadosCreate,
    TipoDadosRead,
    TipoDadosUpdate,
)
from src.api.schemas.common import Envelope
from src.infrastructure.database.dependencies import DatabaseSession
from src.infrastructure.database.models.enums import CategoriaTipoDados

AUTHENTICATED = [Depends(require_authentication)]

sistemas_router = APIRouter(prefix="/sistemas", tags=["sistemas"], dependencies=AUTHENTICATED)
bancos_router = APIRouter(prefix="/bancos", tags=["bancos"], dependencies=AUTHENTICATED)
tabelas_router = APIRouter(prefix="/tabelas", tags=["tabelas"], dependencies=AUTHENTICATED)
tipos_dados_router = APIRouter(
    prefix="/tipos-dados", tags=["tipos-dados"], dependencies=AUTHENTICATED
)
colunas_router = APIRouter(prefix="/colunas", tags=["colunas"], dependencies=AUTHENTICATED)
definicoes_router = APIRouter(
    prefix="/definicoes", tags=["definicoes"], dependencies=AUTHENTICATED
)
listas_referencia_router = APIRouter(
    prefix="/listas-referencia", tags=["listas-referencia"], dependencies=AUTHENTICATED
)


# Sistemas


@sistemas_router.get("", response_model=Envelope[list[SistemaRead]])
async def list_sistemas(db: DatabaseSession, paging: Paging, search: Search = None) -> dict:
    return await SistemaController(db).find_many(paging, search)


@sistemas_router.get("/{sistema_id}", response_model=Envelope[SistemaRead])
async def get_sistema(sistema_id: str, db: DatabaseSession) -> dict:
    return await SistemaController(db).find_by_id(validate_id(sistema_id))


@sistemas_router.post(
    "", response_model=Envelope[SistemaRead], status_code=status.HTTP_201_CREATED
)
async def create_sistema(payload: SistemaCreate, db: DatabaseSession) -> dict:
    return await SistemaController(db).create(payload)


@sistemas_router.put("/{sistema_id}", response_model=Envelope[SistemaRead])
async def update_sistema(sistema_id: str, payload: SistemaUpdate, db: DatabaseSession) -> dict:
    return await SistemaController(db).update(validate_id(sistema_id), payload)


@sistemas_router.delete("/{sistema_id}", response_model=Envelope[SistemaRead])
async def delete_sistema(sistema_id: str, db: DatabaseSession) -> dict:
    return await SistemaController(db).delete(validate_id(sistema_id))


# Bancos


@bancos_router.get("", response_model=Envelope[list[BancoRead]])
async def list_bancos(db: DatabaseSession, paging: Paging, search: Search = None) -> dict:
    return await BancoController(db).find_many(paging, search)


@bancos_router.get("/{banco_id}", response_model=Envelope[BancoRead])
async def get_banco(banco_id: str, db: DatabaseSession) -> dict:
    return await BancoController(db).find_by_id(validate_id(banco_id))


@bancos_router.post("", response_model=Envelope[BancoRead], status_code=status.HTTP_201_CREATED)
async def create_banco(payload: BancoCreate, db: DatabaseSession) -> dict:
    return await BancoController(db).create(payload)


@bancos_router.put("/{banco_id}", response_model=Envelope[BancoRead])
async def update_banco(banco_id: str, payload: BancoUpdate, db: DatabaseSession) -> dict:
    return await BancoController(db).update(validate_id(banco_id), payload)


@bancos_router.delete("/{banco_id}", response_model=Envelope[BancoRead])
async def delete_banco(banco_id: str, db: DatabaseSession) -> dict:
    return await BancoController(db).delete(validate_id(banco_id))


# Tabelas


@tabelas_router.get("", response_model=Envelope[list[TabelaRead]])
async def list_tabelas(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    banco_id: Annotated[uuid.UUID | None, Query(alias="bancoId")] = None,
    sistema_id: Annotated[uuid.UUID | None, Query(alias="sistemaId")] = None,
) -> dict:
    return await TabelaController(db).find_many(paging, search, banco_id, sistema_id)


@tabelas_router.get("/{tabela_id}", response_model=Envelope[TabelaRead])
async def get_tabela(tabela_id: str, db: DatabaseSession) -> dict:
    return await TabelaController(db).find_by_id(validate_id(tabela_id))


@tabelas_router.post(
    "", response_model=Envelope[TabelaRead], status_code=status.HTTP_201_CREATED
)
async def create_tabela(payload: TabelaCreate, db: DatabaseSession) -> dict:
    return await TabelaController(db).create(payload)


@tabelas_router.put("/{tabela_id}", response_model=Envelope[TabelaRead])
async def update_tabela(tabela_id: str, payload: TabelaUpdate, db: DatabaseSession) -> dict:
    return await TabelaController(db).update(validate_id(tabela_id), payload)


@tabelas_router.delete("/{tabela_id}", response_model=Envelope[TabelaRead])
async def delete_tabela(tabela_id: str, db: DatabaseSession) -> dict:
    return await TabelaController(db).delete(validate_id(tabela_id))


# Tipos de dados


@tipos_dados_router.get("", response_model=Envelope[list[TipoDadosRead]])
async def list_tipos_dados(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    categoria: CategoriaTipoDados | None = None,
) -> dict:
    return await TipoDadosController(db).find_many(paging, search, categoria)


@tipos_dados_router.get("/{tipo_id}", response_model=Envelope[TipoDadosRead])
async def get_tipo_dados(tipo_id: str, db: DatabaseSession) -> dict:
    return await TipoDadosController(db).find_by_id(validate_id(tipo_id))


@tipos_dados_router.post(
    "", response_model=Envelope[TipoDadosRead], status_code=status.HTTP_201_CREATED
)
async def create_tipo_dados(payload: TipoDadosCreate, db: DatabaseSession) -> dict:
    return await TipoDadosController(db).create(payload)


@tipos_dados_router.put("/{tipo_id}", response_model=Envelope[TipoDadosRead])
async def update_tipo_dados(
    tipo_id: str, payload: TipoDadosUpdate, db: DatabaseSession
) -> dict:
    return await TipoDadosController(db).update(validate_id(tipo_id), payload)


@tipos_dados_router.delete("/{tipo_id}", response_model=Envelope[TipoDadosRead])
async def delete_tipo_dados(tipo_id: str, db: DatabaseSession) -> dict:
    return await TipoDadosController(db).delete(validate_id(tipo_id))


# Colunas


@colunas_router.get("", response_model=Envelope[list[ColunaRead]])
async def list_colunas(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    tabela_id: Annotated[uuid.UUID | None, Query(alias="tabelaId")] = None,
) -> dict:
    return await ColunaController(db).find_many(paging, search, tabela_id)


@colunas_router.get("/{coluna_id}", response_model=Envelope[ColunaRead])
async def get_coluna(coluna_id: str, db: DatabaseSession) -> dict:
    return await ColunaController(db).find_by_id(validate_id(coluna_id))


@colunas_router.post(
    "", response_model=Envelope[ColunaRead], status_code=status.HTTP_201_CREATED
)
async def create_coluna(payload: ColunaCreate, db: DatabaseSession) -> dict:
    return await ColunaController(db).create(payload)


@colunas_router.put("/{coluna_id}", response_model=Envelope[ColunaRead])
async def update_coluna(coluna_id: str, payload: ColunaUpdate, db: DatabaseSession) -> dict:
    return await ColunaController(db).update(validate_id(coluna_id), payload)


@colunas_router.delete("/{coluna_id}", response_model=Envelope[ColunaRead])
async def delete_coluna(coluna_id: str, db: DatabaseSession) -> dict:
    return await ColunaController(db).delete(validate_id(coluna_id))


# Definicoes


@definicoes_router.get("", response_model=Envelope[list[DefinicaoRead]])
async def list_definicoes(db: DatabaseSession, paging: Paging, search: Search = None) -> dict:
    return await DefinicaoController(db).find_many(paging, search)


@definicoes_router.get("/{definicao_id}", response_model=Envelope[DefinicaoRead])
async def get_definicao(definicao_id: str, db: DatabaseSession) -> dict:
    return await DefinicaoController(db).find_by_id(validate_id(definicao_id))


@definicoes_router.post(
    "", response_model=Envelope[DefinicaoRead], status_code=status.HTTP_201_CREATED
)
async def create_definicao(payload: DefinicaoCreate, db: DatabaseSession) -> dict:
    return await DefinicaoController(db).create(payload)


@definicoes_router.put("/{definicao_id}", response_model=Envelope[DefinicaoRead])
async def update_definicao(
    definicao_id: str, payload: DefinicaoUpdate, db: DatabaseSession
) -> dict:
    return await DefinicaoController(db).update(validate_id(definicao_id), payload)


@definicoes_router.delete("/{definicao_id}", response_model=Envelope[DefinicaoRead])
async def delete_definicao(definicao_id: str, db: DatabaseSession) -> dict:
    return await DefinicaoController(db).delete(validate_id(definicao_id))


# Listas de referencia


@listas_referencia_router.get("", response_model=Envelope[list[ListaReferenciaRead]])
async def list_listas_referencia(
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    tabela_id: Annotated[uuid.UUID | None, Query(alias="tabelaId")] = None,
    coluna_id: Annotated[uuid.UUID | None, Query(alias="colunaId")] = None,
) -> dict:
    return await ListaReferenciaController(db).find_many(paging, search, tabela_id, coluna_id)


@listas_referencia_router.get("/{lista_id}", response_model=Envelope[ListaReferenciaRead])
async def get_lista_referencia(lista_id: str, db: DatabaseSession) -> dict:
    return await ListaReferenciaController(db).find_by_id(validate_id(lista_id))


@listas_referencia_router.post(
    "", response_model=Envelope[ListaReferenciaRead], status_code=status.HTTP_201_CREATED
)
async def create_lista_referencia(payload: ListaReferenciaCreate, db: DatabaseSession) -> dict:
    return await ListaReferenciaController(db).create(payload)


@listas_referencia_router.put("/{lista_id}", response_model=Envelope[ListaReferenciaRead])
async def update_lista_referencia(
    lista_id: str, payload: ListaReferenciaUpdate, db: DatabaseSession
) -> dict:
    return await ListaReferenciaController(db).update(validate_id(lista_id), payload)


@listas_referencia_router.delete("/{lista_id}", response_model=Envelope[ListaReferenciaRead])
async def delete_lista_referencia(lista_id: str, db: DatabaseSession) -> dict:
    return await ListaReferenciaController(db).delete(validate_id(lista_id))
