"""Controllers for the technical catalog: systems, databases, tables, types,
columns, glossary terms and reference lists.
"""

import uuid

import orjson
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.api.controllers.helpers import (
    DependentCheck,
    Pagination,
    create_entity,
    delete_entity,
    ensure_exists,
    envelope,
    fetch_or_404,
    find_page,
    search_filter,
    update_entity,
)
from src.api.schemas.catalog import (
    BancoCreate,
    BancoUpdate,
    ColunaCreate,
    ColunaUpdate,
    DefinicaoCreate,
    DefinicaoUpdate,
    ListaReferenciaCreate,
    ListaReferenciaUpdate,
    SistemaCreate,
    SistemaUpdate,
    TabelaCreate,
    TabelaUpdate,
    TipoDadosCreate,
    TipoDadosUpdate,
)
from src.infrastructure.database.models import (
    Banco,
    ClassificacaoInformacao,
    Coluna,
    Definicao,
    ListaReferencia,
    RegraNegocio,
    RegraQualidade,
    Sistema,
    Tabela,
    TipoDados,
)
from src.infrastructure.database.models.enums import CategoriaTipoDados
from src.infrastructure.database.repository import BaseRepository


class SistemaController:
    options = (selectinload(Sistema.tabelas),)
    dependents = (
        DependentCheck(
            Tabela.sistema_id,
            "Não é possível deletar o sistema. Ele está sendo usado por {count} tabela(s).",
        ),
        DependentCheck(
            RegraNegocio.sistema_id,
            "Não é possível deletar o sistema. "
            "Ele está sendo usado por {count} regra(s) de negócio.",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, Sistema)

    async def find_many(self, pagination: Pagination, search: str | None = None) -> dict:
        sistemas = await find_page(
            self.repository, pagination, search_filter(Sistema, search), self.options
        )
        return envelope("Sistemas encontrados", sistemas)

    async def find_by_id(self, sistema_id: uuid.UUID) -> dict:
        sistema = await fetch_or_404(
            self.repository, sistema_id, self.options, "Sistema não encontrado"
        )
        return envelope("Sistema encontrado", sistema)

    async def create(self, payload: SistemaCreate) -> dict:
        sistema = await create_entity(
            self.repository, Sistema(**payload.model_dump()), self.options
        )
        return envelope("Sistema criado com sucesso", sistema)

    async def update(self, sistema_id: uuid.UUID, payload: SistemaUpdate) -> dict:
        sistema = await update_entity(
            self.repository,
            sistema_id,
            payload.changes(),
            self.options,
            "Sistema não encontrado",
        )
        return envelope("Sistema atualizado com sucesso", sistema)

    async def delete(self, sistema_id: uuid.UUID) -> dict:
        """Delete a system unless tables or business rules reference it."""
        sistema = await delete_entity(
            self.repository,
            sistema_id,
            self.dependents,
            self.options,
            "Sistema não encontrado",
        )
        return envelope("Sistema excluído com sucesso", sistema)


class BancoController:
    """Databases; reads carry ``totalTabelas`` instead of the tables themselves."""

    dependents = (
        DependentCheck(
            Tabela.banco_id,
            "Não é possível deletar o banco de dados. "
            "Ele está sendo usado por {count} tabela(s).",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, Banco)

    async def find_many(self, pagination: Pagination, search: str | None = None) -> dict:
        bancos = await find_page(self.repository, pagination, search_filter(Banco, search))
        return envelope("Bancos encontrados", bancos)

    async def find_by_id(self, banco_id: uuid.UUID) -> dict:
        banco = await fetch_or_404(self.repository, banco_id, message="Banco não encontrado")
        return envelope("Banco encontrado", banco)

    async def create(self, payload: BancoCreate) -> dict:
        banco = await create_entity(self.repository, Banco(**payload.model_dump()))
        return envelope("Banco criado com sucesso", banco)

    async def update(self, banco_id: uuid.UUID, payload: BancoUpdate) -> dict:
        banco = await update_entity(
            self.repository, banco_id, payload.changes(), not_found="Banco não encontrado"
        )
        return envelope("Banco atualizado com sucesso", banco)

    async def delete(self, banco_id: uuid.UUID) -> dict:
        """Delete a database unless tables are still registered under it.

        Raises:
            ValidationError: With the number of tables using the database.
            NotFoundError: If the database does not exist.
        """
        banco = await delete_entity(
            self.repository, banco_id, self.dependents, not_found="Banco não encontrado"
        )
        return envelope("Banco excluído com sucesso", banco)


class TabelaController:
    options = (
        selectinload(Tabela.banco),
        selectinload(Tabela.sistema),
        selectinload(Tabela.colunas),
    )
    dependents = (
        DependentCheck(
            Coluna.tabela_id,
            "Não é possível deletar a tabela. Ela possui {count} coluna(s).",
        ),
        DependentCheck(
            RegraQualidade.tabela_id,
            "Não é possível deletar a tabela. "
            "Ela está sendo usada por {count} regra(s) de qualidade.",
        ),
        DependentCheck(
            ListaReferencia.tabela_id,
            "Não é possível deletar a tabela. "
            "Ela está sendo usada por {count} lista(s) de referência.",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, Tabela)

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        banco_id: uuid.UUID | None = None,
        sistema_id: uuid.UUID | None = None,
    ) -> dict:
        """List tables, optionally narrowed to one database or system.

        Args:
            pagination: Normalized skip/take/orderBy.
            search: Substring matched against name and description.
            banco_id: Only tables of this database.
            sistema_id: Only tables of this system.

        Returns:
            dict: Envelope with the tables, their database, system and columns.
        """
        where = search_filter(Tabela, search)
        if banco_id is not None:
            where.append(Tabela.banco_id == banco_id)
        if sistema_id is not None:
            where.append(Tabela.sistema_id == sistema_id)
        tabelas = await find_page(self.repository, pagination, where, self.options)
        return envelope("Tabelas encontradas", tabelas)

    async def find_by_id(self, tabela_id: uuid.UUID) -> dict:
        tabela = await fetch_or_404(
            self.repository, tabela_id, self.options, "Tabela não encontrada"
        )
        return envelope("Tabela encontrada", tabela)

    async def create(self, payload: TabelaCreate) -> dict:
        tabela = await create_entity(
            self.repository, Tabela(**payload.model_dump()), self.options
        )
        return envelope("Tabela criada com sucesso", tabela)

    async def update(self, tabela_id: uuid.UUID, payload: TabelaUpdate) -> dict:
        tabela = await update_entity(
            self.repository, tabela_id, payload.changes(), self.options, "Tabela não encontrada"
        )
        return envelope("Tabela atualizada com sucesso", tabela)

    async def delete(self, tabela_id: uuid.UUID) -> dict:
        """Delete a table unless it has columns, quality rules or reference lists.

        Raises:
            ValidationError: Naming the first blocking relation and its count.
            NotFoundError: If the table does not exist.
        """
        tabela = await delete_entity(
            self.repository, tabela_id, self.dependents, self.options, "Tabela não encontrada"
        )
        return envelope("Tabela excluída com sucesso", tabela)


class TipoDadosController:
    dependents = (
        DependentCheck(
            Coluna.tipo_dados_id,
            "Não é possível deletar o tipo de dados. "
            "Ele está sendo usado por {count} coluna(s).",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, TipoDados)

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        categoria: CategoriaTipoDados | None = None,
    ) -> dict:
        where = search_filter(TipoDados, search)
        if categoria is not None:
            where.append(TipoDados.categoria == categoria)
        tipos = await find_page(self.repository, pagination, where)
        return envelope("Tipos de dados encontrados", tipos)

    async def find_by_id(self, tipo_id: uuid.UUID) -> dict:
        tipo = await fetch_or_404(
            self.repository, tipo_id, message="Tipo de dados não encontrado"
        )
        return envelope("Tipo de dados encontrado", tipo)

    async def create(self, payload: TipoDadosCreate) -> dict:
        tipo = await create_entity(self.repository, TipoDados(**payload.model_dump()))
        return envelope("Tipo de dados criado com sucesso", tipo)

    async def update(self, tipo_id: uuid.UUID, payload: TipoDadosUpdate) -> dict:
        tipo = await update_entity(
            self.repository,
            tipo_id,
            payload.changes(),
            not_found="Tipo de dados não encontrado",
        )
        return envelope("Tipo de dados atualizado com sucesso", tipo)

    async def delete(self, tipo_id: uuid.UUID) -> dict:
        """Delete a data type unless columns are declared with it."""
        tipo = await delete_entity(
            self.repository,
            tipo_id,
            self.dependents,
            not_found="Tipo de dados não encontrado",
        )
        return envelope("Tipo de dados excluído com sucesso", tipo)


class ColunaController:
    options = (selectinload(Coluna.tabela), selectinload(Coluna.tipo_dados))
    dependents = (
        DependentCheck(
            RegraQualidade.coluna_id,
            "Não é possível deletar a coluna. "
            "Ela está sendo usada por {count} regra(s) de qualidade.",
        ),
        DependentCheck(
            ListaReferencia.coluna_id,
            "Não é possível deletar a coluna. "
            "Ela está sendo usada por {count} lista(s) de referência.",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, Coluna)

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        tabela_id: uuid.UUID | None = None,
    ) -> dict:
        where = search_filter(Coluna, search)
        if tabela_id is not None:
            where.append(Coluna.tabela_id == tabela_id)
        colunas = await find_page(self.repository, pagination, where, self.options)
        return envelope("Colunas encontradas", colunas)

    async def find_by_id(self, coluna_id: uuid.UUID) -> dict:
        coluna = await fetch_or_404(
            self.repository, coluna_id, self.options, "Coluna não encontrada"
        )
        return envelope("Coluna encontrada", coluna)

    async def create(self, payload: ColunaCreate) -> dict:
        """Create a column; the name must be unique within its table.

        Raises:
            ConflictError: If the table already has a column with this name.
            ValidationError: If ``tabelaId`` or ``tipoDadosId`` points at nothing.
        """
        coluna = await create_entity(
            self.repository, Coluna(**payload.model_dump()), self.options
        )
        return envelope("Coluna criada com sucesso", coluna)

    async def update(self, coluna_id: uuid.UUID, payload: ColunaUpdate) -> dict:
        coluna = await update_entity(
            self.repository, coluna_id, payload.changes(), self.options, "Coluna não encontrada"
        )
        return envelope("Coluna atualizada com sucesso", coluna)

    async def delete(self, coluna_id: uuid.UUID) -> dict:
        """Delete a column unless quality rules or reference lists still use it.

        Returns:
            dict: Envelope with the column as it was before removal.

        Raises:
            ValidationError: Naming how many rows still reference the column.
            NotFoundError: If the column does not exist.
        """
        coluna = await delete_entity(
            self.repository, coluna_id, self.dependents, self.options, "Coluna não encontrada"
        )
        return envelope("Coluna excluída com sucesso", coluna)


class DefinicaoController:
    """Business glossary terms."""

    dependents = (
        DependentCheck(
            ClassificacaoInformacao.termo_id,
            "Não é possível deletar a definição. "
            "Ela está sendo usada por {count} classificação(ões) de informação.",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, Definicao)

    async def find_many(self, pagination: Pagination, search: str | None = None) -> dict:
        definicoes = await find_page(
            self.repository, pagination, search_filter(Definicao, search)
        )
        return envelope("Definições encontradas", definicoes)

    async def find_by_id(self, definicao_id: uuid.UUID) -> dict:
        definicao = await fetch_or_404(
            self.repository, definicao_id, message="Definição não encontrada"
        )
        return envelope("Definição encontrada", definicao)

    async def create(self, payload: DefinicaoCreate) -> dict:
        """Create a glossary term.

        Raises:
            ConflictError: If another term already has this name.
        """
        definicao = await create_entity(self.repository, Definicao(**payload.model_dump()))
        return envelope("Definição criada com sucesso", definicao)

    async def update(self, definicao_id: uuid.UUID, payload: DefinicaoUpdate) -> dict:
        definicao = await update_entity(
            self.repository,
            definicao_id,
            payload.changes(),
            not_found="Definição não encontrada",
        )
        return envelope("Definição atualizada com sucesso", definicao)

    async def delete(self, definicao_id: uuid.UUID) -> dict:
        """Delete a term unless an information classification points at it."""
        definicao = await delete_entity(
            self.repository,
            definicao_id,
            self.dependents,
            not_found="Definição não encontrada",
        )
        return envelope("Definição excluída com sucesso", definicao)


class ListaReferenciaController:
    """Reference value lists.

    Values arrive already normalized by the request schema and are stored as a
    JSON array in a text column.
    """

    options = (selectinload(ListaReferencia.tabela), selectinload(ListaReferencia.coluna))

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = BaseRepository(session, ListaReferencia)

    async def _check_references(self, changes: dict[str, object]) -> None:
        await ensure_exists(
            self.session, Tabela, changes.get("tabela_id"), "Tabela não encontrada"
        )
        await ensure_exists(
            self.session, Coluna, changes.get("coluna_id"), "Coluna não encontrada"
        )

    @staticmethod
    def _encode(changes: dict[str, object]) -> dict[str, object]:
        if changes.get("valores") is not None:
            changes["valores"] = orjson.dumps(changes["valores"]).decode()
        return changes

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        tabela_id: uuid.UUID | None = None,
        coluna_id: uuid.UUID | None = None,
    ) -> dict:
        where = search_filter(ListaReferencia, search)
        if tabela_id is not None:
            where.append(ListaReferencia.tabela_id == tabela_id)
        if coluna_id is not None:
            where.append(ListaReferencia.coluna_id == coluna_id)
        listas = await find_page(self.repository, pagination, where, self.options)
        return envelope("Listas de referência encontradas", listas)

    async def find_by_id(self, lista_id: uuid.UUID) -> dict:
        lista = await fetch_or_404(
            self.repository, lista_id, self.options, "Lista de referência não encontrada"
        )
        return envelope("Lista de referência encontrada", lista)

    async def create(self, payload: ListaReferenciaCreate) -> dict:
        """Create a list after checking its optional table and column.

        Raises:
            ValidationError: If ``tabelaId`` or ``colunaId`` points at nothing.
        """
        data = payload.model_dump()
        await self._check_references(data)
        lista = await create_entity(
            self.repository, ListaReferencia(**self._encode(data)), self.options
        )
        return envelope("Lista de referência criada com sucesso", lista)

    async def update(self, lista_id: uuid.UUID, payload: ListaReferenciaUpdate) -> dict:
        """Apply a partial update; new values replace the stored list entirely."""
        changes = payload.changes()
        await self._check_references(changes)
        lista = await update_entity(
            self.repository,
            lista_id,
            self._encode(changes),
            self.options,
            "Lista de referência não encontrada",
        )
        return envelope("Lista de referência atualizada com sucesso", lista)

    async def delete(self, lista_id: uuid.UUID) -> dict:
        lista = await delete_entity(
            self.repository, lista_id, (), self.options, "Lista de referência não encontrada"
        )
        return envelope("Lista de referência excluída com sucesso", lista)
