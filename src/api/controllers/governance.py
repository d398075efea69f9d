"""Controllers for communities, processes, policies, roles, business rules,
information classification and data quality.
"""

import uuid
from datetime import datetime

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
    store_errors,
    update_entity,
)
from src.api.schemas.common import as_naive_utc
from src.api.schemas.governance import (
    DATA_FIM_MESSAGE,
    DATA_TERMINO_MESSAGE,
    AtribuicaoCreate,
    AtribuicaoUpdate,
    AtribuirTermoRequest,
    ClassificacaoInformacaoCreate,
    ClassificacaoInformacaoUpdate,
    ComunidadeCreate,
    ComunidadeUpdate,
    DimensaoQualidadeCreate,
    DimensaoQualidadeUpdate,
    PapelCreate,
    PapelUpdate,
    PoliticaInternaCreate,
    PoliticaInternaUpdate,
    ProcessoCreate,
    ProcessoUpdate,
    RegraNegocioCreate,
    RegraNegocioUpdate,
    RegraQualidadeCreate,
    RegraQualidadeUpdate,
)
from src.core.exceptions import ValidationError
from src.infrastructure.database.models import (
    AtribuicaoPapelDominio,
    ClassificacaoInformacao,
    Coluna,
    Comunidade,
    Definicao,
    DimensaoQualidade,
    Papel,
    PoliticaInterna,
    Processo,
    RegraNegocio,
    RegraQualidade,
    Sistema,
    Tabela,
    Usuario,
)
from src.infrastructure.database.models.enums import (
    Prioridade,
    StatusPolitica,
    StatusRegraNegocio,
    TipoEntidade,
    TipoRegraNegocio,
)
from src.infrastructure.database.repository import BaseRepository


class ComunidadeController:
    options = (selectinload(Comunidade.processos),)
    dependents = (
        DependentCheck(
            Processo.comunidade_id,
            "Não é possível deletar a comunidade. "
            "Ela está sendo usada por {count} processo(s).",
        ),
        DependentCheck(
            AtribuicaoPapelDominio.dominio_id,
            "Não é possível deletar a comunidade. "
            "Ela está sendo usada por {count} atribuição(ões).",
        ),
        DependentCheck(
            Comunidade.parent_id,
            "Não é possível deletar a comunidade. Ela possui {count} subcomunidade(s).",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, Comunidade)

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        parent_id: uuid.UUID | None = None,
    ) -> dict:
        where = search_filter(Comunidade, search)
        if parent_id is not None:
            where.append(Comunidade.parent_id == parent_id)
        comunidades = await find_page(self.repository, pagination, where, self.options)
        return envelope("Comunidades encontradas", comunidades)

    async def find_by_id(self, comunidade_id: uuid.UUID) -> dict:
        comunidade = await fetch_or_404(
            self.repository, comunidade_id, self.options, "Comunidade não encontrada"
        )
        return envelope("Comunidade encontrada", comunidade)

    async def create(self, payload: ComunidadeCreate) -> dict:
        comunidade = await create_entity(
            self.repository, Comunidade(**payload.model_dump()), self.options
        )
        return envelope("Comunidade criada com sucesso", comunidade)

    async def update(self, comunidade_id: uuid.UUID, payload: ComunidadeUpdate) -> dict:
        """Apply a partial update; a community cannot become its own parent.

        Raises:
            ValidationError: If ``parentId`` equals the community being updated.
            NotFoundError: If the community does not exist.
        """
        changes = payload.changes()
        if changes.get("parent_id") == comunidade_id:
            raise ValidationError("Comunidade não pode ser pai de si mesma")
        comunidade = await update_entity(
            self.repository, comunidade_id, changes, self.options, "Comunidade não encontrada"
        )
        return envelope("Comunidade atualizada com sucesso", comunidade)

    async def delete(self, comunidade_id: uuid.UUID) -> dict:
        comunidade = await delete_entity(
            self.repository,
            comunidade_id,
            self.dependents,
            self.options,
            "Comunidade não encontrada",
        )
        return envelope("Comunidade excluída com sucesso", comunidade)


class ProcessoController:
    options = (selectinload(Processo.comunidade),)
    dependents = (
        DependentCheck(
            RegraNegocio.processo_id,
            "Não é possível deletar o processo. "
            "Ele está sendo usado por {count} regra(s) de negócio.",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, Processo)

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        comunidade_id: uuid.UUID | None = None,
    ) -> dict:
        where = search_filter(Processo, search)
        if comunidade_id is not None:
            where.append(Processo.comunidade_id == comunidade_id)
        processos = await find_page(self.repository, pagination, where, self.options)
        return envelope("Processos encontrados", processos)

    async def find_by_id(self, processo_id: uuid.UUID) -> dict:
        processo = await fetch_or_404(
            self.repository, processo_id, self.options, "Processo não encontrado"
        )
        return envelope("Processo encontrado", processo)

    async def create(self, payload: ProcessoCreate) -> dict:
        processo = await create_entity(
            self.repository, Processo(**payload.model_dump()), self.options
        )
        return envelope("Processo criado com sucesso", processo)

    async def update(self, processo_id: uuid.UUID, payload: ProcessoUpdate) -> dict:
        processo = await update_entity(
            self.repository, processo_id, payload.changes(), self.options, "Processo não encontrado"
        )
        return envelope("Processo atualizado com sucesso", processo)

    async def delete(self, processo_id: uuid.UUID) -> dict:
        """Delete a process unless business rules are attached to it."""
        processo = await delete_entity(
            self.repository,
            processo_id,
            self.dependents,
            self.options,
            "Processo não encontrado",
        )
        return envelope("Processo excluído com sucesso", processo)


class PoliticaInternaController:
    dependents = (
        DependentCheck(
            Papel.politica_id,
            "Não é possível deletar a política. Ela está sendo usada por {count} papel(is).",
        ),
        DependentCheck(
            DimensaoQualidade.politica_id,
            "Não é possível deletar a política. "
            "Ela está sendo usada por {count} dimensão(ões) de qualidade.",
        ),
        DependentCheck(
            Coluna.politica_interna_id,
            "Não é possível deletar a política. Ela está sendo usada por {count} coluna(s).",
        ),

        DependentCheck(
            ClassificacaoInformacao.politica_id,
            "Não é possível deletar a política. "
            "Ela está sendo usada por {count} classificação(ões) de informação.",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, PoliticaInterna)

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: StatusPolitica | None = None,
    ) -> dict:
        where = search_filter(PoliticaInterna, search)
        if status is not None:
            where.append(PoliticaInterna.status == status)
        politicas = await find_page(self.repository, pagination, where)
        return envelope("Políticas internas encontradas", politicas)

    async def find_by_id(self, politica_id: uuid.UUID) -> dict:
        politica = await fetch_or_404(
            self.repository, politica_id, message="Política interna não encontrada"
        )
        return envelope("Política interna encontrada", politica)

    async def create(self, payload: PoliticaInternaCreate) -> dict:
        politica = await create_entity(
            self.repository, PoliticaInterna(**payload.model_dump())
        )
        return envelope("Política interna criada com sucesso", politica)

    async def update(self, politica_id: uuid.UUID, payload: PoliticaInternaUpdate) -> dict:
        """Apply a partial update, re-checking the validity window.

        When only one of ``dataInicioVigencia`` and ``dataTermino`` is sent, the
        other is taken from the stored row before comparing them.

        Args:
            politica_id: Policy to update.
            payload: Fields the client sent.

        Returns:
            dict: Envelope with the updated policy.

        Raises:
            ValidationError: If the resulting end date is not after the start.
            NotFoundError: If the policy does not exist.
        """
        changes = payload.changes()
        if "data_termino" in changes or "data_inicio_vigencia" in changes:
            current = await fetch_or_404(
                self.repository, politica_id, message="Política interna não encontrada"
            )
            inicio: datetime = changes.get("data_inicio_vigencia", current.data_inicio_vigencia)
            termino: datetime | None = changes.get("data_termino", current.data_termino)
            if termino is not None and as_naive_utc(termino) <= as_naive_utc(inicio):
                raise ValidationError(DATA_TERMINO_MESSAGE)

        politica = await update_entity(
            self.repository,
            politica_id,
            changes,
            not_found="Política interna não encontrada",
        )
        return envelope("Política interna atualizada com sucesso", politica)

    async def delete(self, politica_id: uuid.UUID) -> dict:
        politica = await delete_entity(
            self.repository,
            politica_id,
            self.dependents,
            not_found="Política interna não encontrada",
        )
        return envelope("Política interna excluída com sucesso", politica)


class PapelController:
    options = (selectinload(Papel.politica),)
    dependents = (
        DependentCheck(
            AtribuicaoPapelDominio.papel_id,
            "Não é possível deletar o papel. "
            "Ele está sendo usado por {count} atribuição(ões).",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, Papel)

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        politica_id: uuid.UUID | None = None,
        ativo: bool | None = None,
    ) -> dict:
        where = search_filter(Papel, search)
        if politica_id is not None:
            where.append(Papel.politica_id == politica_id)
        if ativo is not None:
            where.append(Papel.ativo == ativo)
        papeis = await find_page(self.repository, pagination, where, self.options)
        return envelope("Papéis encontrados", papeis)

    async def find_by_id(self, papel_id: uuid.UUID) -> dict:
        papel = await fetch_or_404(
            self.repository, papel_id, self.options, "Papel não encontrado"
        )
        return envelope("Papel encontrado", papel)

    async def create(self, payload: PapelCreate) -> dict:
        papel = await create_entity(
            self.repository, Papel(**payload.model_dump()), self.options
        )
        return envelope("Papel criado com sucesso", papel)

    async def update(self, papel_id: uuid.UUID, payload: PapelUpdate) -> dict:
        papel = await update_entity(
            self.repository, papel_id, payload.changes(), self.options, "Papel não encontrado"
        )
        return envelope("Papel atualizado com sucesso", papel)

    async def delete(self, papel_id: uuid.UUID) -> dict:
        """Delete a role unless it is assigned to a domain."""
        papel = await delete_entity(
            self.repository, papel_id, self.dependents, self.options, "Papel não encontrado"
        )
        return envelope("Papel excluído com sucesso", papel)


class AtribuicaoController:
    """Role-to-domain assignments."""

    options = (
        selectinload(AtribuicaoPapelDominio.papel),
        selectinload(AtribuicaoPapelDominio.dominio),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, AtribuicaoPapelDominio)

    async def find_many(
        self,
        pagination: Pagination,
        tipo_entidade: TipoEntidade | None = None,
        papel_id: uuid.UUID | None = None,
        dominio_id: uuid.UUID | None = None,
        onboarding: bool | None = None,
    ) -> dict:
        model = AtribuicaoPapelDominio
        where = []
        if tipo_entidade is not None:
            where.append(model.tipo_entidade == tipo_entidade)
        if papel_id is not None:
            where.append(model.papel_id == papel_id)
        if dominio_id is not None:
            where.append(model.dominio_id == dominio_id)
        if onboarding is not None:
            where.append(model.onboarding == onboarding)
        atribuicoes = await find_page(self.repository, pagination, where, self.options)
        return envelope("Atribuições encontradas", atribuicoes)

    async def find_by_id(self, atribuicao_id: uuid.UUID) -> dict:
        atribuicao = await fetch_or_404(
            self.repository, atribuicao_id, self.options, "Atribuição não encontrada"
        )
        return envelope("Atribuição encontrada", atribuicao)

    async def create(self, payload: AtribuicaoCreate) -> dict:
        atribuicao = await create_entity(
            self.repository, AtribuicaoPapelDominio(**payload.model_dump()), self.options
        )
        return envelope("Atribuição criada com sucesso", atribuicao)

    async def update(self, atribuicao_id: uuid.UUID, payload: AtribuicaoUpdate) -> dict:
        atribuicao = await update_entity(
            self.repository,
            atribuicao_id,
            payload.changes(),
            self.options,
            "Atribuição não encontrada",
        )
        return envelope("Atribuição atualizada com sucesso", atribuicao)

    async def delete(self, atribuicao_id: uuid.UUID) -> dict:
        atribuicao = await delete_entity(
            self.repository, atribuicao_id, (), self.options, "Atribuição não encontrada"
        )
        return envelope("Atribuição excluída com sucesso", atribuicao)


class DimensaoQualidadeController:
    options = (selectinload(DimensaoQualidade.politica),)
    dependents = (
        DependentCheck(
            RegraQualidade.dimensao_id,
            "Não é possível deletar a dimensão de qualidade. "
            "Ela está sendo usada por {count} regra(s) de qualidade.",
        ),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BaseRepository(session, DimensaoQualidade)

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        politica_id: uuid.UUID | None = None,
    ) -> dict:
        where = search_filter(DimensaoQualidade, search)
        if politica_id is not None:
            where.append(DimensaoQualidade.politica_id == politica_id)
        dimensoes = await find_page(self.repository, pagination, where, self.options)
        return envelope("Dimensões de qualidade encontradas", dimensoes)

    async def find_by_id(self, dimensao_id: uuid.UUID) -> dict:
        dimensao = await fetch_or_404(
            self.repository, dimensao_id, self.options, "Dimensão de qualidade não encontrada"
        )
        return envelope("Dimensão de qualidade encontrada", dimensao)

    async def create(self, payload: DimensaoQualidadeCreate) -> dict:
        dimensao = await create_entity(
            self.repository, DimensaoQualidade(**payload.model_dump()), self.options
        )
        return envelope("Dimensão de qualidade criada com sucesso", dimensao)

    async def update(self, dimensao_id: uuid.UUID, payload: DimensaoQualidadeUpdate) -> dict:
        dimensao = await update_entity(
            self.repository,
            dimensao_id,
            payload.changes(),
            self.options,
            "Dimensão de qualidade não encontrada",
        )
        return envelope("Dimensão de qualidade atualizada com sucesso", dimensao)

    async def delete(self, dimensao_id: uuid.UUID) -> dict:
        """Delete a quality dimension unless quality rules are filed under it."""
        dimensao = await delete_entity(
            self.repository,
            dimensao_id,
            self.dependents,
            self.options,
            "Dimensão de qualidade não encontrada",
        )
        return envelope("Dimensão de qualidade excluída com sucesso", dimensao)


class RegraQualidadeController:
    """Quality rules.

    References are checked before writing so that a missing dimension, owner,
    table or column is reported by name instead of as a generic FK failure.
    """

    options = (
        selectinload(RegraQualidade.dimensao),
        selectinload(RegraQualidade.tabela),
        selectinload(RegraQualidade.coluna),
        selectinload(RegraQualidade.responsavel),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = BaseRepository(session, RegraQualidade)

    async def _check_references(
        self, changes: dict[str, object], current_tabela_id: uuid.UUID | None = None
    ) -> None:
        """Validate the referenced rows present in ``changes``.

        ``current_tabela_id`` is the stored table, used when an update moves
        the rule to another column without naming a table.
        """
        await ensure_exists(
            self.session,
            DimensaoQualidade,
            changes.get("dimensao_id"),
            "Dimensão de qualidade não encontrada",
        )
        await ensure_exists(
            self.session,
            Usuario,
            changes.get("responsavel_id"),
            "Usuário responsável não encontrado",
        )
        await ensure_exists(self.session, Tabela, changes.get("tabela_id"), "Tabela não encontrada")

        coluna_id = changes.get("coluna_id")
        if coluna_id is None:
            return
        with store_errors("Coluna"):
            coluna = await self.session.get(Coluna, coluna_id)
        if coluna is None:
            raise ValidationError("Coluna não encontrada")
        tabela_id = changes.get("tabela_id", current_tabela_id)
        if tabela_id is not None and coluna.tabela_id != tabela_id:
            raise ValidationError("Coluna não pertence à tabela informada")

    async def find_many(
        self,
        pagination: Pagination,
        dimensao_id: uuid.UUID | None = None,
        tabela_id: uuid.UUID | None = None,
        coluna_id: uuid.UUID | None = None,
        responsavel_id: uuid.UUID | None = None,
    ) -> dict:
        where = []
        if dimensao_id is not None:
            where.append(RegraQualidade.dimensao_id == dimensao_id)
        if tabela_id is not None:
            where.append(RegraQualidade.tabela_id == tabela_id)
        if coluna_id is not None:
            where.append(RegraQualidade.coluna_id == coluna_id)
        if responsavel_id is not None:
            where.append(RegraQualidade.responsavel_id == responsavel_id)
        regras = await find_page(self.repository, pagination, where, self.options)
        return envelope("Regras de qualidade encontradas", regras)

    async def find_by_id(self, regra_id: uuid.UUID) -> dict:
        regra = await fetch_or_404(
            self.repository, regra_id, self.options, "Regra de qualidade não encontrada"
        )
        return envelope("Regra de qualidade encontrada", regra)

    async def create(self, payload: RegraQualidadeCreate) -> dict:
        data = payload.model_dump()
        await self._check_references(data)
        regra = await create_entity(self.repository, RegraQualidade(**data), self.options)
        return envelope("Regra de qualidade criada com sucesso", regra)

    async def update(self, regra_id: uuid.UUID, payload: RegraQualidadeUpdate) -> dict:
        """Apply a partial update to a quality rule.

        Args:
            regra_id: Rule to update.
            payload: Fields the client sent; at least one is required.

        Returns:
            dict: Envelope with the rule and its relations.

        Raises:
            ValidationError: If nothing was sent, a reference is missing or
                the column is outside the rule's table.
            NotFoundError: If the rule does not exist.
        """
        changes = payload.changes()
        if not changes:
            raise ValidationError("Nenhum campo fornecido para atualização")
        current = await fetch_or_404(
            self.repository, regra_id, message="Regra de qualidade não encontrada"
        )
        await self._check_references(changes, current.tabela_id)
        regra = await update_entity(
            self.repository,
            regra_id,
            changes,
            self.options,
            "Regra de qualidade não encontrada",
        )
        return envelope("Regra de qualidade atualizada com sucesso", regra)

    async def delete(self, regra_id: uuid.UUID) -> dict:
        regra = await delete_entity(
            self.repository, regra_id, (), self.options, "Regra de qualidade não encontrada"
        )
        return envelope("Regra de qualidade deletada com sucesso", regra)


class RegraNegocioController:
    """Business rules attached to a process and, optionally, a system."""

    options = (selectinload(RegraNegocio.processo), selectinload(RegraNegocio.sistema))

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = BaseRepository(session, RegraNegocio)

    async def _check_references(self, changes: dict[str, object]) -> None:
        await ensure_exists(
            self.session, Processo, changes.get("processo_id"), "Processo não encontrado"
        )
        await ensure_exists(
            self.session, Sistema, changes.get("sistema_id"), "Sistema não encontrado"
        )

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        processo_id: uuid.UUID | None = None,
        sistema_id: uuid.UUID | None = None,
        tipo_regra: TipoRegraNegocio | None = None,
        status: StatusRegraNegocio | None = None,
        prioridade: Prioridade | None = None,
        ativo: bool | None = None,
    ) -> dict:
        model = RegraNegocio
        where = search_filter(model, search)
        for column, value in (
            (model.processo_id, processo_id),
            (model.sistema_id, sistema_id),
            (model.tipo_regra, tipo_regra),
            (model.status, status),
            (model.prioridade, prioridade),
            (model.ativo, ativo),
        ):
            if value is not None:
                where.append(column == value)
        regras = await find_page(self.repository, pagination, where, self.options)
        return envelope("Regras de negócio encontradas", regras)

    async def find_by_id(self, regra_id: uuid.UUID) -> dict:
        regra = await fetch_or_404(
            self.repository, regra_id, self.options, "Regra de negócio não encontrada"
        )
        return envelope("Regra de negócio encontrada", regra)

    async def create(self, payload: RegraNegocioCreate) -> dict:
        """Create a rule after checking its process and system exist.

        Raises:
            ValidationError: If the process or system is missing.
            ConflictError: If ``codigo`` is already taken.
        """
        data = payload.model_dump()
        await self._check_references(data)
        regra = await create_entity(self.repository, RegraNegocio(**data), self.options)
        return envelope("Regra de negócio criada com sucesso", regra)

    async def update(self, regra_id: uuid.UUID, payload: RegraNegocioUpdate) -> dict:
        """Apply a partial update to a business rule.

        The validity window is re-checked against the stored dates when only
        one side is sent.

        Raises:
            ValidationError: If nothing was sent, a reference is missing or the
                end date is not after the start.
            NotFoundError: If the rule does not exist.
        """
        changes = payload.changes()
        if not changes:
            raise ValidationError("Nenhum campo fornecido para atualização")
        current = await fetch_or_404(
            self.repository, regra_id, message="Regra de negócio não encontrada"
        )
        await self._check_references(changes)

        inicio: datetime | None = changes.get(
            "data_inicio_vigencia", current.data_inicio_vigencia
        )
        fim: datetime | None = changes.get("data_fim_vigencia", current.data_fim_vigencia)
        if inicio is not None and fim is not None and as_naive_utc(fim) <= as_naive_utc(inicio):
            raise ValidationError(DATA_FIM_MESSAGE)

        regra = await update_entity(
            self.repository, regra_id, changes, self.options, "Regra de negócio não encontrada"
        )
        return envelope("Regra de negócio atualizada com sucesso", regra)

    async def delete(self, regra_id: uuid.UUID) -> dict:
        regra = await delete_entity(
            self.repository, regra_id, (), self.options, "Regra de negócio não encontrada"
        )
        return envelope("Regra de negócio excluída com sucesso", regra)


class ClassificacaoInformacaoController:
    options = (
        selectinload(ClassificacaoInformacao.politica),
        selectinload(ClassificacaoInformacao.termo),
    )

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = BaseRepository(session, ClassificacaoInformacao)

    async def _check_references(self, changes: dict[str, object]) -> None:
        await ensure_exists(
            self.session,
            PoliticaInterna,
            changes.get("politica_id"),
            "Política interna não encontrada",
        )
        await ensure_exists(
            self.session, Definicao, changes.get("termo_id"), "Termo de definição não encontrado"
        )

    async def find_many(
        self,
        pagination: Pagination,
        search: str | None = None,
        politica_id: uuid.UUID | None = None,
        termo_id: uuid.UUID | None = None,
        ativo: bool | None = None,
    ) -> dict:
        model = ClassificacaoInformacao
        where = search_filter(model, search)
        if politica_id is not None:
            where.append(model.politica_id == politica_id)
        if termo_id is not None:
            where.append(model.termo_id == termo_id)
        if ativo is not None:
            where.append(model.ativo == ativo)
        classificacoes = await find_page(self.repository, pagination, where, self.options)
        return envelope("Classificações de informação encontradas", classificacoes)

    async def find_by_id(self, classificacao_id: uuid.UUID) -> dict:
        classificacao = await fetch_or_404(
            self.repository,
            classificacao_id,
            self.options,
            "Classificação de informação não encontrada",
        )
        return envelope("Classificação de informação encontrada", classificacao)

    async def create(self, payload: ClassificacaoInformacaoCreate) -> dict:
        """Create a classification under a policy, optionally tied to a term.

        Raises:
            ValidationError: If the policy or term does not exist.
        """
        data = payload.model_dump()
        await self._check_references(data)
        classificacao = await create_entity(
            self.repository, ClassificacaoInformacao(**data), self.options
        )
        return envelope("Classificação de informação criada com sucesso", classificacao)

    async def update(
        self, classificacao_id: uuid.UUID, payload: ClassificacaoInformacaoUpdate
    ) -> dict:
        changes = payload.changes()
        if not changes:
            raise ValidationError("Nenhum campo fornecido para atualização")
        await self._check_references(changes)
        classificacao = await update_entity(
            self.repository,
            classificacao_id,
            changes,
            self.options,
            "Classificação de informação não encontrada",
        )
        return envelope("Classificação de informação atualizada com sucesso", classificacao)

    async def assign_termo(
        self, classificacao_id: uuid.UUID, payload: AtribuirTermoRequest
    ) -> dict:
        """Point a classification at a glossary term, replacing any previous one.

        Raises:
            ValidationError: If the term does not exist.
            NotFoundError: If the classification does not exist.
        """
        await fetch_or_404(
            self.repository,
            classificacao_id,
            message="Classificação de informação não encontrada",
        )
        changes: dict[str, object] = {"termo_id": payload.termo_id}
        await self._check_references(changes)
        classificacao = await update_entity(
            self.repository, classificacao_id, changes, self.options
        )
        return envelope("Termo atribuído à classificação com sucesso", classificacao)

    async def delete(self, classificacao_id: uuid.UUID) -> dict:
        classificacao = await delete_entity(
            self.repository,
            classificacao_id,
            (),
            self.options,
            "Classificação de informação não encontrada",
        )
        return envelope("Classificação de informação excluída com sucesso", classificacao)
