"""Governance entities: communities, processes, policies, roles and quality rules."""

import pytest
import pytest_check as check
from httpx import AsyncClient

from src.infrastructure.database.models import Usuario

POLITICA = {
    "nome": "Política de Classificação",
    "dataCriacao": "2026-01-10T00:00:00Z",
    "dataInicioVigencia": "2026-02-01T00:00:00Z",
}


async def _create(client: AsyncClient, path: str, payload: dict[str, object]) -> dict:
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.integration
class TestComunidades:
    async def test_processos_are_embedded(self, auth_client: AsyncClient) -> None:
        comunidade = await _create(auth_client, "/comunidades", {"nome": "Finanças"})
        await _create(
            auth_client, "/processos", {"nome": "Empenho", "comunidadeId": comunidade["id"]}
        )

        response = await auth_client.get(f"/comunidades/{comunidade['id']}")

        check.equal([p["nome"] for p in response.json()["data"]["processos"]], ["Empenho"])

    async def test_filter_by_parent(self, auth_client: AsyncClient) -> None:
        raiz = await _create(auth_client, "/comunidades", {"nome": "Governo"})
        await _create(auth_client, "/comunidades", {"nome": "Saúde", "parentId": raiz["id"]})

        response = await auth_client.get("/comunidades", params={"parentId": raiz["id"]})

        assert [c["nome"] for c in response.json()["data"]] == ["Saúde"]

    async def test_delete_with_processos_is_refused(self, auth_client: AsyncClient) -> None:
        comunidade = await _create(auth_client, "/comunidades", {"nome": "Finanças"})
        await _create(
            auth_client, "/processos", {"nome": "Empenho", "comunidadeId": comunidade["id"]}
        )

        response = await auth_client.delete(f"/comunidades/{comunidade['id']}")

        check.equal(response.status_code, 400)
        check.is_in("1 processo(s)", response.json()["message"])

    async def test_delete_with_subcomunidades_is_refused(self, auth_client: AsyncClient) -> None:
        raiz = await _create(auth_client, "/comunidades", {"nome": "Governo"})
        await _create(auth_client, "/comunidades", {"nome": "Saúde", "parentId": raiz["id"]})

        response = await auth_client.delete(f"/comunidades/{raiz['id']}")

        check.equal(response.status_code, 400)
        check.is_in("subcomunidade", response.json()["message"])

    async def test_processo_requires_comunidade(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post("/processos", json={"nome": "Solto"})

        check.equal(response.status_code, 400)
        check.is_in("comunidadeId", response.json()["message"])


@pytest.mark.integration
class TestPoliticas:
    """Test policy validity rules and status filtering."""

    async def test_defaults_on_create(self, auth_client: AsyncClient) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)

        check.equal(politica["status"], "Em_elaboracao")
        check.equal(politica["versao"], "1.0")
        check.is_none(politica["dataTermino"])

    async def test_termino_before_inicio_is_refused(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            "/politicas-internas", json={**POLITICA, "dataTermino": "2026-01-15T00:00:00Z"}
        )

        check.equal(response.status_code, 400)
        check.is_in(
            "Data de término deve ser posterior à data de início de vigência",
            response.json()["message"],
        )

    async def test_naive_termino_with_offset_inicio_is_accepted(
        self, auth_client: AsyncClient
    ) -> None:
        """Verify a naive end date is compared with an offset start date as UTC."""
        response = await auth_client.post(
            "/politicas-internas",
            json={
                **POLITICA,
                "dataInicioVigencia": "2026-01-01T00:00:00Z",
                "dataTermino": "2026-12-31T00:00:00",
            },
        )
        check.equal(response.status_code, 201)

        updated = await auth_client.put(
            f"/politicas-internas/{response.json()['data']['id']}",
            json={"dataTermino": "2027-06-30T12:00:00-03:00"},
        )
        check.equal(updated.status_code, 200)

    async def test_update_cannot_end_before_start(self, auth_client: AsyncClient) -> None:
        """Verify the rule also holds when only one date changes on update."""
        politica = await _create(auth_client, "/politicas-internas", POLITICA)

        response = await auth_client.put(
            f"/politicas-internas/{politica['id']}",
            json={"dataTermino": "2026-01-20T00:00:00Z"},
        )

        assert response.status_code == 400

    async def test_filter_by_status(self, auth_client: AsyncClient) -> None:
        await _create(auth_client, "/politicas-internas", POLITICA)
        await _create(
            auth_client, "/politicas-internas", {**POLITICA, "nome": "Vigente", "status": "Vigente"}
        )

        response = await auth_client.get("/politicas-internas", params={"status": "Vigente"})

        assert [p["nome"] for p in response.json()["data"]] == ["Vigente"]

    async def test_delete_with_papeis_is_refused(self, auth_client: AsyncClient) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)
        await _create(
            auth_client,
            "/papeis",
            {"nome": "Curador", "descricao": "Cura dados", "politicaId": politica["id"]},
        )

        response = await auth_client.delete(f"/politicas-internas/{politica['id']}")

        check.equal(response.status_code, 400)
        check.is_in("1 papel(is)", response.json()["message"])


@pytest.mark.integration
class TestPapeisEAtribuicoes:
    async def test_papel_without_nome_is_bad_request(self, auth_client: AsyncClient) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)

        response = await auth_client.post(
            "/papeis", json={"descricao": "Sem nome", "politicaId": politica["id"]}
        )
        body = response.json()

        check.equal(response.status_code, 400)
        check.equal(body["error"], "BadRequest")
        check.is_in("nome", body["details"]["validation_errors"])

    async def test_atribuicao_links_papel_and_dominio(self, auth_client: AsyncClient) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)
        papel = await _create(
            auth_client,
            "/papeis",
            {"nome": "Curador", "descricao": "Cura dados", "politicaId": politica["id"]},
        )
        dominio = await _create(auth_client, "/comunidades", {"nome": "Finanças"})

        atribuicao = await _create(
            auth_client,
            "/atribuicoes",
            {
                "papelId": papel["id"],
                "dominioId": dominio["id"],
                "tipoEntidade": "Dominio",
                "dataInicioVigencia": "2026-03-01T00:00:00Z",
            },
        )
        refused = await auth_client.delete(f"/papeis/{papel['id']}")

        check.equal(atribuicao["papel"]["nome"], "Curador")
        check.equal(atribuicao["dominio"]["nome"], "Finanças")
        check.is_false(atribuicao["onboarding"])
        check.equal(refused.status_code, 400)
        check.is_in("atribuição(ões)", refused.json()["message"])

    async def test_unknown_tipo_entidade_is_bad_request(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            "/atribuicoes",
            json={
                "papelId": "7d3f6c1e-1111-4222-8333-944455556666",
                "dominioId": "7d3f6c1e-1111-4222-8333-944455556666",
                "tipoEntidade": "Planeta",
                "dataInicioVigencia": "2026-03-01T00:00:00Z",
            },
        )
        assert response.status_code == 400


@pytest.mark.integration
class TestQualidade:
    """Test quality dimensions and rules."""

    async def test_regra_embeds_relations(
        self, auth_client: AsyncClient, usuario: Usuario
    ) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)
        dimensao = await _create(
            auth_client,
            "/dimensoes-qualidade",
            {"nome": "Completude", "politicaId": politica["id"]},
        )
        tabela = await _create(auth_client, "/tabelas", {"nome": "empenho"})

        regra = await _create(
            auth_client,
            "/regras-qualidade",
            {
                "descricao": "Valor não pode ser nulo",
                "dimensaoId": dimensao["id"],
                "tabelaId": tabela["id"],
                "responsavelId": str(usuario.id),
            },
        )

        check.equal(regra["dimensao"]["nome"], "Completude")
        check.equal(regra["tabela"]["nome"], "empenho")
        check.equal(regra["responsavel"]["email"], usuario.email)
        check.is_none(regra["coluna"])

        listed = await auth_client.get("/regras-qualidade", params={"dimensaoId": dimensao["id"]})
        check.equal(len(listed.json()["data"]), 1)

        blocked = await auth_client.delete(f"/dimensoes-qualidade/{dimensao['id']}")
        check.equal(blocked.status_code, 400)
        check.is_in("1 regra(s) de qualidade", blocked.json()["message"])
