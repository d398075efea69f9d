"""Glossary terms, reference lists, business rules and information classifications."""

import pytest
import pytest_check as check
from httpx import AsyncClient

UNKNOWN_ID = "7d3f6c1e-1111-4222-8333-944455556666"

POLITICA = {
    "nome": "Política de Classificação",
    "dataCriacao": "2026-01-10T00:00:00Z",
    "dataInicioVigencia": "2026-02-01T00:00:00Z",
}


async def _create(client: AsyncClient, path: str, payload: dict[str, object]) -> dict:
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def _processo(client: AsyncClient) -> dict:
    comunidade = await _create(client, "/comunidades", {"nome": "Finanças"})
    return await _create(
        client, "/processos", {"nome": "Empenho", "comunidadeId": comunidade["id"]}
    )


@pytest.mark.integration
class TestDefinicoes:
    """Test the business glossary."""

    async def test_create_get_update_delete(self, auth_client: AsyncClient) -> None:
        definicao = await _create(
            auth_client,
            "/definicoes",
            {"nome": "Unidade Gestora", "descricao": "Unidade que executa", "sigla": "UG"},
        )
        path = f"/definicoes/{definicao['id']}"

        fetched = await auth_client.get(path)
        check.equal(fetched.json()["message"], "Definição encontrada")
        check.equal(fetched.json()["data"]["sigla"], "UG")

        updated = await auth_client.put(path, json={"sigla": None})
        check.equal(updated.status_code, 200)
        check.is_none(updated.json()["data"]["sigla"])

        deleted = await auth_client.delete(path)
        check.equal(deleted.json()["message"], "Definição excluída com sucesso")
        check.equal((await auth_client.get(path)).status_code, 404)

    async def test_duplicate_name_is_conflict(self, auth_client: AsyncClient) -> None:
        await _create(auth_client, "/definicoes", {"nome": "Empenho"})

        response = await auth_client.post("/definicoes", json={"nome": "Empenho"})

        assert response.status_code == 409

    async def test_search_matches_sigla(self, auth_client: AsyncClient) -> None:
        await _create(auth_client, "/definicoes", {"nome": "Unidade Gestora", "sigla": "UG"})
        await _create(auth_client, "/definicoes", {"nome": "Nota de Empenho", "sigla": "NE"})

        response = await auth_client.get("/definicoes", params={"search": "ne"})

        check.equal(response.json()["message"], "Definições encontradas")
        check.equal([d["sigla"] for d in response.json()["data"]], ["NE"])

    async def test_delete_used_by_classificacao_is_refused(
        self, auth_client: AsyncClient
    ) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)
        termo = await _create(auth_client, "/definicoes", {"nome": "Dado Pessoal"})
        await _create(
            auth_client,
            "/classificacoes-informacao",
            {"nome": "Restrita", "politicaId": politica["id"], "termoId": termo["id"]},
        )

        response = await auth_client.delete(f"/definicoes/{termo['id']}")

        check.equal(response.status_code, 400)
        check.equal(
            response.json()["message"],
            "Não é possível deletar a definição. "
            "Ela está sendo usada por 1 classificação(ões) de informação.",
        )


@pytest.mark.integration
class TestListasReferencia:
    """Test reference value lists and their table/column links."""

    async def test_values_are_normalized_and_returned_as_list(
        self, auth_client: AsyncClient
    ) -> None:
        tabela = await _create(auth_client, "/tabelas", {"nome": "municipio"})

        lista = await _create(
            auth_client,
            "/listas-referencia",
            {"nome": "UF", "valores": [" SP", "RJ", "SP"], "tabelaId": tabela["id"]},
        )

        check.equal(lista["valores"], ["SP", "RJ"])
        check.equal(lista["tabela"]["nome"], "municipio")
        check.is_none(lista["coluna"])

        fetched = await auth_client.get(f"/listas-referencia/{lista['id']}")
        check.equal(fetched.json()["data"]["valores"], ["SP", "RJ"])

    async def test_values_as_json_text_are_accepted(self, auth_client: AsyncClient) -> None:
        lista = await _create(
            auth_client, "/listas-referencia", {"nome": "Sexo", "valores": '["F", "M"]'}
        )
        updated = await auth_client.put(
            f"/listas-referencia/{lista['id']}", json={"valores": ["F", "M", "X"]}
        )

        check.equal(updated.status_code, 200)
        check.equal(updated.json()["data"]["valores"], ["F", "M", "X"])

    @pytest.mark.parametrize(
        ("valores", "message"),
        [
            ("[SP, RJ", "Formato JSON inválido para valores"),
            ('{"uf": "SP"}', "Valores devem ser fornecidos como um array JSON"),
            ([], "Valores são obrigatórios"),
            (["SP", " "], "Valores não podem estar vazios"),
        ],
    )
    async def test_invalid_values_are_bad_request(
        self, auth_client: AsyncClient, valores: object, message: str
    ) -> None:
        response = await auth_client.post(
            "/listas-referencia", json={"nome": "UF", "valores": valores}
        )

        check.equal(response.status_code, 400)
        check.is_in(message, response.json()["message"])

    async def test_unknown_tabela_is_bad_request(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            "/listas-referencia", json={"nome": "UF", "valores": ["SP"], "tabelaId": UNKNOWN_ID}
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["message"], "Tabela não encontrada")

    async def test_filter_by_coluna(self, auth_client: AsyncClient) -> None:
        tabela = await _create(auth_client, "/tabelas", {"nome": "municipio"})
        coluna = await _create(auth_client, "/colunas", {"nome": "uf", "tabelaId": tabela["id"]})
        await _create(
            auth_client,
            "/listas-referencia",
            {"nome": "UF", "valores": ["SP"], "colunaId": coluna["id"]},
        )
        await _create(auth_client, "/listas-referencia", {"nome": "Solta", "valores": ["A"]})

        response = await auth_client.get("/listas-referencia", params={"colunaId": coluna["id"]})

        assert [lista["nome"] for lista in response.json()["data"]] == ["UF"]

    async def test_coluna_with_lista_cannot_be_deleted(self, auth_client: AsyncClient) -> None:
        """Verify a column backing a reference list is kept, with the count reported."""
        tabela = await _create(auth_client, "/tabelas", {"nome": "municipio"})
        coluna = await _create(auth_client, "/colunas", {"nome": "uf", "tabelaId": tabela["id"]})
        await _create(
            auth_client,
            "/listas-referencia",
            {"nome": "UF", "valores": ["SP"], "colunaId": coluna["id"]},
        )

        response = await auth_client.delete(f"/colunas/{coluna['id']}")

        check.equal(response.status_code, 400)
        check.equal(
            response.json()["message"],
            "Não é possível deletar a coluna. "
            "Ela está sendo usada por 1 lista(s) de referência.",
        )
        check.equal((await auth_client.get(f"/colunas/{coluna['id']}")).status_code, 200)

    async def test_tabela_with_lista_cannot_be_deleted(self, auth_client: AsyncClient) -> None:
        tabela = await _create(auth_client, "/tabelas", {"nome": "municipio"})
        await _create(
            auth_client,
            "/listas-referencia",
            {"nome": "UF", "valores": ["SP"], "tabelaId": tabela["id"]},
        )

        response = await auth_client.delete(f"/tabelas/{tabela['id']}")

        check.equal(response.status_code, 400)
        check.is_in("1 lista(s) de referência", response.json()["message"])


@pytest.mark.integration
class TestRegrasNegocio:
    """Test business rules and their process/system references."""

    async def test_create_embeds_processo_with_defaults(self, auth_client: AsyncClient) -> None:
        processo = await _processo(auth_client)
        sistema = await _create(auth_client, "/sistemas", {"nome": "SIAFI"})

        regra = await _create(
            auth_client,
            "/regras-negocio",
            {
                "nome": "Limite de empenho",
                "codigo": "RN-001",
                "descricao": "Empenho não pode exceder a dotação",
                "tipoRegra": "VALIDACAO",
                "processoId": processo["id"],
                "sistemaId": sistema["id"],
            },
        )

        check.equal(regra["processo"]["nome"], "Empenho")
        check.equal(regra["sistema"]["nome"], "SIAFI")
        check.equal(regra["prioridade"], "MEDIA")
        check.equal(regra["status"], "ATIVA")
        check.equal(regra["versao"], "1.0")

    async def test_unknown_processo_is_bad_request(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            "/regras-negocio",
            json={
                "nome": "Órfã",
                "codigo": "RN-404",
                "descricao": "Sem processo",
                "tipoRegra": "CONTROLE",
                "processoId": UNKNOWN_ID,
            },
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["message"], "Processo não encontrado")

    async def test_duplicate_codigo_is_conflict(self, auth_client: AsyncClient) -> None:
        processo = await _processo(auth_client)
        payload = {
            "nome": "Limite",
            "codigo": "RN-001",
            "descricao": "Regra",
            "tipoRegra": "CALCULO",
            "processoId": processo["id"],
        }
        await _create(auth_client, "/regras-negocio", payload)

        response = await auth_client.post("/regras-negocio", json={**payload, "nome": "Outra"})

        assert response.status_code == 409

    async def test_filters_and_update(self, auth_client: AsyncClient) -> None:
        processo = await _processo(auth_client)
        base = {"descricao": "Regra", "processoId": processo["id"]}
        alta = await _create(
            auth_client,
            "/regras-negocio",
            {**base, "nome": "A", "codigo": "RN-A", "tipoRegra": "CALCULO", "prioridade": "ALTA"},
        )
        await _create(
            auth_client,
            "/regras-negocio",
            {**base, "nome": "B", "codigo": "RN-B", "tipoRegra": "NEGOCIO"},
        )

        by_priority = await auth_client.get("/regras-negocio", params={"prioridade": "ALTA"})
        by_type = await auth_client.get("/regras-negocio", params={"tipoRegra": "NEGOCIO"})
        check.equal([r["codigo"] for r in by_priority.json()["data"]], ["RN-A"])
        check.equal([r["codigo"] for r in by_type.json()["data"]], ["RN-B"])

        updated = await auth_client.put(
            f"/regras-negocio/{alta['id']}", json={"status": "DESCONTINUADA", "ativo": False}
        )
        check.equal(updated.json()["message"], "Regra de negócio atualizada com sucesso")
        check.equal(updated.json()["data"]["status"], "DESCONTINUADA")

        empty = await auth_client.put(f"/regras-negocio/{alta['id']}", json={})
        check.equal(empty.status_code, 400)
        check.equal(empty.json()["message"], "Nenhum campo fornecido para atualização")

    async def test_update_cannot_end_before_stored_start(self, auth_client: AsyncClient) -> None:
        processo = await _processo(auth_client)
        regra = await _create(
            auth_client,
            "/regras-negocio",
            {
                "nome": "Janela",
                "codigo": "RN-J",
                "descricao": "Regra",
                "tipoRegra": "CONTROLE",
                "processoId": processo["id"],
                "dataInicioVigencia": "2026-06-01T00:00:00Z",
            },
        )

        response = await auth_client.put(
            f"/regras-negocio/{regra['id']}", json={"dataFimVigencia": "2026-05-01T00:00:00"}
        )

        check.equal(response.status_code, 400)
        check.is_in("Data de fim deve ser posterior", response.json()["message"])

    async def test_processo_with_regras_cannot_be_deleted(self, auth_client: AsyncClient) -> None:
        processo = await _processo(auth_client)
        await _create(
            auth_client,
            "/regras-negocio",
            {
                "nome": "Limite",
                "codigo": "RN-001",
                "descricao": "Regra",
                "tipoRegra": "VALIDACAO",
                "processoId": processo["id"],
            },
        )

        response = await auth_client.delete(f"/processos/{processo['id']}")

        check.equal(response.status_code, 400)
        check.equal(
            response.json()["message"],
            "Não é possível deletar o processo. Ele está sendo usado por 1 regra(s) de negócio.",
        )


@pytest.mark.integration
class TestClassificacoesInformacao:
    """Test information classifications under a policy."""

    async def test_assign_termo(self, auth_client: AsyncClient) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)
        termo = await _create(auth_client, "/definicoes", {"nome": "Dado Pessoal"})
        classificacao = await _create(
            auth_client,
            "/classificacoes-informacao",
            {"nome": "Restrita", "politicaId": politica["id"]},
        )
        check.is_none(classificacao["termo"])
        check.equal(classificacao["politica"]["nome"], POLITICA["nome"])

        response = await auth_client.put(
            f"/classificacoes-informacao/{classificacao['id']}/termo",
            json={"termoId": termo["id"]},
        )

        check.equal(response.status_code, 200)
        check.equal(response.json()["message"], "Termo atribuído à classificação com sucesso")
        check.equal(response.json()["data"]["termo"]["nome"], "Dado Pessoal")

        listed = await auth_client.get(
            "/classificacoes-informacao", params={"termoId": termo["id"]}
        )
        check.equal([c["nome"] for c in listed.json()["data"]], ["Restrita"])

    async def test_assign_unknown_termo_is_bad_request(self, auth_client: AsyncClient) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)
        classificacao = await _create(
            auth_client,
            "/classificacoes-informacao",
            {"nome": "Restrita", "politicaId": politica["id"]},
        )

        response = await auth_client.put(
            f"/classificacoes-informacao/{classificacao['id']}/termo",
            json={"termoId": UNKNOWN_ID},
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["message"], "Termo de definição não encontrado")

    async def test_unknown_politica_is_bad_request(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            "/classificacoes-informacao", json={"nome": "Restrita", "politicaId": UNKNOWN_ID}
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["message"], "Política interna não encontrada")

    async def test_politica_with_classificacoes_cannot_be_deleted(
        self, auth_client: AsyncClient
    ) -> None:
        politica = await _create(auth_client, "/politicas-internas", POLITICA)
        await _create(
            auth_client,
            "/classificacoes-informacao",
            {"nome": "Restrita", "politicaId": politica["id"]},
        )

        response = await auth_client.delete(f"/politicas-internas/{politica['id']}")

        check.equal(response.status_code, 400)
        check.is_in("1 classificação(ões) de informação", response.json()["message"])
