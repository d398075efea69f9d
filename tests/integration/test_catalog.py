"""CRUD behavior of the technical catalog: sistemas, bancos, tabelas, colunas."""

import pytest
import pytest_check as check
from httpx import AsyncClient

UNKNOWN_ID = "7d3f6c1e-1111-4222-8333-944455556666"


async def _create(client: AsyncClient, path: str, payload: dict[str, object]) -> dict:
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.integration
class TestSistemas:
    """Test the full lifecycle of a sistema."""

    async def test_create_and_list(self, auth_client: AsyncClient) -> None:
        await _create(auth_client, "/sistemas", {"nome": "SIAFI", "descricao": "Financeiro"})
        await _create(auth_client, "/sistemas", {"nome": "SIGEPE"})

        response = await auth_client.get("/sistemas")
        body = response.json()

        check.equal(response.status_code, 200)
        check.equal(body["message"], "Sistemas encontrados")
        check.equal(len(body["data"]), 2)
        check.equal(body["data"][0]["tabelas"], [])
        check.is_in("createdAt", body["data"][0])

    async def test_get_update_delete(self, auth_client: AsyncClient) -> None:
        sistema = await _create(auth_client, "/sistemas", {"nome": "SIAFI"})
        path = f"/sistemas/{sistema['id']}"

        fetched = await auth_client.get(path)
        check.equal(fetched.json()["message"], "Sistema encontrado")

        updated = await auth_client.put(path, json={"descricao": "Sistema financeiro"})
        check.equal(updated.status_code, 200)
        check.equal(updated.json()["data"]["descricao"], "Sistema financeiro")
        check.equal(updated.json()["data"]["nome"], "SIAFI")

        deleted = await auth_client.delete(path)
        check.equal(deleted.status_code, 200)
        check.equal(deleted.json()["message"], "Sistema excluído com sucesso")
        check.equal(deleted.json()["data"]["nome"], "SIAFI")
        check.equal((await auth_client.get(path)).status_code, 404)

    async def test_duplicate_name_is_conflict(self, auth_client: AsyncClient) -> None:
        await _create(auth_client, "/sistemas", {"nome": "SIAFI"})

        response = await auth_client.post("/sistemas", json={"nome": "SIAFI"})

        check.equal(response.status_code, 409)
        check.equal(response.json()["error"], "Conflict")

    async def test_malformed_id_is_bad_request(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get("/sistemas/123")

        check.equal(response.status_code, 400)
        check.equal(response.json()["message"], "ID inválido")

    async def test_unknown_id_is_not_found(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(f"/sistemas/{UNKNOWN_ID}")

        check.equal(response.status_code, 404)
        check.equal(response.json()["message"], "Sistema não encontrado")

    async def test_update_unknown_id_is_not_found(self, auth_client: AsyncClient) -> None:
        response = await auth_client.put(f"/sistemas/{UNKNOWN_ID}", json={"nome": "X"})
        assert response.status_code == 404

    async def test_name_cannot_be_nulled(self, auth_client: AsyncClient) -> None:
        sistema = await _create(auth_client, "/sistemas", {"nome": "SIAFI"})

        response = await auth_client.put(f"/sistemas/{sistema['id']}", json={"nome": None})

        assert response.status_code == 400

    async def test_search_matches_name_and_description(self, auth_client: AsyncClient) -> None:
        await _create(auth_client, "/sistemas", {"nome": "SIAFI", "descricao": "Financeiro"})
        await _create(auth_client, "/sistemas", {"nome": "SIGEPE", "descricao": "Pessoal"})

        by_name = await auth_client.get("/sistemas", params={"search": "siafi"})
        by_description = await auth_client.get("/sistemas", params={"search": "pess"})

        check.equal([s["nome"] for s in by_name.json()["data"]], ["SIAFI"])
        check.equal([s["nome"] for s in by_description.json()["data"]], ["SIGEPE"])


@pytest.mark.integration
class TestPagination:
    """Test skip/take/orderBy on list routes."""

    @pytest.fixture(autouse=True)
    async def sistemas(self, auth_client: AsyncClient) -> None:
        for nome in ("Beta", "Alfa", "Gama"):
            await _create(auth_client, "/sistemas", {"nome": nome})

    async def test_order_by_name(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get("/sistemas", params={"orderBy": '{"nome":"desc"}'})
        assert [s["nome"] for s in response.json()["data"]] == ["Gama", "Beta", "Alfa"]

    async def test_skip_and_take(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get(
            "/sistemas", params={"orderBy": '{"nome":"asc"}', "skip": 1, "take": 1}
        )
        assert [s["nome"] for s in response.json()["data"]] == ["Beta"]

    async def test_take_zero_is_clamped_to_one(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get("/sistemas", params={"take": 0})
        assert len(response.json()["data"]) == 1

    @pytest.mark.parametrize(
        "order_by", ["{nome:desc", '{"naoExiste":"asc"}', '{"nome":"baixo"}', "[]"]
    )
    async def test_bad_order_by_still_lists(self, auth_client: AsyncClient, order_by: str) -> None:
        """Verify a malformed or unknown orderBy falls back instead of failing."""
        response = await auth_client.get("/sistemas", params={"orderBy": order_by})

        check.equal(response.status_code, 200)
        check.equal(len(response.json()["data"]), 3)

    async def test_non_numeric_take_is_bad_request(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get("/sistemas", params={"take": "muitos"})
        assert response.status_code == 400

    async def test_skip_past_integer_range_returns_empty_page(
        self, auth_client: AsyncClient
    ) -> None:
        """Verify an offset too large for the database is capped rather than failing."""
        response = await auth_client.get("/sistemas", params={"skip": str(10**20)})

        check.equal(response.status_code, 200)
        check.equal(response.json()["data"], [])


@pytest.mark.integration
class TestBancosETabelas:
    """Test relations between bancos, sistemas, tabelas and colunas."""

    async def test_tabela_embeds_banco_and_sistema(self, auth_client: AsyncClient) -> None:
        banco = await _create(
            auth_client, "/bancos", {"nome": "PRODDB", "servidor": "db01", "porta": 5432}
        )
        sistema = await _create(auth_client, "/sistemas", {"nome": "SIAFI"})

        tabela = await _create(
            auth_client,
            "/tabelas",
            {"nome": "empenho", "bancoId": banco["id"], "sistemaId": sistema["id"]},
        )

        check.equal(tabela["banco"]["nome"], "PRODDB")
        check.equal(tabela["sistema"]["nome"], "SIAFI")
        check.equal(tabela["colunas"], [])

        banco_read = (await auth_client.get(f"/bancos/{banco['id']}")).json()["data"]
        check.equal(banco_read["totalTabelas"], 1)
        check.is_not_in("tabelas", banco_read)

    async def test_bancos_list_carries_table_counts(self, auth_client: AsyncClient) -> None:
        """Verify each banco reports how many tabelas it holds instead of listing them."""
        vazio = await _create(auth_client, "/bancos", {"nome": "DB1"})
        cheio = await _create(auth_client, "/bancos", {"nome": "DB2"})
        await _create(auth_client, "/tabelas", {"nome": "a", "bancoId": cheio["id"]})
        await _create(auth_client, "/tabelas", {"nome": "b", "bancoId": cheio["id"]})

        response = await auth_client.get("/bancos", params={"orderBy": '{"nome":"asc"}'})
        counts = {b["id"]: b["totalTabelas"] for b in response.json()["data"]}

        check.equal(counts, {vazio["id"]: 0, cheio["id"]: 2})
        check.equal(vazio["totalTabelas"], 0)

    async def test_filter_tabelas_by_banco(self, auth_client: AsyncClient) -> None:
        primeiro = await _create(auth_client, "/bancos", {"nome": "DB1"})
        segundo = await _create(auth_client, "/bancos", {"nome": "DB2"})
        await _create(auth_client, "/tabelas", {"nome": "a", "bancoId": primeiro["id"]})
        await _create(auth_client, "/tabelas", {"nome": "b", "bancoId": segundo["id"]})

        response = await auth_client.get("/tabelas", params={"bancoId": segundo["id"]})

        assert [t["nome"] for t in response.json()["data"]] == ["b"]

    async def test_delete_banco_in_use_is_refused(self, auth_client: AsyncClient) -> None:
        """Verify the count of dependent tabelas is reported and nothing is removed."""
        banco = await _create(auth_client, "/bancos", {"nome": "PRODDB"})
        await _create(auth_client, "/tabelas", {"nome": "t1", "bancoId": banco["id"]})
        await _create(auth_client, "/tabelas", {"nome": "t2", "bancoId": banco["id"]})

        response = await auth_client.delete(f"/bancos/{banco['id']}")

        check.equal(response.status_code, 400)
        check.equal(response.json()["error"], "BadRequest")
        check.equal(
            response.json()["message"],
            "Não é possível deletar o banco de dados. Ele está sendo usado por 2 tabela(s).",
        )
        check.equal((await auth_client.get(f"/bancos/{banco['id']}")).status_code, 200)

    async def test_delete_tabela_with_colunas_is_refused(self, auth_client: AsyncClient) -> None:
        tabela = await _create(auth_client, "/tabelas", {"nome": "empenho"})
        await _create(auth_client, "/colunas", {"nome": "valor", "tabelaId": tabela["id"]})

        response = await auth_client.delete(f"/tabelas/{tabela['id']}")

        check.equal(response.status_code, 400)
        check.is_in("1 coluna(s)", response.json()["message"])

    async def test_unknown_reference_is_bad_request(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            "/tabelas", json={"nome": "orfa", "bancoId": UNKNOWN_ID}
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["message"], "Referência inválida")

    async def test_coluna_name_unique_per_tabela(self, auth_client: AsyncClient) -> None:
        """Verify the same column name is allowed in different tables only."""
        t1 = await _create(auth_client, "/tabelas", {"nome": "t1"})
        t2 = await _create(auth_client, "/tabelas", {"nome": "t2"})
        await _create(auth_client, "/colunas", {"nome": "id", "tabelaId": t1["id"]})
        await _create(auth_client, "/colunas", {"nome": "id", "tabelaId": t2["id"]})

        response = await auth_client.post("/colunas", json={"nome": "id", "tabelaId": t1["id"]})

        assert response.status_code == 409

    async def test_coluna_with_tipo_dados(self, auth_client: AsyncClient) -> None:
        tabela = await _create(auth_client, "/tabelas", {"nome": "empenho"})
        tipo = await _create(
            auth_client, "/tipos-dados", {"nome": "DECIMAL", "categoria": "PRIMITIVO"}
        )

        coluna = await _create(
            auth_client,
            "/colunas",
            {"nome": "valor", "tabelaId": tabela["id"], "tipoDadosId": tipo["id"]},
        )
        refused = await auth_client.delete(f"/tipos-dados/{tipo['id']}")

        check.equal(coluna["tipoDados"]["nome"], "DECIMAL")
        check.equal(refused.status_code, 400)
        check.is_in("1 coluna(s)", refused.json()["message"])

    async def test_tipos_dados_filter_by_categoria(self, auth_client: AsyncClient) -> None:
        await _create(auth_client, "/tipos-dados", {"nome": "INT", "categoria": "PRIMITIVO"})
        await _create(auth_client, "/tipos-dados", {"nome": "JSON", "categoria": "SEMI_ESTRUTURADO"})

        response = await auth_client.get("/tipos-dados", params={"categoria": "SEMI_ESTRUTURADO"})

        assert [t["nome"] for t in response.json()["data"]] == ["JSON"]
