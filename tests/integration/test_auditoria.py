"""Audit trail: automatic recording of entity writes and the /auditoria routes."""

import orjson
import pytest
import pytest_check as check
from httpx import AsyncClient
from pytest_mock import MockerFixture
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import LogAuditoria, Usuario
from src.infrastructure.database.models.enums import OperacaoAuditoria


async def _logs(session: AsyncSession) -> list[LogAuditoria]:
    result = await session.execute(select(LogAuditoria).order_by(LogAuditoria.timestamp))
    return list(result.scalars().all())


@pytest.mark.integration
class TestAutomaticAudit:
    """Test the rows written by the audit middleware."""

    async def test_create_is_recorded(
        self, auth_client: AsyncClient, db_session: AsyncSession, usuario: Usuario
    ) -> None:
        response = await auth_client.post("/sistemas", json={"nome": "SIAFI"})
        sistema_id = response.json()["data"]["id"]

        logs = await _logs(db_session)

        check.equal(len(logs), 1)
        log = logs[0]
        check.equal(log.entidade, "sistemas")
        check.equal(log.entidade_id, sistema_id)
        check.equal(log.operacao, OperacaoAuditoria.CREATE)
        check.equal(log.usuario_id, usuario.id)
        check.is_none(log.dados_antes)
        check.equal(orjson.loads(log.dados_depois)["nome"], "SIAFI")

    async def test_update_records_before_and_after(
        self, auth_client: AsyncClient, db_session: AsyncSession
    ) -> None:
        created = await auth_client.post("/sistemas", json={"nome": "SIAFI"})
        sistema_id = created.json()["data"]["id"]

        await auth_client.put(f"/sistemas/{sistema_id}", json={"nome": "SIAFI 2"})

        update = next(log for log in await _logs(db_session) if log.operacao == "UPDATE")
        check.equal(orjson.loads(update.dados_antes)["nome"], "SIAFI")
        check.equal(orjson.loads(update.dados_depois)["nome"], "SIAFI 2")
        check.is_in("createdAt", orjson.loads(update.dados_antes))

    async def test_delete_records_before_only(
        self, auth_client: AsyncClient, db_session: AsyncSession
    ) -> None:
        created = await auth_client.post("/sistemas", json={"nome": "SIAFI"})
        sistema_id = created.json()["data"]["id"]

        await auth_client.delete(f"/sistemas/{sistema_id}")

        delete = next(log for log in await _logs(db_session) if log.operacao == "DELETE")
        check.equal(delete.entidade_id, sistema_id)
        check.equal(orjson.loads(delete.dados_antes)["nome"], "SIAFI")
        check.is_none(delete.dados_depois)

    async def test_user_snapshot_never_contains_password(
        self, auth_client: AsyncClient, db_session: AsyncSession, usuario: Usuario
    ) -> None:
        await auth_client.put(f"/usuarios/{usuario.id}", json={"nome": "Ana S."})

        logs = await _logs(db_session)

        check.equal(len(logs), 1)
        check.is_not_in("senha", orjson.loads(logs[0].dados_antes))
        check.is_not_in("senha", orjson.loads(logs[0].dados_depois))

    @pytest.mark.parametrize(
        ("method", "path", "payload"),
        [
            ("POST", "/sistemas", {}),
            ("PUT", "/sistemas/7d3f6c1e-1111-4222-8333-944455556666", {"nome": "X"}),
            ("DELETE", "/sistemas/7d3f6c1e-1111-4222-8333-944455556666", None),
        ],
    )
    async def test_failed_writes_are_not_recorded(
        self,
        auth_client: AsyncClient,
        db_session: AsyncSession,
        method: str,
        path: str,
        payload: dict[str, str] | None,
    ) -> None:
        response = await auth_client.request(method, path, json=payload)

        check.greater_equal(response.status_code, 400)
        check.equal(await _logs(db_session), [])

    async def test_reads_and_logins_are_not_recorded(
        self, client: AsyncClient, auth_client: AsyncClient, db_session: AsyncSession
    ) -> None:
        await auth_client.get("/sistemas")
        await client.post(
            "/usuarios/register",
            json={"nome": "Novo", "email": "novo@gov.br", "senha": "123456"},
        )

        assert await _logs(db_session) == []

    async def test_audit_failure_does_not_fail_the_request(
        self, auth_client: AsyncClient, db_session: AsyncSession, mocker: MockerFixture
    ) -> None:
        """Verify a broken audit write is logged and the write still succeeds."""
        mocker.patch(
            "src.api.middleware.audit.write_audit_log",
            side_effect=SQLAlchemyError("audit table unavailable"),
        )

        response = await auth_client.post("/sistemas", json={"nome": "SIAFI"})

        check.equal(response.status_code, 201)
        check.equal(response.json()["data"]["nome"], "SIAFI")
        check.equal(await _logs(db_session), [])


@pytest.mark.integration
class TestAuditoriaRoutes:
    """Test querying the audit trail over HTTP."""

    @pytest.fixture
    async def sistema_id(self, auth_client: AsyncClient) -> str:
        created = await auth_client.post("/sistemas", json={"nome": "SIAFI"})
        sistema_id = created.json()["data"]["id"]
        await auth_client.put(f"/sistemas/{sistema_id}", json={"descricao": "Financeiro"})
        await auth_client.post("/bancos", json={"nome": "PRODDB"})
        return sistema_id

    async def test_list_is_paged_and_filterable(
        self, auth_client: AsyncClient, sistema_id: str
    ) -> None:
        response = await auth_client.get("/auditoria", params={"entidade": "sistemas"})
        body = response.json()

        check.equal(response.status_code, 200)
        check.equal(body["pagination"], {"total": 2, "skip": 0, "take": 20, "pages": 1})
        check.equal({log["entidadeId"] for log in body["data"]}, {sistema_id})
        check.is_instance(body["data"][0]["dadosDepois"], dict)

    async def test_filter_by_operacao(self, auth_client: AsyncClient, sistema_id: str) -> None:
        response = await auth_client.get("/auditoria", params={"operacao": "CREATE"})

        check.equal(response.json()["pagination"]["total"], 2)
        check.equal({log["entidade"] for log in response.json()["data"]}, {"sistemas", "bancos"})

    async def test_relatorio_entidade(self, auth_client: AsyncClient, sistema_id: str) -> None:
        response = await auth_client.get(f"/auditoria/relatorio/sistemas/{sistema_id}")
        data = response.json()["data"]

        check.equal(response.status_code, 200)
        check.equal(data["entidadeId"], sistema_id)
        check.equal(data["estatisticas"]["totalOperacoes"], 2)
        check.equal(
            data["estatisticas"]["operacoesPorTipo"], {"CREATE": 1, "UPDATE": 1, "DELETE": 0}
        )
        check.equal(data["estatisticas"]["usuariosEnvolvidos"], 1)
        check.equal([log["operacao"] for log in data["logs"]], ["CREATE", "UPDATE"])

    async def test_atividades_usuario(
        self, auth_client: AsyncClient, usuario: Usuario, sistema_id: str
    ) -> None:
        response = await auth_client.get(f"/auditoria/usuario/{usuario.id}/atividades")
        estatisticas = response.json()["data"]["estatisticas"]

        check.equal(response.status_code, 200)
        check.equal(estatisticas["totalOperacoes"], 3)
        check.equal(estatisticas["entidadesAfetadas"], ["bancos", "sistemas"])
        check.equal(estatisticas["diasAnalisados"], 30)

    async def test_atividades_rejects_out_of_range_days(
        self, auth_client: AsyncClient, usuario: Usuario
    ) -> None:
        response = await auth_client.get(
            f"/auditoria/usuario/{usuario.id}/atividades", params={"dias": 400}
        )
        assert response.status_code == 400

    async def test_manual_log_creation(self, auth_client: AsyncClient, usuario: Usuario) -> None:
        response = await auth_client.post(
            "/auditoria",
            json={
                "entidade": "Exportacao",
                "entidadeId": "lote-42",
                "operacao": "CREATE",
                "dadosDepois": '{"linhas": 10}',
                "usuarioId": str(usuario.id),
            },
        )
        data = response.json()["data"]

        check.equal(response.status_code, 201)
        check.equal(data["dadosDepois"], {"linhas": 10})
        check.equal(data["usuario"]["email"], usuario.email)

    async def test_manual_log_requires_existing_user(self, auth_client: AsyncClient) -> None:
        response = await auth_client.post(
            "/auditoria",
            json={
                "entidade": "Exportacao",
                "entidadeId": "lote-42",
                "operacao": "CREATE",
                "usuarioId": "7d3f6c1e-1111-4222-8333-944455556666",
            },
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["message"], "Usuário não encontrado")

    @pytest.mark.parametrize(
        ("method", "message"),
        [
            ("PUT", "Logs de auditoria não podem ser alterados"),
            ("DELETE", "Logs de auditoria não podem ser excluídos"),
        ],
    )
    async def test_logs_are_immutable(
        self, auth_client: AsyncClient, sistema_id: str, method: str, message: str
    ) -> None:
        log_id = (await auth_client.get("/auditoria")).json()["data"][0]["id"]

        response = await auth_client.request(method, f"/auditoria/{log_id}", json={})

        check.equal(response.status_code, 405)
        check.equal(response.json()["error"], "MethodNotAllowed")
        check.equal(response.json()["message"], message)
