"""Registration, login, cookie sessions and user administration."""

import pytest
import pytest_check as check
from httpx import AsyncClient

from src.core.config import get_settings
from src.core.security import TokenPayload, create_access_token
from src.infrastructure.database.models import Usuario
from tests.integration.conftest import TEST_PASSWORD


@pytest.mark.integration
class TestRegister:
    async def test_register_creates_user_without_exposing_hash(self, client: AsyncClient) -> None:
        response = await client.post(
            "/usuarios/register",
            json={"nome": "Bruno", "email": "Bruno@Gov.BR", "senha": "123456"},
        )
        body = response.json()

        check.equal(response.status_code, 201)
        check.equal(body["message"], "Usuário criado com sucesso")
        check.equal(body["data"]["email"], "bruno@gov.br")
        check.is_true(body["data"]["ativo"])
        check.is_not_in("senha", body["data"])

    async def test_duplicate_email_is_conflict(
        self, client: AsyncClient, usuario: Usuario
    ) -> None:
        """Verify e-mail uniqueness ignores case."""
        response = await client.post(
            "/usuarios/register",
            json={"nome": "Outra", "email": usuario.email.upper(), "senha": "123456"},
        )

        check.equal(response.status_code, 409)
        check.equal(response.json()["message"], "Email já cadastrado")

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "x@gov.br", "senha": "123456"},
            {"nome": "X", "email": "nao-e-email", "senha": "123456"},
            {"nome": "X", "email": "x@gov.br", "senha": "123"},
        ],
    )
    async def test_invalid_payload_is_bad_request(
        self, client: AsyncClient, payload: dict[str, str]
    ) -> None:
        response = await client.post("/usuarios/register", json=payload)

        check.equal(response.status_code, 400)
        check.equal(response.json()["error"], "BadRequest")


@pytest.mark.integration
class TestLogin:
    """Test token issuance and the auth cookie."""

    async def test_login_returns_token_and_sets_cookie(
        self, client: AsyncClient, usuario: Usuario
    ) -> None:
        response = await client.post(
            "/usuarios/login", json={"email": usuario.email, "senha": TEST_PASSWORD}
        )
        body = response.json()

        check.equal(response.status_code, 200)
        check.equal(body["message"], "Login realizado com sucesso")
        check.is_true(body["data"]["token"])
        check.equal(body["data"]["usuario"]["id"], str(usuario.id))
        check.is_not_in("senha", body["data"]["usuario"])

        set_cookie = response.headers["set-cookie"]
        check.is_in("authToken=", set_cookie)
        check.is_in("HttpOnly", set_cookie)
        check.is_in("Max-Age=86400", set_cookie)
        check.is_in("samesite=lax", set_cookie.lower())

    async def test_cookie_authenticates_later_requests(
        self, client: AsyncClient, usuario: Usuario
    ) -> None:
        """Verify the cookie alone is enough to reach protected routes."""
        await client.post("/usuarios/login", json={"email": usuario.email, "senha": TEST_PASSWORD})

        response = await client.get("/usuarios/profile")

        check.equal(response.status_code, 200)
        check.equal(response.json()["data"]["email"], usuario.email)

    async def test_logout_clears_cookie(self, client: AsyncClient, usuario: Usuario) -> None:
        await client.post("/usuarios/login", json={"email": usuario.email, "senha": TEST_PASSWORD})

        response = await client.post("/usuarios/logout")

        check.equal(response.status_code, 200)
        check.equal(response.json()["message"], "Logout realizado com sucesso")
        check.equal((await client.get("/usuarios/profile")).status_code, 401)

    @pytest.mark.parametrize(
        ("email", "senha"),
        [("ana.gestora@gov.br", "senha-errada"), ("ninguem@gov.br", TEST_PASSWORD)],
    )
    async def test_bad_credentials_are_indistinguishable(
        self, client: AsyncClient, usuario: Usuario, email: str, senha: str
    ) -> None:
        """Verify unknown e-mail and wrong password give the same answer."""
        response = await client.post("/usuarios/login", json={"email": email, "senha": senha})

        check.equal(response.status_code, 401)
        check.equal(response.json()["message"], "Credenciais inválidas")

    async def test_inactive_user_cannot_login(
        self, client: AsyncClient, auth_client: AsyncClient, usuario: Usuario
    ) -> None:
        await auth_client.put(f"/usuarios/{usuario.id}", json={"ativo": False})

        response = await client.post(
            "/usuarios/login", json={"email": usuario.email, "senha": TEST_PASSWORD}
        )

        check.equal(response.status_code, 401)
        check.equal(response.json()["message"], "Usuário inativo")


@pytest.mark.integration
class TestProfile:
    async def test_update_profile(self, auth_client: AsyncClient) -> None:
        response = await auth_client.put("/usuarios/profile", json={"nome": "Ana Souza"})

        check.equal(response.status_code, 200)
        check.equal(response.json()["data"]["nome"], "Ana Souza")

    async def test_profile_name_cannot_be_null(self, auth_client: AsyncClient) -> None:
        response = await auth_client.put("/usuarios/profile", json={"nome": None})

        check.equal(response.status_code, 400)
        check.is_in("nome não pode ser nulo", response.json()["message"])

    async def test_change_password(self, client: AsyncClient, auth_client: AsyncClient) -> None:
        """Verify the new password works and the old one stops working."""
        response = await auth_client.put(
            "/usuarios/change-password",
            json={"senhaAtual": TEST_PASSWORD, "novaSenha": "nova-senha-456"},
        )
        check.equal(response.status_code, 200)
        check.equal(response.json(), {"message": "Senha alterada com sucesso", "data": None})

        old = await client.post(
            "/usuarios/login", json={"email": "ana.gestora@gov.br", "senha": TEST_PASSWORD}
        )
        new = await client.post(
            "/usuarios/login", json={"email": "ana.gestora@gov.br", "senha": "nova-senha-456"}
        )
        check.equal(old.status_code, 401)
        check.equal(new.status_code, 200)

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/usuarios/profile"),
            ("PUT", "/usuarios/profile"),
            ("PUT", "/usuarios/change-password"),
        ],
    )
    async def test_token_with_non_uuid_user_is_unauthorized(
        self, client: AsyncClient, method: str, path: str
    ) -> None:
        """Verify a signed token naming no valid user id is a 401, not a server error."""
        token = create_access_token(
            TokenPayload(user_id="not-a-uuid", email="ana.gestora@gov.br"),
            get_settings().auth_config,
        )
        headers = {"Authorization": f"Bearer {token}"}

        response = await client.request(method, path, headers=headers)

        check.equal(response.status_code, 401)
        check.equal(response.json()["message"], "Token de acesso inválido")

    async def test_change_password_requires_current_password(
        self, auth_client: AsyncClient
    ) -> None:
        response = await auth_client.put(
            "/usuarios/change-password",
            json={"senhaAtual": "errada", "novaSenha": "nova-senha-456"},
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["message"], "Senha atual incorreta")


@pytest.mark.integration
class TestUsuarioAdministration:
    async def test_list_and_search(self, auth_client: AsyncClient) -> None:
        await auth_client.post(
            "/usuarios/register",
            json={"nome": "Carlos", "email": "carlos@gov.br", "senha": "123456"},
        )

        everyone = (await auth_client.get("/usuarios")).json()["data"]
        found = (await auth_client.get("/usuarios", params={"search": "carlos"})).json()["data"]

        check.equal(len(everyone), 2)
        check.equal([u["nome"] for u in found], ["Carlos"])

    async def test_order_by_password_hash_is_ignored(self, auth_client: AsyncClient) -> None:
        """Verify sorting on the password column falls back to the default order."""
        for nome in ("Carlos", "Beatriz"):
            await auth_client.post(
                "/usuarios/register",
                json={"nome": nome, "email": f"{nome.lower()}@gov.br", "senha": "123456"},
            )

        default = (await auth_client.get("/usuarios")).json()["data"]
        response = await auth_client.get("/usuarios", params={"orderBy": '{"senha":"desc"}'})

        check.equal(response.status_code, 200)
        check.equal([u["id"] for u in response.json()["data"]], [u["id"] for u in default])

    async def test_list_requires_authentication(self, client: AsyncClient) -> None:
        assert (await client.get("/usuarios")).status_code == 401

    async def test_get_unknown_user(self, auth_client: AsyncClient) -> None:
        response = await auth_client.get("/usuarios/7d3f6c1e-1111-4222-8333-944455556666")

        check.equal(response.status_code, 404)
        check.equal(response.json()["message"], "Usuário não encontrado")

    async def test_delete_user(self, auth_client: AsyncClient) -> None:
        created = await auth_client.post(
            "/usuarios/register",
            json={"nome": "Temp", "email": "temp@gov.br", "senha": "123456"},
        )
        usuario_id = created.json()["data"]["id"]

        response = await auth_client.delete(f"/usuarios/{usuario_id}")

        check.equal(response.status_code, 200)
        check.equal(response.json()["data"]["id"], usuario_id)
        check.equal((await auth_client.get(f"/usuarios/{usuario_id}")).status_code, 404)
