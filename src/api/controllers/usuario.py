"""User accounts: registration, login, profile and administration."""

import uuid

from loguru import logger
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.controllers.helpers import (
    DependentCheck,
    Pagination,
    create_entity,
    delete_entity,
    envelope,
    fetch_or_404,
    find_page,
    search_filter,
    store_errors,
    update_entity,
)
from src.api.schemas.usuario import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    UsuarioRegister,
    UsuarioUpdate,
)
from src.core.config import AuthConfig
from src.core.exceptions import ConflictError, UnauthorizedError, ValidationError
from src.core.security import (
    TokenPayload,
    create_access_token,
    hash_password,
    verify_password,
)
from src.infrastructure.database.models import RegraQualidade, Usuario
from src.infrastructure.database.repository import BaseRepository

NOT_FOUND = "Usuário não encontrado"
EMAIL_IN_USE = "Email já cadastrado"


class UsuarioController:
    dependents = (
        DependentCheck(
            RegraQualidade.responsavel_id,
            "Não é possível deletar o usuário. "
            "Ele é responsável por {count} regra(s) de qualidade.",
        ),
    )

    def __init__(self, session: AsyncSession, auth_config: AuthConfig) -> None:
        self.repository = BaseRepository(session, Usuario)
        self.auth_config = auth_config

    async def _find_by_email(self, email: str) -> Usuario | None:
        with store_errors("Usuario"):
            return await self.repository.find_one_by(email=email.lower())

    async def _ensure_email_free(self, email: str, owner_id: uuid.UUID | None = None) -> None:
        existing = await self._find_by_email(email)
        if existing is not None and existing.id != owner_id:
            raise ConflictError(EMAIL_IN_USE)

    async def register(self, payload: UsuarioRegister) -> dict:
        await self._ensure_email_free(payload.email)
        usuario = Usuario(
            nome=payload.nome,
            email=payload.email.lower(),
            senha=hash_password(payload.senha, self.auth_config.password_hash_iterations),
            ativo=payload.ativo,
        )
        usuario = await create_entity(self.repository, usuario)
        logger.info("Registered user {}", usuario.id)
        return envelope("Usuário criado com sucesso", usuario)

    async def login(self, payload: LoginRequest) -> tuple[str, Usuario]:
        """Check credentials and issue an access token.

        Unknown e-mail and wrong password produce the same error so callers
        cannot learn which accounts exist.
        """
        usuario = await self._find_by_email(payload.email)
        if usuario is None or not verify_password(payload.senha, usuario.senha):
            logger.warning("Failed login attempt")
            raise UnauthorizedError("Credenciais inválidas")
        if not usuario.ativo:
            raise UnauthorizedError("Usuário inativo")

        token = create_access_token(
            TokenPayload(user_id=str(usuario.id), email=usuario.email), self.auth_config
        )
        logger.info("User {} logged in", usuario.id)
        return token, usuario

    async def profile(self, usuario_id: uuid.UUID) -> dict:
        usuario = await fetch_or_404(self.repository, usuario_id, message=NOT_FOUND)
        return envelope("Perfil encontrado", usuario)

    async def update_profile(self, usuario_id: uuid.UUID, payload: ProfileUpdate) -> dict:
        changes = payload.changes()
        if "email" in changes:
            changes["email"] = changes["email"].lower()
            await self._ensure_email_free(changes["email"], usuario_id)
        usuario = await update_entity(
            self.repository, usuario_id, changes, not_found=NOT_FOUND
        )
        return envelope("Perfil atualizado com sucesso", usuario)

    async def change_password(
        self, usuario_id: uuid.UUID, payload: ChangePasswordRequest
    ) -> dict:
        usuario = await fetch_or_404(self.repository, usuario_id, message=NOT_FOUND)
        if not verify_password(payload.senha_atual, usuario.senha):
            raise ValidationError("Senha atual incorreta")
        new_hash = hash_password(
            payload.nova_senha, self.auth_config.password_hash_iterations
        )
        await update_entity(self.repository, usuario_id, {"senha": new_hash})
        logger.info("Password changed for user {}", usuario_id)
        return envelope("Senha alterada com sucesso", None)

    async def find_many(
        self, pagination: Pagination, search: str | None = None, ativo: bool | None = None
    ) -> dict:
        where = search_filter(Usuario, search)
        if search:
            where = [where[0] | func.lower(Usuario.email).contains(search.lower())]
        if ativo is not None:
            where.append(Usuario.ativo == ativo)
        usuarios = await find_page(self.repository, pagination, where)
        return envelope("Usuários encontrados", usuarios)

    async def find_by_id(self, usuario_id: uuid.UUID) -> dict:
        usuario = await fetch_or_404(self.repository, usuario_id, message=NOT_FOUND)
        return envelope("Usuário encontrado", usuario)

    async def update(self, usuario_id: uuid.UUID, payload: UsuarioUpdate) -> dict:
        changes = payload.changes()
        if "email" in changes:
            changes["email"] = changes["email"].lower()
            await self._ensure_email_free(changes["email"], usuario_id)
        usuario = await update_entity(
            self.repository, usuario_id, changes, not_found=NOT_FOUND
        )
        return envelope("Usuário atualizado com sucesso", usuario)

    async def delete(self, usuario_id: uuid.UUID) -> dict:
        usuario = await delete_entity(
            self.repository, usuario_id, self.dependents, not_found=NOT_FOUND
        )
        return envelope("Usuário excluído com sucesso", usuario)
