"""User accounts: registration, session cookie, profile and administration.

``register``, ``login`` and ``logout`` are public; every other route needs a
valid access token.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from src.api.controllers.helpers import envelope, validate_id
from src.api.controllers.usuario import UsuarioController
from src.api.dependencies import Paging, Search
from src.api.middleware.auth import CurrentUser
from src.api.schemas.common import Envelope
from src.api.schemas.usuario import (
    ChangePasswordRequest,
    LoginData,
    LoginRequest,
    ProfileUpdate,
    UsuarioRead,
    UsuarioRegister,
    UsuarioUpdate,
)
from src.core.config import get_settings
from src.core.constants import SECONDS_PER_DAY
from src.infrastructure.database.dependencies import DatabaseSession

router = APIRouter(prefix="/usuarios", tags=["usuarios"])


def _controller(db: DatabaseSession) -> UsuarioController:
    return UsuarioController(db, get_settings().auth_config)


@router.post(
    "/register", response_model=Envelope[UsuarioRead], status_code=status.HTTP_201_CREATED
)
async def register(payload: UsuarioRegister, db: DatabaseSession) -> dict:
    return await _controller(db).register(payload)


@router.post("/login", response_model=Envelope[LoginData])
async def login(payload: LoginRequest, response: Response, db: DatabaseSession) -> dict:
    """Issue an access token and also set it as an httpOnly cookie."""
    token, usuario = await _controller(db).login(payload)
    auth_config = get_settings().auth_config
    response.set_cookie(
        auth_config.cookie_name,
        token,
        max_age=SECONDS_PER_DAY,
        httponly=True,
        secure=auth_config.cookie_secure,
        samesite="lax",
    )
    return envelope("Login realizado com sucesso", {"token": token, "usuario": usuario})


@router.post("/logout", response_model=Envelope[None])
async def logout(response: Response) -> dict:
    response.delete_cookie(get_settings().auth_config.cookie_name)
    return envelope("Logout realizado com sucesso", None)


@router.get("/profile", response_model=Envelope[UsuarioRead])
async def get_profile(user: CurrentUser, db: DatabaseSession) -> dict:
    return await _controller(db).profile(uuid.UUID(user.user_id))


@router.put("/profile", response_model=Envelope[UsuarioRead])
async def update_profile(payload: ProfileUpdate, user: CurrentUser, db: DatabaseSession) -> dict:
    return await _controller(db).update_profile(uuid.UUID(user.user_id), payload)


@router.put("/change-password", response_model=Envelope[None])
async def change_password(
    payload: ChangePasswordRequest, user: CurrentUser, db: DatabaseSession
) -> dict:
    return await _controller(db).change_password(uuid.UUID(user.user_id), payload)


@router.get("", response_model=Envelope[list[UsuarioRead]])
async def list_usuarios(
    _user: CurrentUser,
    db: DatabaseSession,
    paging: Paging,
    search: Search = None,
    ativo: Annotated[bool | None, Query()] = None,
) -> dict:
    return await _controller(db).find_many(paging, search, ativo)


@router.get("/{usuario_id}", response_model=Envelope[UsuarioRead])
async def get_usuario(usuario_id: str, _user: CurrentUser, db: DatabaseSession) -> dict:
    return await _controller(db).find_by_id(validate_id(usuario_id))


@router.put("/{usuario_id}", response_model=Envelope[UsuarioRead])
async def update_usuario(
    usuario_id: str, payload: UsuarioUpdate, _user: CurrentUser, db: DatabaseSession
) -> dict:
    return await _controller(db).update(validate_id(usuario_id), payload)


@router.delete("/{usuario_id}", response_model=Envelope[UsuarioRead])
async def delete_usuario(usuario_id: str, _user: CurrentUser, db: DatabaseSession) -> dict:
    return await _controller(db).delete(validate_id(usuario_id))
