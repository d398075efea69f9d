"""MFA configuration routes.

Configurations are created through ``/setup`` and switched off through
``/{id}/disable``; the generic create/update/delete verbs answer 405.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.controllers.helpers import validate_id
from src.api.controllers.mfa import MfaController
from src.api.dependencies import Paging
from src.api.middleware.auth import require_authentication
from src.api.schemas.common import Envelope, PagedEnvelope
from src.api.schemas.mfa import (
    ConfiguracaoMfaRead,
    MfaDisableData,
    MfaDisableRequest,
    MfaEnableData,
    MfaEnableRequest,
    MfaSetupData,
    MfaSetupRequest,
    MfaVerifyData,
    MfaVerifyRequest,
)
from src.infrastructure.database.dependencies import DatabaseSession
from src.infrastructure.database.models.enums import TipoMfa

router = APIRouter(prefix="/mfa", tags=["mfa"], dependencies=[Depends(require_authentication)])


@router.get("", response_model=PagedEnvelope[list[ConfiguracaoMfaRead]])
async def list_configuracoes(
    db: DatabaseSession,
    paging: Paging,
    usuario_id: Annotated[uuid.UUID | None, Query(alias="usuarioId")] = None,
    tipo: TipoMfa | None = None,
    ativo: bool | None = None,
) -> dict:
    return await MfaController(db).find_many(paging, usuario_id, tipo, ativo)


@router.post("/setup", response_model=Envelope[MfaSetupData])
async def setup(payload: MfaSetupRequest, db: DatabaseSession) -> dict:
    return await MfaController(db).setup(payload)


@router.post("/enable", response_model=Envelope[MfaEnableData])
async def enable(payload: MfaEnableRequest, db: DatabaseSession) -> dict:
    return await MfaController(db).enable(payload)


@router.post("/verify", response_model=Envelope[MfaVerifyData])
async def verify(payload: MfaVerifyRequest, db: DatabaseSession) -> dict:
    return await MfaController(db).verify(payload)


@router.put("/{configuracao_id}/disable", response_model=Envelope[MfaDisableData])
async def disable(
    configuracao_id: str, payload: MfaDisableRequest, db: DatabaseSession
) -> dict:
    return await MfaController(db).disable(validate_id(configuracao_id), payload)


@router.get("/{configuracao_id}", response_model=Envelope[ConfiguracaoMfaRead])
async def get_configuracao(configuracao_id: str, db: DatabaseSession) -> dict:
    return await MfaController(db).find_by_id(validate_id(configuracao_id))


@router.post("", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def create_configuracao() -> None:
    MfaController.create()


@router.put("/{configuracao_id}", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def update_configuracao(configuracao_id: str) -> None:
    MfaController.update()


@router.delete("/{configuracao_id}", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def delete_configuracao(configuracao_id: str) -> None:
    MfaController.delete()
