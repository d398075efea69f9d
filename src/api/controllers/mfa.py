"""Multi-factor authentication setup, activation, verification and removal.

A configuration starts inactive. ``setup`` issues a short-lived SETUP code
(and, for TOTP, the shared secret); ``enable`` consumes that code, activates
the configuration and hands out single-use backup codes. ``verify`` accepts a
TOTP code, a pending SMS/e-mail code or an unused backup code. Every outcome
is written to the audit trail.
"""

import uuid
from datetime import UTC, datetime, timedelta

from loguru import logger
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.api.controllers.auditoria import write_audit_log
from src.api.controllers.helpers import (
    Pagination,
    envelope,
    fetch_or_404,
    find_page,
    paged_envelope,
    store_errors,
)
from src.api.schemas.mfa import (
    MfaDisableRequest,
    MfaEnableRequest,
    MfaSetupRequest,
    MfaVerifyRequest,
)
from src.core.constants import MFA_CODE_TTL_MINUTES
from src.core.exceptions import MethodNotAllowedError, ValidationError
from src.core.observability import trace_operation
from src.core.security import (
    build_otpauth_uri,
    generate_backup_codes,
    generate_numeric_code,
    generate_totp_secret,
    verify_totp,
)
from src.infrastructure.database.models import CodigoMfa, ConfiguracaoMfa, Usuario
from src.infrastructure.database.models.enums import (
    OperacaoAuditoria,
    TipoCodigoMfa,
    TipoMfa,
)
from src.infrastructure.database.repository import BaseRepository

NOT_FOUND = "Configuração MFA não encontrada"
NEWEST_FIRST = {"createdAt": "desc"}


class MfaController:
    options = (selectinload(ConfiguracaoMfa.usuario),)

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = BaseRepository(session, ConfiguracaoMfa)

    async def find_many(
        self,
        pagination: Pagination,
        usuario_id: uuid.UUID | None = None,
        tipo: TipoMfa | None = None,
        ativo: bool | None = None,
    ) -> dict:
        where = []
        if usuario_id is not None:
            where.append(ConfiguracaoMfa.usuario_id == usuario_id)
        if tipo is not None:
            where.append(ConfiguracaoMfa.tipo == tipo)
        if ativo is not None:
            where.append(ConfiguracaoMfa.ativo == ativo)

        ordered = Pagination(pagination.skip, pagination.take, NEWEST_FIRST)
        configuracoes = await find_page(self.repository, ordered, where, self.options)
        with store_errors("ConfiguracaoMfa"):
            total = await self.repository.count(*where)
        return paged_envelope(
            "Configurações MFA encontradas", configuracoes, total, pagination
        )

    async def find_by_id(self, configuracao_id: uuid.UUID) -> dict:
        configuracao = await fetch_or_404(
            self.repository, configuracao_id, self.options, NOT_FOUND
        )
        return envelope("Configuração MFA encontrada", configuracao)

    async def setup(self, payload: MfaSetupRequest) -> dict:
        with store_errors("Usuario"):
            usuario = await self.session.get(Usuario, payload.usuario_id)
        if usuario is None:
            raise ValidationError("Usuário não encontrado")
        if payload.tipo is TipoMfa.SMS and not payload.telefone:
            raise ValidationError("Telefone é obrigatório para MFA por SMS")
        if payload.tipo is TipoMfa.EMAIL and not payload.email:
            raise ValidationError("Email é obrigatório para MFA por EMAIL")

        with store_errors("ConfiguracaoMfa"):
            ativa = await self.repository.count(
                ConfiguracaoMfa.usuario_id == payload.usuario_id,
                ConfiguracaoMfa.tipo == payload.tipo,
                ConfiguracaoMfa.ativo.is_(True),
            )
        if ativa:
            raise ValidationError(
                f"Já existe uma configuração MFA ativa do tipo {payload.tipo} "
                "para este usuário"
            )

        secret_key = None
        if payload.tipo is TipoMfa.TOTP:
            secret_key = (payload.secret_key or generate_totp_secret()).lower()

        codigo = generate_numeric_code()
        with store_errors("ConfiguracaoMfa"):
            configuracao = await self.repository.create(
                ConfiguracaoMfa(
                    usuario_id=payload.usuario_id,
                    tipo=payload.tipo,
                    telefone=payload.telefone,
                    email=payload.email,
                    secret_key=secret_key,
                    ativo=False,
                )
            )
            self.session.add(
                CodigoMfa(
                    configuracao_id=configuracao.id,
                    codigo=codigo,
                    tipo=TipoCodigoMfa.SETUP,
                    expires_at=datetime.now(UTC) + timedelta(minutes=MFA_CODE_TTL_MINUTES),
                )
            )
            await write_audit_log(
                self.session,
                "ConfiguracaoMfa",
                str(configuracao.id),
                OperacaoAuditoria.CREATE,
                dados_depois={
                    "tipo": payload.tipo,
                    "usuarioId": str(payload.usuario_id),
                    "acao": "setup_iniciado",
                },
                usuario_id=payload.usuario_id,
            )

        data: dict[str, object] = {
            "configuracao_id": configuracao.id,
            "tipo": payload.tipo,
            "codigo": codigo,
        }
        if payload.tipo is TipoMfa.TOTP:
            data["qr_code_data"] = build_otpauth_uri(secret_key, usuario.email)
            data["secret_key"] = secret_key
            data["mensagem"] = "Configure seu aplicativo autenticador com o QR Code fornecido"
        elif payload.tipo is TipoMfa.SMS:
            data["mensagem"] = f"Código enviado via SMS para {payload.telefone}"
        else:
            data["mensagem"] = f"Código enviado via email para {payload.email}"
        return envelope("Configuração MFA iniciada", data)

    async def _consume_code(
        self,
        codigo: str,
        configuracao_ids: list[uuid.UUID],
        tipos: tuple[TipoCodigoMfa, ...] = (TipoCodigoMfa.SETUP, TipoCodigoMfa.BACKUP),
    ) -> CodigoMfa | None:
        """Mark a matching unused, unexpired code as used and return it."""
        if not configuracao_ids:
            return None
        now = datetime.now(UTC)
        stmt = (
            select(CodigoMfa)
            .where(
                CodigoMfa.configuracao_id.in_(configuracao_ids),
                CodigoMfa.codigo == codigo,
                CodigoMfa.usado.is_(False),
                CodigoMfa.tipo.in_(tipos),
                or_(CodigoMfa.expires_at.is_(None), CodigoMfa.expires_at > now),
            )
            .limit(1)
        )
        with store_errors("CodigoMfa"):
            match = (await self.session.execute(stmt)).scalar_one_or_none()
            if match is not None:
                match.usado = True
                await self.session.flush()
        return match

    async def enable(self, payload: MfaEnableRequest) -> dict:
        stmt = select(ConfiguracaoMfa).where(
            ConfiguracaoMfa.usuario_id == payload.usuario_id,
            ConfiguracaoMfa.ativo.is_(False),
        )
        with store_errors("ConfiguracaoMfa"):
            pendentes = list((await self.session.execute(stmt)).scalars().all())

        configuracao = None
        codigo = await self._consume_code(
            payload.codigo, [c.id for c in pendentes], (TipoCodigoMfa.SETUP,)
        )
        if codigo is not None:
            configuracao = next(c for c in pendentes if c.id == codigo.configuracao_id)
        else:
            configuracao = next(
                (
                    c
                    for c in pendentes
                    if c.tipo is TipoMfa.TOTP
                    and c.secret_key
                    and verify_totp(c.secret_key, payload.codigo)
                ),
                None,
            )
        if configuracao is None:
            raise ValidationError("Código inválido ou expirado")

        codigos_backup = generate_backup_codes()
        with store_errors("ConfiguracaoMfa"):
            configuracao.ativo = True
            configuracao.ativado_em = datetime.now(UTC)
            configuracao.desativado_em = None
            self.session.add_all(
                CodigoMfa(
                    configuracao_id=configuracao.id,
                    codigo=backup,
                    tipo=TipoCodigoMfa.BACKUP,
                )
                for backup in codigos_backup
            )
            await write_audit_log(
                self.session,
                "ConfiguracaoMfa",
                str(configuracao.id),
                OperacaoAuditoria.UPDATE,
                dados_depois={"ativado": True, "tipo": configuracao.tipo},
                usuario_id=payload.usuario_id,
            )

        logger.info("MFA {} enabled for user {}", configuracao.tipo, payload.usuario_id)
        return envelope(
            "MFA ativado com sucesso",
            {
                "configuracao": {
                    "id": configuracao.id,
                    "tipo": configuracao.tipo,
                    "ativo": True,
                    "ativado_em": configuracao.ativado_em,
                },
                "codigos_backup": codigos_backup,
            },
        )

    async def _check_code(self, configuracao: ConfiguracaoMfa, codigo: str) -> bool:
        if (
            configuracao.tipo is TipoMfa.TOTP
            and configuracao.secret_key
            and verify_totp(configuracao.secret_key, codigo)
        ):
            return True
        return await self._consume_code(codigo, [configuracao.id]) is not None

    async def verify(self, payload: MfaVerifyRequest) -> dict:
        stmt = select(ConfiguracaoMfa).where(
            ConfiguracaoMfa.usuario_id == payload.usuario_id,
            ConfiguracaoMfa.tipo == payload.tipo,
            ConfiguracaoMfa.ativo.is_(True),
        )
        with store_errors("ConfiguracaoMfa"):
            configuracao = (await self.session.execute(stmt.limit(1))).scalar_one_or_none()
        if configuracao is None:
            raise ValidationError("Configuração MFA não encontrada ou inativa")

        with trace_operation("mfa.verify", tipo=str(payload.tipo)) as span:
            verificado = await self._check_code(configuracao, payload.codigo)
            span.set_attribute("mfa.verified", verificado)
        agora = datetime.now(UTC)
        with store_errors("ConfiguracaoMfa"):
            if verificado:
                configuracao.ultima_verificacao = agora
            await write_audit_log(
                self.session,
                "VerificacaoMfa",
                str(configuracao.id),
                OperacaoAuditoria.CREATE,
                dados_depois={"sucesso": verificado, "tipo": payload.tipo, "timestamp": agora},
                usuario_id=payload.usuario_id,
            )
            if not verificado:
                # the failed attempt must survive the rollback of the error response
                await self.session.commit()

        if not verificado:
            logger.warning("MFA verification failed for user {}", payload.usuario_id)
            raise ValidationError("Código MFA inválido")

        return envelope(
            "Código MFA verificado com sucesso",
            {"verificado": True, "tipo": payload.tipo, "timestamp": agora},
        )

    async def disable(self, configuracao_id: uuid.UUID, payload: MfaDisableRequest) -> dict:
        configuracao = await fetch_or_404(self.repository, configuracao_id, message=NOT_FOUND)
        if not configuracao.ativo:
            raise ValidationError("Configuração MFA já está inativa")
        if not await self._check_code(configuracao, payload.codigo):
            raise ValidationError("Código inválido para desativação")

        with store_errors("ConfiguracaoMfa"):
            configuracao.ativo = False
            configuracao.desativado_em = datetime.now(UTC)
            await self.session.execute(
                update(CodigoMfa)
                .where(
                    CodigoMfa.configuracao_id == configuracao_id,
                    CodigoMfa.usado.is_(False),
                )
                .values(usado=True)
            )
            await write_audit_log(
                self.session,
                "ConfiguracaoMfa",
                str(configuracao_id),
                OperacaoAuditoria.UPDATE,
                dados_antes={"ativo": True},
                dados_depois={"ativo": False},
                usuario_id=configuracao.usuario_id,
            )

        return envelope(
            "MFA desativado com sucesso",
            {
                "id": configuracao.id,
                "ativo": False,
                "desativado_em": configuracao.desativado_em,
            },
        )

    @staticmethod
    def create() -> None:
        raise MethodNotAllowedError("Use o endpoint /setup para configurar MFA")

    @staticmethod
    def update() -> None:
        raise MethodNotAllowedError("Use os endpoints específicos para gerenciar MFA")

    @staticmethod
    def delete() -> None:
        raise MethodNotAllowedError("Use o endpoint /disable para desativar MFA")
