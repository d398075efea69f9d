"""User account schemas. Password hashes never appear in any response model."""

from typing import ClassVar

from pydantic import EmailStr, Field

from src.api.schemas.common import CamelModel, EntityRead, PartialUpdate


class UsuarioSummary(EntityRead):
    nome: str
    email: str


class UsuarioRead(UsuarioSummary):
    ativo: bool


class UsuarioRegister(CamelModel):
    nome: str = Field(min_length=1, max_length=100)
    email: EmailStr
    senha: str = Field(min_length=6, max_length=100)
    ativo: bool = True


class LoginRequest(CamelModel):
    email: EmailStr
    senha: str = Field(min_length=1)


class LoginData(CamelModel):
    token: str
    usuario: UsuarioRead


class ProfileUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome", "email"})

    nome: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None


class ChangePasswordRequest(CamelModel):
    senha_atual: str = Field(min_length=1)
    nova_senha: str = Field(min_length=6, max_length=100)


class UsuarioUpdate(PartialUpdate):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"nome", "email", "ativo"})

    nome: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    ativo: bool | None = None
