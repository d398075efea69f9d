"""Unit tests for src/core/error_context.py."""

import pytest
import pytest_check as check

from src.core.constants import REDACTED
from src.core.error_context import (
    is_sensitive_field,
    sanitize_dict,
    sanitize_error_context,
    sanitize_sql_params,
)
from src.core.exceptions import ValidationError


@pytest.mark.unit
class TestSensitiveFields:
    @pytest.mark.parametrize(
        "field_name",
        ["senha", "novaSenha", "password", "secretKey", "authToken", "codigo", "Authorization"],
    )
    def test_sensitive_names(self, field_name: str) -> None:
        assert is_sensitive_field(field_name)

    @pytest.mark.parametrize("field_name", ["nome", "email", "descricao", "tabelaId"])
    def test_plain_names(self, field_name: str) -> None:
        assert not is_sensitive_field(field_name)


@pytest.mark.unit
class TestSanitize:
    """Test redaction of nested structures."""

    def test_nested_values_are_redacted(self) -> None:
        """Verify redaction walks into dicts and lists without touching the input."""
        data = {
            "nome": "Ana",
            "senha": "segredo",
            "mfa": {"secretKey": "abcd", "tipo": "TOTP"},
            "codigos": ["A1B2C3D4"],
        }

        sanitized = sanitize_dict(data)

        check.equal(sanitized["nome"], "Ana")
        check.equal(sanitized["senha"], REDACTED)
        check.equal(sanitized["mfa"], {"secretKey": REDACTED, "tipo": "TOTP"})
        check.equal(sanitized["codigos"], REDACTED)
        check.equal(data["senha"], "segredo")

    def test_error_context_includes_type_and_sanitized_attributes(self) -> None:
        error = ValidationError("Senha atual incorreta", context={"senha": "x"})

        context = sanitize_error_context(error, {"path": "/usuarios/change-password"})

        check.equal(context["error_type"], "ValidationError")
        check.equal(context["path"], "/usuarios/change-password")
        check.equal(context["error_attributes"]["context"], {"senha": REDACTED})

    @pytest.mark.parametrize(
        ("params", "expected"),
        [
            (None, None),
            ({"senha": "x", "nome": "Ana"}, {"senha": REDACTED, "nome": "Ana"}),
            (("Ana", 1), ("Ana", 1)),
            (object(), REDACTED),
        ],
    )
    def test_sql_params(self, params: object, expected: object) -> None:
        assert sanitize_sql_params(params) == expected
