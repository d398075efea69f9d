"""Error response body shared by every failing route.

``error`` is one of ``BadRequest``, ``Unauthorized``, ``NotFound``,
``MethodNotAllowed``, ``Conflict`` or ``InternalServerError``; ``message`` is
the human-readable reason in Portuguese. The remaining fields help trace the
failure back to a request and are optional.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    """Identifies the deployment that produced the error."""

    name: str = Field(..., examples=["DECODE-GOV"])
    version: str = Field(..., examples=["1.0.0"])
    environment: str = Field(..., examples=["development", "production"])


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    error: str = Field(
        ...,
        description="Error category",
        examples=["BadRequest", "NotFound", "Conflict"],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["ID inválido", "Registro não encontrado"],
    )

    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details (e.g., field-specific validation errors)",
        examples=[{"nome": "Field required"}],
    )

    correlation_id: str | None = Field(
        default=None,
        description="Request correlation ID for tracing and debugging",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )

    request_id: str | None = Field(
        default=None,
        description="Unique identifier of this request",
        examples=["req-550e8400-e29b-41d4-a716-446655440000"],
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
    )

    severity: str | None = Field(
        default=None,
        description="Error severity level (LOW, MEDIUM, HIGH, CRITICAL)",
        examples=["LOW", "HIGH"],
    )

    service_info: ServiceInfo | None = None

    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Debug information (only populated in development environments)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "BadRequest",
                    "message": (
                        "Não é possível deletar o banco de dados. "
                        "Ele está sendo usado por 2 tabela(s)."
                    ),
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2025-03-14T12:00:00+00:00",
                    "severity": "LOW",
                },
                {
                    "error": "Unauthorized",
                    "message": "Token de acesso não fornecido",
                    "timestamp": "2025-03-14T12:00:02+00:00",
                    "severity": "MEDIUM",
                },
            ]
        }
    }
