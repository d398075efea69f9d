"""Structured exception hierarchy for consistent error handling.

Every error the API reports to a client is raised as a ``DecodeGovError``
subclass. The global exception handlers map each subclass to an HTTP status
and render the ``{error, message}`` body, so controllers never build error
responses themselves.

Key components:
- **ErrorCode enum**: the ``error`` value sent to clients
- **Severity enum**: error classification for logging and alerting
- **DecodeGovError**: base exception with context and fingerprinting
- **Specialized exceptions**: one per HTTP outcome (400, 401, 404, 405, 409)
"""

import hashlib
import traceback
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Error identifiers returned in the ``error`` field of error responses."""

    BAD_REQUEST = "BadRequest"
    """Invalid input, or an operation blocked by dependent records."""

    UNAUTHORIZED = "Unauthorized"
    """Missing, malformed or expired credentials."""

    NOT_FOUND = "NotFound"
    """The requested record does not exist."""

    METHOD_NOT_ALLOWED = "MethodNotAllowed"
    """The resource does not support the requested operation."""

    CONFLICT = "Conflict"
    """A uniqueness constraint would be violated."""

    INTERNAL_ERROR = "InternalServerError"
    """An unexpected error occurred."""


class Severity(Enum):
    """Severity levels used to pick log levels and alerting."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class DecodeGovError(Exception):
    """Base exception class for all application exceptions.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable error message
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        self.stack_trace = traceback.format_stack()[:-1]
        self.fingerprint = self._generate_fingerprint()

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    def _generate_fingerprint(self) -> str:
        """Hash the error type and raising location for grouping in logs."""
        max_frames = 5
        relevant_frames = self.stack_trace[-max_frames:]

        fingerprint_data = f"{self.__class__.__name__}:{self.error_code}"
        for frame in relevant_frames:
            if "site-packages" not in frame and "src/" in frame:
                lines = frame.strip().split("\n")
                if lines:
                    fingerprint_data += f":{lines[0]}"

        return hashlib.sha256(fingerprint_data.encode()).hexdigest()[:16]

    @property
    def is_expected(self) -> bool:
        """Whether the error comes from normal client behaviour (LOW or MEDIUM)."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(DecodeGovError):
    """Raised when input fails validation or a business rule (HTTP 400).

    Also used when a delete is refused because dependent rows still
    reference the record.
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.BAD_REQUEST,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class NotFoundError(DecodeGovError):
    """Raised when a requested record does not exist (HTTP 404)."""

    def __init__(
        self,
        message: str = "Registro não encontrado",
        error_code: str | ErrorCode = ErrorCode.NOT_FOUND,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class ConflictError(DecodeGovError):
    """Raised when a write would violate a uniqueness constraint (HTTP 409)."""

    def __init__(
        self,
        message: str = "Violação de constraint única",
        error_code: str | ErrorCode = ErrorCode.CONFLICT,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class UnauthorizedError(DecodeGovError):
    """Raised when authentication fails (HTTP 401)."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.UNAUTHORIZED,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.MEDIUM, context, cause)


class MethodNotAllowedError(DecodeGovError):
    """Raised for operations a resource deliberately refuses (HTTP 405)."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.METHOD_NOT_ALLOWED,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context)


class StoreError(DecodeGovError):
    """Raised for unclassified persistence failures (HTTP 500).

    The original driver exception is kept as ``cause`` so the handler can log
    it while the client only sees a generic message.
    """

    def __init__(
        self,
        message: str = "Erro interno do servidor",
        error_code: str | ErrorCode = ErrorCode.INTERNAL_ERROR,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.HIGH, context, cause)
