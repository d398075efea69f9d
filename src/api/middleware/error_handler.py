"""Global exception handlers for the FastAPI application.

Every failure leaves the API as an ``ErrorResponse`` body whose ``error``
field is one of the ``ErrorCode`` values. Client errors are logged at warning
level; internal errors are logged with their traceback and never expose
driver messages outside development.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from src.api.schemas.errors import ErrorResponse, ServiceInfo
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.context import RequestContext, generate_request_id
from src.core.error_context import sanitize_dict, sanitize_error_context
from src.core.exceptions import (
    ConflictError,
    DecodeGovError,
    ErrorCode,
    MethodNotAllowedError,
    NotFoundError,
    Severity,
    UnauthorizedError,
    ValidationError,
)

STATUS_BY_EXCEPTION: tuple[tuple[type[DecodeGovError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (MethodNotAllowedError, status.HTTP_405_METHOD_NOT_ALLOWED),
    (ConflictError, status.HTTP_409_CONFLICT),
)

ERROR_BY_STATUS = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
}

HTTP_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Rota não encontrada",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Método não permitido",
}


def get_service_info(settings: Settings) -> ServiceInfo:
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def status_for(exc: DecodeGovError) -> int:
    """HTTP status for an application exception; unknown subclasses are 500."""
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def decodegov_error_handler(request: Request, exc: Exception) -> Response:
    """Handle DecodeGovError exceptions.

    Args:
        request: The FastAPI request that caused the exception
        exc: The DecodeGovError exception to handle

    Returns:
        Response: ORJSONResponse with error details

    Raises:
        TypeError: If exc is not a DecodeGovError instance
    """
    if not isinstance(exc, DecodeGovError):
        raise TypeError(f"Expected DecodeGovError, got {type(exc).__name__}")

    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()
    status_code = status_for(exc)

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
            "error_code": exc.error_code,
            "status_code": status_code,
        },
    )

    if exc.is_expected:
        logger.warning(
            "Handling {exception_type}: {message}",
            exception_type=type(exc).__name__,
            message=exc.message,
            correlation_id=correlation_id,
            **error_context,
        )
    else:
        logger.opt(exception=exc.cause or exc).error(
            "Handling {exception_type}: {message}",
            exception_type=type(exc).__name__,
            message=exc.message,
            correlation_id=correlation_id,
            **error_context,
        )

    debug_info = None
    if settings.environment == "development":
        debug_info = {
            "stack_trace": exc.stack_trace,
            "error_context": sanitize_dict(exc.context),
            "exception_type": type(exc).__name__,
        }
        if exc.cause:
            debug_info["cause"] = {
                "type": type(exc.cause).__name__,
                "message": str(exc.cause),
            }

    # internal errors carry driver details in their context; keep them server-side
    details = sanitize_dict(exc.context) if exc.is_expected else None

    error_response = ErrorResponse(
        error=exc.error_code,
        message=exc.message,
        details=details or None,
        correlation_id=correlation_id,
        request_id=generate_request_id(),
        severity=exc.severity.value,
        service_info=get_service_info(settings),
        debug_info=debug_info,
    )

    return ORJSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Report body, query and path validation failures as 400 BadRequest.

    Field errors are grouped by their dotted location so clients can map
    them back to form fields.

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()

    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field_path = error.get("loc", ())
        field_name = ".".join(str(loc) for loc in field_path[1:] if loc != "__root__")
        if not field_name:
            field_name = "root"
        error_msg = str(error.get("msg", "Valor inválido")).removeprefix("Value error, ")
        field_errors.setdefault(field_name, []).append(error_msg)

    error_context = sanitize_error_context(
        exc,
        {
            "path": str(request.url.path),
            "method": request.method,
            "validation_errors": field_errors,
        },
    )
    logger.warning(
        "Request validation failed",
        correlation_id=correlation_id,
        status_code=status.HTTP_400_BAD_REQUEST,
        **error_context,
    )

    first_field, first_messages = next(iter(field_errors.items()), ("root", ["Dados inválidos"]))
    error_response = ErrorResponse(
        error=ErrorCode.BAD_REQUEST.value,
        message=f"{first_field}: {first_messages[0]}",
        details={"validation_errors": field_errors},
        correlation_id=correlation_id,
        request_id=generate_request_id(),
        severity=Severity.LOW.value,
        service_info=get_service_info(settings),
    )

    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Render Starlette HTTPException (unknown route, wrong verb) in the standard shape.

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()

    error_code = ERROR_BY_STATUS.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    severity = (
        Severity.HIGH
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
        else Severity.LOW
    )
    message = HTTP_MESSAGES.get(exc.status_code, str(exc.detail))

    error_context = sanitize_error_context(
        exc,
        {
            "status": exc.status_code,
            "method": request.method,
            "path": str(request.url.path),
            "detail": exc.detail,
        },
    )
    logger.warning("HTTP exception", correlation_id=correlation_id, **error_context)

    error_response = ErrorResponse(
        error=error_code.value,
        message=message,
        correlation_id=correlation_id,
        request_id=generate_request_id(),
        severity=severity.value,
        service_info=get_service_info(settings),
    )

    return ORJSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Catch-all for unhandled exceptions.

    Always answers ``InternalServerError`` with "Erro interno do servidor";
    outside production the exception type and traceback are added as debug
    information.
    """
    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
        },
    )
    logger.opt(exception=exc).error(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        correlation_id=correlation_id,
        **error_context,
    )

    details = None
    debug_info = None
    if settings.environment != "production":
        details = {"type": type(exc).__name__}
        debug_info = {
            "stack_trace": traceback.format_tb(exc.__traceback__),
            "error_context": {"error_message": str(exc)},
            "exception_type": type(exc).__name__,
        }

    error_response = ErrorResponse(
        error=ErrorCode.INTERNAL_ERROR.value,
        message="Erro interno do servidor",
        details=details,
        correlation_id=correlation_id,
        request_id=generate_request_id(),
        severity=Severity.CRITICAL.value,
        service_info=get_service_info(settings),
        debug_info=debug_info,
    )

    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(DecodeGovError, decodegov_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
