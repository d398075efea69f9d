"""Correlation id handling for every request.

The id arrives in ``X-Correlation-ID`` or is generated here, is stored in the
request context so handlers and log records can read it, and is echoed back
on the response. The context is cleared once the response is produced.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.api.constants import CORRELATION_ID_HEADER
from src.core.context import RequestContext, generate_correlation_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind the correlation id to the request context and to loguru."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        RequestContext.set_correlation_id(correlation_id)

        try:
            # contextualize removes the binding when the request ends
            with logger.contextualize(correlation_id=correlation_id):
                response = await call_next(request)
                response.headers[CORRELATION_ID_HEADER] = correlation_id
                return response
        finally:
            RequestContext.clear()
