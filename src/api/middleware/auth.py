"""Access-token authentication as a FastAPI dependency.

The token is read from ``Authorization: Bearer <jwt>`` or, failing that, from
the auth cookie. A verified token records the caller in the request context
so log records and audit rows carry the user id.
"""

from typing import Annotated

from fastapi import Depends, Request
from loguru import logger

from src.core.config import AuthConfig, get_settings
from src.core.context import RequestContext
from src.core.exceptions import UnauthorizedError
from src.core.security import TokenPayload, decode_access_token

BEARER_PREFIX = "bearer "


def extract_token(request: Request, config: AuthConfig) -> str | None:
    """Return the raw token from the Authorization header or the auth cookie."""
    authorization = request.headers.get("Authorization", "")
    if authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX) :].strip()
        if token:
            return token
    return request.cookies.get(config.cookie_name) or None


def authenticate_request(request: Request, config: AuthConfig) -> TokenPayload:
    """Verify the request's token without touching the request state.

    Raises:
        UnauthorizedError: If no token was sent or it fails verification.
    """
    token = extract_token(request, config)
    if token is None:
        raise UnauthorizedError("Token de acesso não fornecido")
    return decode_access_token(token, config)


async def require_authentication(request: Request) -> TokenPayload:
    """Dependency guarding every catalog route."""
    payload = authenticate_request(request, get_settings().auth_config)
    request.state.user = payload
    RequestContext.set_user_id(payload.user_id)
    logger.debug("Authenticated user {}", payload.user_id)
    return payload


CurrentUser = Annotated[TokenPayload, Depends(require_authentication)]
