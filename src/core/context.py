"""Request-scoped context stored in contextvars.

Holds the correlation id of the current request and, once the request has
been authenticated, the id of the calling user, so log records and error
responses can be tied back to both.
"""

import uuid
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)


class RequestContext:
    """Async-safe accessors for request-scoped values."""

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        """Set the correlation ID for the current context.

        Args:
            correlation_id: The correlation ID to store in the context.
        """
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        """Get the correlation ID from the current context.

        Returns:
            str | None: The correlation ID if set, None otherwise.
        """
        return _correlation_id_var.get()

    @staticmethod
    def set_user_id(user_id: str | None) -> None:
        """Record the authenticated user for the current context."""
        _user_id_var.set(user_id)

    @staticmethod
    def get_user_id() -> str | None:
        """Return the authenticated user id, if the request carried a valid token."""
        return _user_id_var.get()

    @staticmethod
    def clear() -> None:
        """Reset all request-scoped values."""
        _correlation_id_var.set(None)
        _user_id_var.set(None)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracking.

    Returns:
        str: A string representation of a UUID4.
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Generate a unique request ID, prefixed with ``req-``.

    Examples:
        >>> generate_request_id().startswith("req-")
        True
    """
    return f"req-{uuid.uuid4()}"
