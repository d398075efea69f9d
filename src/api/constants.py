"""API-related constants."""

# HTTP headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Client metadata
MAX_USER_AGENT_LENGTH = 200
