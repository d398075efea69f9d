"""Cross-cutting request/response middleware.

Registered so that a request passes through, in order: security headers,
request context (correlation id), request logging, audit trail, CORS.
Authentication is a route dependency (``middleware.auth``) and exception
rendering lives in ``middleware.error_handler``.
"""
