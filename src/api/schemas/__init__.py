"""Pydantic request and response models.

Bodies travel in camelCase; every success response is wrapped in an
``Envelope`` (``message`` + ``data``), and paginated listings add
``pagination``.
"""
