"""Core infrastructure: configuration, exceptions, logging, security and tracing."""
