"""Per-entity request handlers, each constructed with the request's session."""
