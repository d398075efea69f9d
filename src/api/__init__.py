"""HTTP layer of the catalog.

- **routes**: One router per entity base path (``/sistemas``, ``/colunas``...)
- **controllers**: Per-entity handlers built on shared list/get/create helpers
- **schemas**: camelCase request bodies and response envelopes
- **middleware**: Security headers, correlation ids, request logs and the
  audit trail
"""
