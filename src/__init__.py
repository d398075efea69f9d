"""DECODE-GOV - Data governance catalog API.

Keeps the inventory of data assets of a government body (systems, databases,
tables, columns and data types) together with the governance layer that sits
on top of it: communities, processes, policies, roles, role assignments,
quality dimensions and quality rules.

Layout:
- **api**: FastAPI routers, controllers, pydantic schemas and middleware
- **core**: Settings, exceptions, logging, tracing and credential helpers
- **infrastructure**: SQLAlchemy models, sessions and the generic repository
"""
