"""Persistence for the catalog: async SQLAlchemy engine, sessions and models."""
