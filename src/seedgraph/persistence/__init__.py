"""Committing builder graphs through transactional units of work."""

from .coordinator import persist, persist_all, persist_registered, prepare
from .duckdb_store import DuckDBUnitOfWork, SeedDatabase
from .unit_of_work import BaseUnitOfWork, InMemoryUnitOfWork, UnitOfWork

__all__ = [
    "persist",
    "persist_all",
    "persist_registered",
    "prepare",
    "UnitOfWork",
    "BaseUnitOfWork",
    "InMemoryUnitOfWork",
    "DuckDBUnitOfWork",
    "SeedDatabase",
]
