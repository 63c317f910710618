"""
seedgraph - build interrelated records and commit them in dependency order.

Usage:
    from seedgraph import RecordBuilder, BuilderRegistry, InMemoryUnitOfWork

    registry = BuilderRegistry()
    account = RecordBuilder("account", registry=registry).set_field("name", "Acme")
    contact = RecordBuilder("contact", registry=registry).set_parent("account_id", account)
    account.register()
    contact.register()

    registry.persist(InMemoryUnitOfWork())
"""

from .builder import BuilderState, RecordBuilder
from .errors import CommitError, CycleError, GraphError, SeedGraphError, StateError
from .hooks import BuilderHooks
from .ids import IdGenerator, SequentialIdGenerator, UuidIdGenerator, get_id_generator
from .persistence import (
    DuckDBUnitOfWork,
    InMemoryUnitOfWork,
    SeedDatabase,
    UnitOfWork,
    persist,
    persist_all,
    persist_registered,
)
from .record import FieldKey, Record, describe_key, key_name, kind_name
from .registry import BuilderRegistry, get_registry, reset_registry

__version__ = "0.1.0"

__all__ = [
    "RecordBuilder",
    "BuilderState",
    "BuilderHooks",
    "Record",
    "FieldKey",
    "describe_key",
    "key_name",
    "kind_name",
    "BuilderRegistry",
    "get_registry",
    "reset_registry",
    "IdGenerator",
    "SequentialIdGenerator",
    "UuidIdGenerator",
    "get_id_generator",
    "UnitOfWork",
    "InMemoryUnitOfWork",
    "DuckDBUnitOfWork",
    "SeedDatabase",
    "persist",
    "persist_all",
    "persist_registered",
    "SeedGraphError",
    "StateError",
    "GraphError",
    "CycleError",
    "CommitError",
]
