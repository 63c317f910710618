"""
Pytest configuration and shared fixtures for seedgraph tests.

This module provides:
- Isolated registries and settings per test
- Builders, id generators and units of work
- In-memory DuckDB databases with the sample schema
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temp file so tests never read ~/.config/seedgraph."""
    from seedgraph.utils import settings

    monkeypatch.setenv(settings.CONFIG_ENV, str(tmp_path / "settings.json"))
    settings.reset_settings()
    yield
    settings.reset_settings()


@pytest.fixture(autouse=True)
def fresh_default_registry():
    """Give every test an empty process-wide registry."""
    from seedgraph.registry import reset_registry

    yield reset_registry()
    reset_registry()


# =============================================================================
# Core fixtures
# =============================================================================


@pytest.fixture
def registry():
    """An explicit registry, separate from the process-wide one."""
    from seedgraph import BuilderRegistry

    return BuilderRegistry()


@pytest.fixture
def id_generator():
    """Deterministic generator: account-000001, account-000002, ..."""
    from seedgraph import SequentialIdGenerator

    return SequentialIdGenerator(width=6, separator="-")


@pytest.fixture
def uow(id_generator):
    """In-memory unit of work sharing the test's id generator."""
    from seedgraph import InMemoryUnitOfWork

    return InMemoryUnitOfWork(id_generator=id_generator)


@pytest.fixture
def make_builder(registry, id_generator):
    """Factory for builders bound to the test registry and generator."""
    from seedgraph import RecordBuilder

    def factory(kind: str = "thing", **kwargs):
        kwargs.setdefault("registry", registry)
        kwargs.setdefault("id_generator", id_generator)
        return RecordBuilder(kind, **kwargs)

    return factory


# =============================================================================
# DuckDB
# =============================================================================


@pytest.fixture
def seed_db():
    """In-memory DuckDB with account/contact/opportunity tables."""
    from seedgraph import SeedDatabase

    db = SeedDatabase(":memory:")
    db.ensure_table(
        "account", {"name": "VARCHAR", "industry": "VARCHAR", "employees": "INTEGER"}
    )
    db.ensure_table(
        "contact",
        {
            "last_name": "VARCHAR",
            "email": "VARCHAR",
            "account_id": "VARCHAR",
            "reports_to_id": "VARCHAR",
        },
    )
    db.ensure_table(
        "opportunity",
        {
            "amount": "INTEGER",
            "stage": "VARCHAR",
            "account_id": "VARCHAR",
            "contact_id": "VARCHAR",
        },
    )
    yield db
    db.close()


# =============================================================================
# Fake data
# =============================================================================


@pytest.fixture
def fake():
    """Seeded Faker instance for ad-hoc field values."""
    from faker import Faker

    faker = Faker()
    faker.seed_instance(1234)
    return faker
