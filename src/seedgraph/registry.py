"""
Registry of builders awaiting a coordinated batch commit.

Use an explicit BuilderRegistry for isolated scopes, or get_registry() for
the process-wide default.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from .builder import RecordBuilder
    from .persistence.unit_of_work import UnitOfWork
    from .record import Record


class BuilderRegistry:
    """Insertion-ordered set of registered builders.

    Not transactional with the commit: members stay registered when a commit
    fails, so the batch can be retried.
    """

    def __init__(self) -> None:
        self._builders: dict[RecordBuilder, None] = {}

    def add(self, builder: RecordBuilder) -> None:
        self._builders[builder] = None

    def discard(self, builder: RecordBuilder) -> None:
        self._builders.pop(builder, None)

    def clear(self) -> None:
        self._builders.clear()

    def snapshot(self) -> list[RecordBuilder]:
        """Current members in registration order."""
        return list(self._builders)

    def persist(self, unit_of_work: UnitOfWork) -> list[Record]:
        """Commit every registered builder in one unit of work.

        See ``seedgraph.persistence.persist_registered``.
        """
        from .persistence.coordinator import persist_registered

        return persist_registered(unit_of_work, self)

    def __contains__(self, builder: object) -> bool:
        return builder in self._builders

    def __len__(self) -> int:
        return len(self._builders)

    def __iter__(self) -> Iterator[RecordBuilder]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"BuilderRegistry({len(self._builders)} builders)"


# Global singleton registry
_registry: Optional[BuilderRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> BuilderRegistry:
    """Get the process-wide default registry."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = BuilderRegistry()
        return _registry


def reset_registry() -> BuilderRegistry:
    """Replace the process-wide registry with an empty one and return it."""
    global _registry
    with _registry_lock:
        _registry = BuilderRegistry()
        return _registry
