"""
Transactional units of work.

A unit of work collects new records and the relationships between them, then
commits everything at once. Identifiers are assigned on commit, and every
relationship field is filled in from its parent's identifier.

UnitOfWork is the protocol the persistence coordinator talks to.
BaseUnitOfWork implements the bookkeeping; subclasses only decide where
records are written (nowhere, for InMemoryUnitOfWork).
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional, Protocol

from ..errors import CommitError
from ..ids import IdGenerator, get_id_generator
from ..record import Record, describe_key, kind_name
from ..utils.logger import debug, error


class UnitOfWork(Protocol):
    def register_new(self, record: Record) -> None: ...

    def register_relationship(
        self, child: Record, key: Hashable, parent: Record
    ) -> None: ...

    def commit_work(self) -> None: ...


class BaseUnitOfWork(ABC):
    """Collects registrations and resolves identifiers on commit.

    Pending registrations are dropped after every commit attempt, successful
    or not. A failed commit restores each touched record to its state before
    the attempt.
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        """Initialize the unit of work.

        Args:
            id_generator: Source of identifiers for new records.
                Defaults to get_id_generator().
        """
        self._id_generator = id_generator
        self._new: list[Record] = []
        self._new_ids: set[int] = set()
        self._relationships: list[tuple[Record, Hashable, Record]] = []
        self.committed: list[Record] = []

    @property
    def pending(self) -> list[Record]:
        """New records registered since the last commit, in order."""
        return list(self._new)

    @property
    def pending_relationships(self) -> list[tuple[Record, Hashable, Record]]:
        return list(self._relationships)

    def register_new(self, record: Record) -> None:
        if id(record) in self._new_ids:
            return
        self._new_ids.add(id(record))
        self._new.append(record)

    def register_relationship(self, child: Record, key: Hashable, parent: Record) -> None:
        self._relationships.append((child, key, parent))

    def commit_work(self) -> None:
        """Assign identifiers, resolve relationships and write all records.

        Raises:
            CommitError: If a relationship parent has no identifier, or the
                underlying store rejects the batch
        """
        records, relationships = self._new, self._relationships
        self._new, self._new_ids, self._relationships = [], set(), []

        snapshot = _snapshot(records, relationships)
        try:
            self._assign_ids(records)
            self._resolve_relationships(relationships)
            self._write(records)
        except Exception:
            for record, fields, record_id in snapshot:
                record.fields = fields
                record.id = record_id
            raise

        self.committed.extend(records)
        debug(f"{type(self).__name__} committed {len(records)} records")

    def _assign_ids(self, records: list[Record]) -> None:
        generator = self._id_generator or get_id_generator()
        for record in records:
            if record.id is None:
                record.id = generator.generate(record.kind)

    def _resolve_relationships(
        self, relationships: list[tuple[Record, Hashable, Record]]
    ) -> None:
        for child, key, parent in relationships:
            if parent.id is None:
                error(f"Unresolvable relationship '{describe_key(key)}'")
                raise CommitError(
                    f"Parent of {kind_name(child.kind)}.{describe_key(key)} "
                    "has no identifier and was not registered as new"
                )
            child.fields[key] = parent.id

    @abstractmethod
    def _write(self, records: list[Record]) -> None:
        """Persist identified records in registration order, atomically."""


class InMemoryUnitOfWork(BaseUnitOfWork):
    """Unit of work that keeps committed records in memory.

    ``operations`` journals every registration in order, which makes the
    commit order observable in tests.
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        super().__init__(id_generator)
        self.operations: list[tuple[Any, ...]] = []
        self.commit_count = 0

    def register_new(self, record: Record) -> None:
        self.operations.append(("new", record))
        super().register_new(record)

    def register_relationship(self, child: Record, key: Hashable, parent: Record) -> None:
        self.operations.append(("relationship", child, key, parent))
        super().register_relationship(child, key, parent)

    def _write(self, records: list[Record]) -> None:
        self.commit_count += 1

    def new_records(self) -> list[Record]:
        """Records passed to register_new, in journal order (duplicates kept)."""
        return [op[1] for op in self.operations if op[0] == "new"]


def _snapshot(
    records: list[Record], relationships: list[tuple[Record, Hashable, Record]]
) -> list[tuple[Record, dict, Optional[str]]]:
    touched: dict[int, Record] = {id(r): r for r in records}
    for child, _key, _parent in relationships:
        touched.setdefault(id(child), child)
    return [(r, dict(r.fields), r.id) for r in touched.values()]
