"""
Persistence coordinator - commits a graph of builders through a unit of work.

Flow:
1. Prepare: walk each builder's parents depth-first, registering every
   ancestor with the unit of work before its descendants, once per call.
   Calls are journaled locally and reach the unit of work only once the
   whole graph prepared cleanly, so a rejected graph leaves it untouched.
2. Commit: one atomic commit_work() call. On failure nothing changes state.
3. Finalize: mark every prepared builder BUILT and fire after_insert.

Registered parents must be committed in the same call as their children.
Inside the batch they are prepared first; outside it they are rejected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Iterable, Iterator, Optional, Protocol

from ..builder import BuilderState, RecordBuilder
from ..errors import CycleError, GraphError, StateError
from ..record import Record
from ..registry import BuilderRegistry, get_registry
from ..utils.logger import get_logger, log_context

if TYPE_CHECKING:
    from .unit_of_work import UnitOfWork

logger = get_logger("persist")


class _Batch(Protocol):
    def __iter__(self) -> Iterator[RecordBuilder]: ...

    def clear(self) -> None: ...


class PreparedOperations:
    """Journal of unit-of-work calls held back until preparation succeeds.

    Quacks like a UnitOfWork for prepare(); replay() forwards the calls in
    their original order.
    """

    def __init__(self):
        self.calls: list[tuple] = []

    def register_new(self, record: Record) -> None:
        self.calls.append(("register_new", record))

    def register_relationship(self, child: Record, key: Hashable, parent: Record) -> None:
        self.calls.append(("register_relationship", child, key, parent))

    def replay(self, unit_of_work: UnitOfWork) -> None:
        for name, *args in self.calls:
            getattr(unit_of_work, name)(*args)


def persist(unit_of_work: UnitOfWork, builders: _Batch) -> list[Record]:
    """Commit ``builders`` and their not-yet-registered ancestors atomically.

    Args:
        unit_of_work: Transactional collaborator
        builders: Any clearable iterable of builders (list, set, registry).
            It is cleared after a successful commit.

    Returns:
        Records of the batch members, in batch order

    Raises:
        StateError: If a batch member is already built
        GraphError: If a parent cannot take part in this commit
        Exception: Whatever commit_work() raises; no builder changes state
    """
    batch = list(dict.fromkeys(builders))
    members = set(batch)
    prepared: dict[RecordBuilder, None] = {}

    for builder in batch:
        if builder.state is BuilderState.BUILT:
            raise StateError(f"Cannot commit {builder}: already built")

    with log_context(auto_batch_id=True):
        operations = PreparedOperations()
        for builder in batch:
            if builder not in prepared:
                prepare(operations, builder, prepared, members)
        operations.replay(unit_of_work)

        logger.debug(f"Prepared {len(prepared)} builders from {len(batch)} requested")
        try:
            unit_of_work.commit_work()
        except Exception:
            logger.exception(f"Commit of {len(prepared)} records failed")
            raise

        for builder in prepared:
            builder._mark_built()
            builder.hooks.fire("after_insert", builder)

        builders.clear()
        logger.info(f"Committed {len(prepared)} records")

    return [builder.record for builder in batch]


def prepare(
    unit_of_work: UnitOfWork,
    builder: RecordBuilder,
    prepared: dict[RecordBuilder, None],
    members: Optional[set[RecordBuilder]] = None,
    path: Optional[set[RecordBuilder]] = None,
) -> None:
    """Register ``builder`` and its unprepared ancestors, ancestors first.

    Args:
        unit_of_work: Transactional collaborator
        builder: Builder to register as a new record
        prepared: Insertion-ordered set of builders already registered in this call
        members: Builders requested in this call; registered parents outside
            it are rejected
        path: Builders on the current traversal path (cycle detection)

    Raises:
        GraphError: If a parent is built, or registered outside ``members``
        CycleError: If a parent is on the current traversal path
    """
    members = members if members is not None else {builder}
    path = path if path is not None else set()
    path.add(builder)

    builder.hooks.fire("before_insert", builder)
    builder._apply_fields()

    for key, parent in builder.parents.items():
        name = builder.describe(key)
        if parent in path:
            raise CycleError(f"Parent '{name}' of {builder} is its own ancestor")
        if parent not in prepared:
            if parent.state is BuilderState.BUILT:
                logger.error(f"{builder}: parent '{name}' is already built")
                raise GraphError(
                    f"Parent '{name}' of {builder} is already built and cannot "
                    "be inserted again"
                )
            if parent.state is BuilderState.REGISTERED and parent not in members:
                logger.error(f"{builder}: parent '{name}' belongs to another batch")
                raise GraphError(
                    f"Parent '{name}' of {builder} is registered but not part of "
                    "this commit; commit them together"
                )
            prepare(unit_of_work, parent, prepared, members, path)
        unit_of_work.register_relationship(builder.record, key, parent.record)

    unit_of_work.register_new(builder.record)
    prepared[builder] = None
    path.discard(builder)
    logger.debug(f"Prepared {builder}")


def persist_registered(
    unit_of_work: UnitOfWork, registry: Optional[BuilderRegistry] = None
) -> list[Record]:
    """Commit every builder in ``registry`` (default: get_registry()).

    The registry is emptied on success and left untouched on failure.
    """
    registry = registry if registry is not None else get_registry()
    return persist(unit_of_work, registry)


def persist_all(unit_of_work: UnitOfWork, builders: Iterable[RecordBuilder]) -> list[Record]:
    """Commit builders from any iterable without consuming the caller's collection."""
    return persist(unit_of_work, list(builders))
