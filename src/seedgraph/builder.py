"""
RecordBuilder - state machine for a single record and its parent links.

Usage:
    account = RecordBuilder("account").set_field("name", "Acme")
    contact = RecordBuilder("contact").set_field("email", "a@acme.test")
    contact.set_parent("account_id", account)

    # In-memory only: the parent is built as an existing record first
    record = contact.build()
    assert record["account_id"] == account.record.id

    # Or commit through a unit of work
    contact.persist(InMemoryUnitOfWork())
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Hashable, Mapping, Optional

from .errors import CycleError, GraphError, StateError
from .hooks import NO_HOOKS, BuilderHooks
from .ids import IdGenerator, get_id_generator
from .record import Describer, Record, describe_key, kind_name
from .registry import BuilderRegistry, get_registry
from .utils.logger import debug, error

if TYPE_CHECKING:
    from .persistence.unit_of_work import UnitOfWork


class BuilderState(Enum):
    """Lifecycle state of a builder.

    FRESH -> REGISTERED -> BUILT, or FRESH -> BUILT. BUILT is terminal.
    """

    FRESH = "fresh"
    REGISTERED = "registered"
    BUILT = "built"


class RecordBuilder:
    """Accumulates field values and parent links, then produces a Record."""

    def __init__(
        self,
        kind: Any,
        *,
        registry: Optional[BuilderRegistry] = None,
        hooks: Optional[BuilderHooks] = None,
        id_generator: Optional[IdGenerator] = None,
        describer: Optional[Describer] = None,
    ):
        """Initialize the builder.

        Args:
            kind: Entity kind tag of the records this builder produces
            registry: Registry joined by register(). Defaults to get_registry().
            hooks: Lifecycle callbacks
            id_generator: Identifier source for build-as-existing.
                Defaults to get_id_generator().
            describer: Names relationship keys in error messages
        """
        self._kind = kind
        self._registry = registry
        self._hooks = hooks or NO_HOOKS
        self._id_generator = id_generator
        self._describer = describer or describe_key
        self._fields: dict[Hashable, Any] = {}
        self._parents: dict[Hashable, RecordBuilder] = {}
        self._state = BuilderState.FRESH
        self._building = False
        self._record = Record(kind)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def kind(self) -> Any:
        return self._kind

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def is_built(self) -> bool:
        return self._state is BuilderState.BUILT

    @property
    def is_registered(self) -> bool:
        return self._state is BuilderState.REGISTERED

    @property
    def record(self) -> Record:
        """The record owned by this builder (unidentified until built)."""
        return self._record

    @property
    def fields(self) -> dict[Hashable, Any]:
        """Copy of the pending field values."""
        return dict(self._fields)

    @property
    def parents(self) -> dict[Hashable, RecordBuilder]:
        """Copy of the pending parent links."""
        return dict(self._parents)

    @property
    def hooks(self) -> BuilderHooks:
        return self._hooks

    @property
    def registry(self) -> Optional[BuilderRegistry]:
        """Registry this builder was configured with or joined, if any."""
        return self._registry

    def describe(self, key: Hashable) -> str:
        """Human-readable name of a field or relationship key."""
        return self._describer(key)

    # =========================================================================
    # Fluent setters
    # =========================================================================

    def set_field(self, key: Hashable, value: Any) -> RecordBuilder:
        """Set (or overwrite) a field value.

        Raises:
            StateError: If the builder is already built
        """
        self._check_mutable(f"set field '{self.describe(key)}'")
        self._fields[key] = value
        return self

    def with_values(
        self, values: Optional[Mapping[Hashable, Any]] = None, **kwargs: Any
    ) -> RecordBuilder:
        """Set several fields at once from a mapping and/or keyword arguments."""
        for key, value in {**(values or {}), **kwargs}.items():
            self.set_field(key, value)
        return self

    def set_parent(self, key: Hashable, parent: RecordBuilder) -> RecordBuilder:
        """Link a parent builder under a relationship key (last link wins).

        The parent's state is checked later, when this builder is built or
        committed.

        Raises:
            StateError: If the builder is already built
            TypeError: If parent is not a RecordBuilder
        """
        self._check_mutable(f"set parent '{self.describe(key)}'")
        if not isinstance(parent, RecordBuilder):
            raise TypeError(
                f"Parent for '{self.describe(key)}' must be a RecordBuilder, "
                f"got {type(parent).__name__}"
            )
        self._parents[key] = parent
        return self

    # =========================================================================
    # Output methods
    # =========================================================================

    def build(self, is_new: bool = True) -> Record:
        """Materialize the record without persisting it.

        Un-built parents are built first as existing records so their
        identifiers can be copied into the relationship fields.

        Args:
            is_new: If True the record keeps no identifier; otherwise one is
                generated as if the record already existed.

        Returns:
            The builder's record

        Raises:
            StateError: If the builder is registered or already built
            GraphError: If a parent is registered, or built without an identifier
            CycleError: If the parent graph loops back to this builder
        """
        if self._state is BuilderState.REGISTERED:
            raise StateError(
                f"Cannot build registered {self}; commit it through its registry"
            )
        self._check_mutable("build")

        self._building = True
        try:
            self._hooks.fire("before_build", self)
            self._apply_fields()
            self._check_parents(set(), set())
            parent_ids = {
                key: self._resolve_parent_id(parent)
                for key, parent in self._parents.items()
            }
        finally:
            self._building = False
        self._record.fields.update(parent_ids)

        if is_new:
            self._record.id = None
        else:
            generator = self._id_generator or get_id_generator()
            self._record.id = generator.generate(self._kind)

        self._state = BuilderState.BUILT
        self._hooks.fire("after_build", self)
        debug(f"Built {self} (id={self._record.id})")
        return self._record

    def build_new(self) -> Record:
        """Build a record that has no identifier."""
        return self.build(is_new=True)

    def build_existing(self) -> Record:
        """Build a record with a generated identifier."""
        return self.build(is_new=False)

    def register(self) -> RecordBuilder:
        """Queue this builder for the next batch commit of its registry.

        Raises:
            StateError: If the builder is already registered or built
        """
        if self._state is BuilderState.REGISTERED:
            raise StateError(f"{self} is already registered")
        self._check_mutable("register")

        registry = self._registry if self._registry is not None else get_registry()
        registry.add(self)
        self._registry = registry
        self._state = BuilderState.REGISTERED
        debug(f"Registered {self}")
        return self

    def persist(self, unit_of_work: UnitOfWork) -> Record:
        """Commit this builder and its unpersisted ancestors immediately.

        Returns:
            The builder's record, identified by the unit of work
        """
        from .persistence.coordinator import persist

        persist(unit_of_work, [self])
        return self._record

    # =========================================================================
    # Internals shared with the persistence coordinator
    # =========================================================================

    def _apply_fields(self) -> None:
        self._record.fields.update(self._fields)

    def _mark_built(self) -> None:
        if self._registry is not None:
            self._registry.discard(self)
        self._state = BuilderState.BUILT

    def _check_mutable(self, action: str) -> None:
        if self._state is BuilderState.BUILT:
            raise StateError(f"Cannot {action} on {self}: already built")

    def _check_parents(
        self, path: set[RecordBuilder], checked: set[RecordBuilder]
    ) -> None:
        """Validate every link reachable through unbuilt ancestors.

        Nothing is built here, so a bad link deep in the graph fails the
        build before any ancestor changes state.
        """
        path.add(self)
        for key, parent in self._parents.items():
            name = self.describe(key)
            if parent._state is BuilderState.REGISTERED:
                error(f"{self}: parent '{name}' is registered for a batch commit")
                raise GraphError(
                    f"Parent '{name}' of {self} is registered; "
                    "commit it through its registry instead of building directly"
                )
            if parent in path or parent._building:
                raise CycleError(f"Parent '{name}' of {self} is already being built")
            if parent._state is BuilderState.BUILT:
                if parent._record.id is None:
                    error(f"{self}: parent '{name}' was built as new")
                    raise GraphError(
                        f"Parent '{name}' of {self} was built as new and has no identifier"
                    )
            elif parent not in checked:
                parent._check_parents(path, checked)
        path.discard(self)
        checked.add(self)

    def _resolve_parent_id(self, parent: RecordBuilder) -> str:
        if parent._state is not BuilderState.BUILT:
            parent.build(is_new=False)
        return parent._record.id

    def __repr__(self) -> str:
        return f"RecordBuilder({kind_name(self._kind)}, {self._state.value})"
