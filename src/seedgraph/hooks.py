"""
Lifecycle hooks for builders.

Hooks let entity-specific builders inject defaults or side effects at four
points: before/after a direct build and before/after a committed insert.
Each hook receives the builder it fires for.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .builder import RecordBuilder

Hook = Callable[["RecordBuilder"], None]

HOOK_POINTS = ("before_build", "after_build", "before_insert", "after_insert")


@dataclass(frozen=True)
class BuilderHooks:
    """Set of optional lifecycle callbacks.

    Example:
        def default_name(builder):
            if "name" not in builder.fields:
                builder.set_field("name", "Acme")

        hooks = BuilderHooks(before_build=default_name, before_insert=default_name)
    """

    before_build: Optional[Hook] = None
    after_build: Optional[Hook] = None
    before_insert: Optional[Hook] = None
    after_insert: Optional[Hook] = None

    def fire(self, point: str, builder: RecordBuilder) -> None:
        """Invoke the callback registered for ``point``, if any.

        Raises:
            ValueError: If ``point`` is not a known hook point
        """
        if point not in HOOK_POINTS:
            raise ValueError(f"Unknown hook point: {point}")
        callback = getattr(self, point)
        if callback is not None:
            callback(builder)

    def merged(self, other: BuilderHooks) -> BuilderHooks:
        """Combine two hook sets; at each point ``self`` runs before ``other``."""
        combined = {}
        for point in HOOK_POINTS:
            first, second = getattr(self, point), getattr(other, point)
            if first is None or second is None:
                combined[point] = first or second
            else:
                combined[point] = _chain(first, second)
        return BuilderHooks(**combined)


def _chain(first: Hook, second: Hook) -> Hook:
    def chained(builder: RecordBuilder) -> None:
        first(builder)
        second(builder)

    return chained


NO_HOOKS = BuilderHooks()
