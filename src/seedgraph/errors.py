"""
Exceptions raised by builders and the persistence coordinator.
"""


class SeedGraphError(Exception):
    """Base class for all seedgraph errors."""


class StateError(SeedGraphError):
    """An operation was attempted on a builder in an illegal lifecycle state."""


class GraphError(SeedGraphError):
    """A relationship points at a parent in an invalid state for the operation."""


class CycleError(GraphError):
    """The parent graph reachable from a builder contains a cycle."""


class CommitError(SeedGraphError):
    """A unit of work failed to commit its pending records."""
