"""
Record and key types.

A Record is the materialized entity a builder produces: field values plus an
optional identifier. Keys are any hashable value; FieldKey adds a display
label used only in diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Optional

Describer = Callable[[Hashable], str]


@dataclass(frozen=True, order=True)
class FieldKey:
    """Opaque field or relationship key.

    Attributes:
        name: Storage name (column name for database units of work)
        label: Human-readable name for error messages
    """

    name: str
    label: Optional[str] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.name


def key_name(key: Hashable) -> str:
    """Storage name of a key."""
    if isinstance(key, FieldKey):
        return key.name
    return str(key)


def describe_key(key: Hashable) -> str:
    """Default describer: the key's label, falling back to its storage name."""
    if isinstance(key, FieldKey) and key.label:
        return key.label
    return key_name(key)


def kind_name(kind: Any) -> str:
    """Render an entity kind tag as a string.

    Args:
        kind: Any tag (string, class, enum member, schema object)

    Returns:
        ``kind.name`` when it is a string, else ``kind.__name__``, else ``str(kind)``
    """
    name = getattr(kind, "name", None)
    if isinstance(name, str):
        return name
    name = getattr(kind, "__name__", None)
    if isinstance(name, str):
        return name
    return str(kind)


@dataclass(eq=False)
class Record:
    """Materialized entity owned by a single builder.

    Records compare by identity: two records holding equal values are still
    distinct rows.
    """

    kind: Any
    fields: dict[Hashable, Any] = field(default_factory=dict)
    id: Optional[str] = None

    @property
    def is_new(self) -> bool:
        """True while no identifier has been assigned."""
        return self.id is None

    def __getitem__(self, key: Hashable) -> Any:
        return self.fields[key]

    def __contains__(self, key: Hashable) -> bool:
        return key in self.fields

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Flatten to a plain dict keyed by storage names, including ``id``."""
        data = {key_name(k): v for k, v in self.fields.items()}
        data["id"] = self.id
        return data
