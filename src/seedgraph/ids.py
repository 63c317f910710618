"""
Identifier generators.

Used to give records an identity without a real commit ("build as existing")
and by the reference units of work when they assign identifiers on commit.
"""

import threading
import uuid
from collections import defaultdict
from typing import Any, Optional, Protocol

from .record import kind_name
from .utils.settings import get_settings


class IdGenerator(Protocol):
    def generate(self, kind: Any) -> str: ...


class SequentialIdGenerator:
    """Per-kind counters: ``account-000001``, ``account-000002``, ...

    Deterministic within a process, which keeps test assertions readable.
    """

    def __init__(self, width: Optional[int] = None, separator: Optional[str] = None):
        """Initialize the generator.

        Args:
            width: Zero-padded counter width. Defaults to settings.id_counter_width.
            separator: Text between kind and counter. Defaults to settings.id_separator.
        """
        settings = get_settings()
        self._width = width if width is not None else settings.id_counter_width
        self._separator = separator if separator is not None else settings.id_separator
        self._counters: dict[str, int] = defaultdict(int)

    def generate(self, kind: Any) -> str:
        name = kind_name(kind)
        self._counters[name] += 1
        return f"{name}{self._separator}{self._counters[name]:0{self._width}d}"

    def reset(self) -> None:
        """Restart every counter at 1."""
        self._counters.clear()


class UuidIdGenerator:
    """Random identifiers (``account-3f9a0c1b2d4e``), unique across runs."""

    def generate(self, kind: Any) -> str:
        return f"{kind_name(kind)}-{uuid.uuid4().hex[:12]}"


# Global singleton generator
_generator: Optional[SequentialIdGenerator] = None
_generator_lock = threading.Lock()


def get_id_generator() -> SequentialIdGenerator:
    """Get the process-wide sequential generator."""
    global _generator
    with _generator_lock:
        if _generator is None:
            _generator = SequentialIdGenerator()
        return _generator
