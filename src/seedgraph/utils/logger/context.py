"""
Logging context management for seedgraph.

Provides a context variable that tags every log line emitted during one
commit with the identifier of that batch.
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Optional

batch_id_var: ContextVar[Optional[str]] = ContextVar("batch_id", default=None)


def get_batch_id() -> Optional[str]:
    """Get the current batch ID from context.

    Returns:
        The current batch ID, or None if not set.
    """
    return batch_id_var.get()


def set_batch_id(batch_id: Optional[str]) -> None:
    """Set the current batch ID in context.

    Args:
        batch_id: The batch ID to set, or None to clear.
    """
    batch_id_var.set(batch_id)


def generate_batch_id() -> str:
    """Generate a new unique batch ID (8 hex characters)."""
    return uuid.uuid4().hex[:8]


@contextmanager
def log_context(
    batch_id: Optional[str] = None,
    auto_batch_id: bool = False,
) -> Generator[dict[str, Optional[str]], None, None]:
    """Context manager for setting log context.

    The previous value is restored when the context exits.

    Args:
        batch_id: Batch ID to set. If None and auto_batch_id is True, generates one.
        auto_batch_id: If True, auto-generate batch_id if not provided.

    Yields:
        Dictionary with the active context IDs.

    Example:
        with log_context(auto_batch_id=True) as ctx:
            logger.info(f"Committing batch {ctx['batch_id']}")
    """
    old_batch_id = batch_id_var.get()

    new_batch_id = batch_id
    if new_batch_id is None and auto_batch_id:
        new_batch_id = generate_batch_id()

    if new_batch_id is not None:
        batch_id_var.set(new_batch_id)

    try:
        yield {"batch_id": batch_id_var.get()}
    finally:
        batch_id_var.set(old_batch_id)


class ContextFilter(logging.Filter):
    """Logging filter that adds the batch ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.batch_id = batch_id_var.get()
        return True
