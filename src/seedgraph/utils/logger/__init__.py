"""
Structured logging for seedgraph.

This module provides:
- Human-readable and JSON log formats
- Optional log file rotation
- Batch context tracking for commits

Simple API:
    from seedgraph.utils.logger import debug, info, warn, error

    debug("Debug message")
    info("Info message")

Enhanced API:
    from seedgraph.utils.logger import get_logger, setup_logging, log_context

    # Get a component-specific logger
    logger = get_logger("persist")
    logger.info("Commit started")

    # Tag log lines with a batch ID
    with log_context(auto_batch_id=True):
        logger.info("Preparing builders")
"""

import logging
from typing import Any, Optional

from .config import LogConfig, get_config
from .context import (
    ContextFilter,
    log_context,
    get_batch_id,
    set_batch_id,
    generate_batch_id,
)
from .handlers import setup_handlers

# Root logger name for the package
ROOT_LOGGER_NAME = "seedgraph"

# Module-level state
_initialized = False
_root_logger: Optional[logging.Logger] = None


def setup_logging(config: Optional[LogConfig] = None) -> logging.Logger:
    """Initialize the logging system.

    Called automatically on the first get_logger() call; call it again to
    apply a different configuration.

    Args:
        config: Optional LogConfig. If not provided, reads from environment.

    Returns:
        The configured root logger.

    Example:
        setup_logging(LogConfig(console_enabled=True))
    """
    global _initialized, _root_logger

    if config is None:
        config = get_config()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    setup_handlers(logger, config)

    # Filters are not inherited, so attach once to the root logger and each handler
    for existing in list(logger.filters):
        if isinstance(existing, ContextFilter):
            logger.removeFilter(existing)
    context_filter = ContextFilter()
    logger.addFilter(context_filter)
    for handler in logger.handlers:
        handler.addFilter(context_filter)

    logger.propagate = False

    _initialized = True
    _root_logger = logger

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    If name is provided, returns a child logger of the root logger.
    The logging system is initialized on first use.

    Args:
        name: Optional component name for the logger.

    Returns:
        A configured Logger instance.

    Example:
        logger = get_logger("builder")
        logger.debug("Built record")  # Logs as "seedgraph.builder"
    """
    if not _initialized:
        setup_logging()

    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return _root_logger or logging.getLogger(ROOT_LOGGER_NAME)


def debug(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log a debug message."""
    get_logger().debug(msg, *args, **kwargs)


def info(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log an info message."""
    get_logger().info(msg, *args, **kwargs)


def warn(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log a warning message."""
    get_logger().warning(msg, *args, **kwargs)


def warning(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log a warning message (alias for warn)."""
    get_logger().warning(msg, *args, **kwargs)


def error(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log an error message."""
    get_logger().error(msg, *args, **kwargs)


def critical(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log a critical message."""
    get_logger().critical(msg, *args, **kwargs)


def exception(msg: str, *args: Any, **kwargs: Any) -> None:
    """Log an error message with exception info.

    This should be called from an exception handler.
    """
    get_logger().exception(msg, *args, **kwargs)


class _LazyLogger:
    """Lazy logger proxy that initializes on first use."""

    _instance: Optional[logging.Logger] = None

    def __getattr__(self, name: str) -> Any:
        if self._instance is None:
            self._instance = get_logger()
        return getattr(self._instance, name)


log: Any = _LazyLogger()


__all__ = [
    "debug",
    "info",
    "warn",
    "warning",
    "error",
    "critical",
    "exception",
    "log",
    "setup_logging",
    "get_logger",
    "LogConfig",
    "get_config",
    "log_context",
    "get_batch_id",
    "set_batch_id",
    "generate_batch_id",
    "ContextFilter",
]
