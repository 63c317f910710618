"""
Handler wiring for the seedgraph logger.

Files (human + JSON, rotating) are written only when a log directory is
configured; the console gets warnings, or everything in debug mode. With
neither, a NullHandler keeps the library quiet.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import LogConfig, get_config
from .formatters import HumanFormatter, JsonFormatter


def create_rotating_handler(
    path: Path, formatter: logging.Formatter, config: LogConfig
) -> RotatingFileHandler:
    """Rotating file handler that accepts every level."""
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def create_console_handler(config: LogConfig) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    debug_mode = config.default_level == logging.DEBUG
    handler.setLevel(logging.DEBUG if debug_mode else logging.WARNING)
    handler.setFormatter(HumanFormatter())
    return handler


def setup_handlers(logger: logging.Logger, config: Optional[LogConfig] = None) -> None:
    """Replace the handlers of ``logger`` according to ``config``.

    Args:
        logger: The logger to configure.
        config: Optional LogConfig. If not provided, uses get_config().
    """
    if config is None:
        config = get_config()

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    if config.file_enabled:
        logger.addHandler(
            create_rotating_handler(config.human_log_path, HumanFormatter(), config)
        )
        logger.addHandler(
            create_rotating_handler(config.json_log_path, JsonFormatter(), config)
        )

    if config.console_enabled:
        logger.addHandler(create_console_handler(config))

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.setLevel(config.default_level)
