"""
Logging configuration for seedgraph.

Provides configuration settings and environment variable handling for the logging system.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Environment variable names
DEBUG_ENV = "SEEDGRAPH_DEBUG"
LOG_LEVEL_ENV = "SEEDGRAPH_LOG_LEVEL"
LOG_CONSOLE_ENV = "SEEDGRAPH_LOG_CONSOLE"
LOG_DIR_ENV = "SEEDGRAPH_LOG_DIR"

# Log file names
HUMAN_LOG_FILE = "seedgraph.log"
JSON_LOG_FILE = "seedgraph.json"

# Log level mapping
LOG_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_TRUTHY = ("1", "true", "yes")
_FALSY = ("0", "false", "no")


@dataclass
class LogConfig:
    """Configuration for the logging system.

    Attributes:
        log_dir: Directory where log files are stored. File logging is
            disabled when this is None.
        max_bytes: Size at which each log file rotates
        backup_count: Rotated files kept per log
        default_level: Default logging level
        console_enabled: Whether to output logs to console
    """

    log_dir: Optional[Path] = None
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3
    default_level: int = logging.INFO
    console_enabled: bool = False

    @property
    def file_enabled(self) -> bool:
        """Whether rotating log files should be written."""
        return self.log_dir is not None

    @property
    def human_log_path(self) -> Optional[Path]:
        """Full path to the human-readable log file."""
        return self.log_dir / HUMAN_LOG_FILE if self.log_dir else None

    @property
    def json_log_path(self) -> Optional[Path]:
        """Full path to the JSON log file."""
        return self.log_dir / JSON_LOG_FILE if self.log_dir else None


def get_config() -> LogConfig:
    """Create a LogConfig from environment variables.

    Environment variables:
        SEEDGRAPH_DEBUG: Set to '1', 'true', or 'yes' to enable debug mode
        SEEDGRAPH_LOG_LEVEL: Set log level ('debug', 'info', 'warning', 'error', 'critical')
        SEEDGRAPH_LOG_CONSOLE: Set to '1', 'true', or 'yes' to enable console output
        SEEDGRAPH_LOG_DIR: Directory for rotating log files

    Returns:
        LogConfig with settings from environment, falling back to defaults.
    """
    config = LogConfig()

    debug_mode = os.environ.get(DEBUG_ENV, "").lower() in _TRUTHY
    if debug_mode:
        config.default_level = logging.DEBUG
        config.console_enabled = True

    log_level_str = os.environ.get(LOG_LEVEL_ENV, "").lower()
    if log_level_str in LOG_LEVEL_MAP:
        config.default_level = LOG_LEVEL_MAP[log_level_str]

    console_env = os.environ.get(LOG_CONSOLE_ENV, "").lower()
    if console_env in _TRUTHY:
        config.console_enabled = True
    elif console_env in _FALSY:
        config.console_enabled = False

    log_dir = os.environ.get(LOG_DIR_ENV, "").strip()
    if log_dir:
        config.log_dir = Path(log_dir).expanduser()

    return config

