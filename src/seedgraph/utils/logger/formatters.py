"""
Log formatters: a pipe-separated line for humans, JSON Lines for tools.

Both append the commit batch id set by log_context(), when there is one.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

HUMAN_FORMAT = (
    "%(asctime)s.%(msecs)03d | %(levelname)-5s | %(name)s | "
    "%(filename)s:%(lineno)d | %(message)s"
)


class HumanFormatter(logging.Formatter):
    """Example:
    2024-01-15 14:23:45.123 | INFO  | seedgraph.persist | coordinator.py:92 | Committed 3 records [batch=1f2e3d4c]
    """

    def __init__(self):
        super().__init__(fmt=HUMAN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        batch_id = getattr(record, "batch_id", None)
        return f"{line} [batch={batch_id}]" if batch_id else line


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: timestamp, level, logger, message, file, line, function, and
    batch_id / exception when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        batch_id = getattr(record, "batch_id", None)
        if batch_id:
            data["batch_id"] = batch_id

        if record.exc_info:
            exc_type, exc, _tb = record.exc_info
            data["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc) if exc else None,
                "traceback": [
                    line for line in self.formatException(record.exc_info).splitlines()
                    if line.strip()
                ],
            }

        return json.dumps(data, ensure_ascii=False, default=str)
