# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for digestkit.

Every log line is one JSON object with four fixed keys plus whatever the
caller passed through `extra`:

  {"ts": "2026-...", "level": "INFO", "module": "digestkit.checksums", "msg": "verified", ...}

Only the tooling layers log (checksums, self test, config, CLI). The digest
engine and hash_append never do; they sit on the hot path and have nothing
worth reporting per block.

get_logger() is the factory every module uses. It attaches a stderr handler
and optionally a file handler, both using JsonFormatter, and stops
propagation so records are not printed twice by the root logger. Logs go
to stderr because stdout belongs to the CLI output (digest lines, reports)
that callers pipe into other tools.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# LogRecord attributes that are plumbing, not caller context.
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "relativeCreated",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "pathname",
        "filename",
        "module",
        "levelno",
        "levelname",
        "processName",
        "process",
        "threadName",
        "thread",
        "message",
        "msecs",
        "taskName",
    }
)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Fixed fields:
      ts    : ISO 8601 UTC timestamp
      level : log level name
      module: the logger name
      msg   : the formatted message

    Fields passed via `extra=` are merged in. Bytes values (digests, mostly)
    are rendered as hex instead of their repr.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key.startswith("_"):
                continue
            entry[key] = value.hex() if isinstance(value, (bytes, bytearray)) else value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def get_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create (or re-level) a structured JSON logger.

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file. If provided, logs go to both
                  stderr and the file.

    Returns:
        A configured logging.Logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)
    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    # Calling get_logger twice for one name must not stack handlers.
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler(stream=sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger
