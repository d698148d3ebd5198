"""Logging setup for ledgerbook.

Modules log through ``logging.getLogger(__name__)``; this module only
decides where those records go. Structured fields passed via ``extra=``
(operation, transaction_id, account_id, ...) are appended to each line as
key=value pairs.
"""

__all__ = [
    "KeyValueFormatter",
    "configure_logging",
    "reset_logging",
    "parse_level",
]

import logging
import sys
import threading
from datetime import UTC, datetime
from typing import Any, Optional, Union

_LOGGER_NAME = "ledgerbook"

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


class KeyValueFormatter(logging.Formatter):
    """Formats a record as one line: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec="seconds")
        parts = [timestamp, record.levelname, record.name, record.getMessage()]

        extras = {
            key: val for key, val in vars(record).items() if key not in _STDLIB_KEYS
        }
        if extras:
            parts.append(" ".join(f"{key}={val}" for key, val in sorted(extras.items())))

        line = " | ".join(parts)
        if record.exc_info and record.exc_info[1] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def parse_level(level: Union[int, str, None]) -> int:
    """Translate a level name or number into a logging level.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


_configured = False
_lock = threading.Lock()


def configure_logging(
    level: Union[int, str, None] = logging.WARNING,
    stream: Any = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a handler to the ledgerbook logger hierarchy (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            logging.getLogger(_LOGGER_NAME).setLevel(parse_level(level))
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(parse_level(level))
    root_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(KeyValueFormatter())
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Remove ledgerbook handlers. Used by tests."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
