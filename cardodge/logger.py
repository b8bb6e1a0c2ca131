"""Logging for cardodge.

Curses owns the terminal while a round is running, so console records are
buffered and only written to stderr when the buffer fills or the process
exits.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from datetime import datetime

ROOT_NAME = "cardodge"


class HumanFormatter(logging.Formatter):
    """Compact one-line format for terminal display."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        name = record.name.replace(f"{ROOT_NAME}.", "")
        return f"{ts} [{record.levelname[0]}] {name}: {record.getMessage()}"


def setup_logging(level: str = "warning", capacity: int = 200) -> None:
    """Configure the cardodge root logger."""
    root = logging.getLogger(ROOT_NAME)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()
    root.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(HumanFormatter())
    # flushLevel above CRITICAL: nothing reaches stderr until flush/close
    root.addHandler(logging.handlers.MemoryHandler(capacity, flushLevel=logging.CRITICAL + 1, target=console))


def flush_logging() -> None:
    for handler in logging.getLogger(ROOT_NAME).handlers:
        handler.flush()


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the cardodge namespace."""
    return logging.getLogger(f"{ROOT_NAME}.{name}")
