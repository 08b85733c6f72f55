# -*- coding: utf-8 -*-
"""
LocForge Central Logging Module

Provides the standard logging configuration for the whole application.
Log files are kept under ~/.locforge/logs/.

Handlers are only configured on the root 'locforge' logger.
Child loggers propagate to root and never add handlers themselves.
"""

import logging
from pathlib import Path
from datetime import datetime

# Log directory
LOG_DIR = Path.home() / ".locforge" / "logs"

# One file per day
LOG_FILE = LOG_DIR / f"locforge_{datetime.now().strftime('%Y%m%d')}.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_root_configured = False
_startup_buffer = []  # LogRecords kept until a UI log panel attaches
MAX_STARTUP_BUFFER = 500


class StartupBufferHandler(logging.Handler):
    """
    Handler that keeps log records in memory until they can be
    handed over to a log panel in the UI.
    """
    def __init__(self):
        super().__init__()
        self.setLevel(logging.DEBUG)

    def emit(self, record):
        if len(_startup_buffer) >= MAX_STARTUP_BUFFER:
            return
        _startup_buffer.append(record)


def _configure_root_logger():
    """Configure the root 'locforge' logger with handlers (once only)."""
    global _root_configured
    if _root_configured:
        return

    root_logger = logging.getLogger("locforge")
    root_logger.setLevel(logging.DEBUG)

    # Keep records away from Python's root logger to avoid duplicates
    root_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root_logger.addHandler(file_handler)
    except OSError as e:
        # Read-only home directories still get console logging
        root_logger.warning(f"File logging disabled: {e}")

    root_logger.addHandler(StartupBufferHandler())

    _root_configured = True


def flush_startup_buffer(target_handler):
    """
    Replay buffered startup records into the given handler.
    Called when a UI log handler is installed.
    """
    if not _startup_buffer:
        return

    for record in _startup_buffer:
        target_handler.emit(record)

    _startup_buffer.clear()


_configure_root_logger()
logger = logging.getLogger("locforge")


def get_logger(name: str) -> logging.Logger:
    """
    Return a child logger for a module.

    Child loggers do NOT add handlers - they propagate to the root
    'locforge' logger.

    Args:
        name: Module name, e.g. "core.compare"

    Returns:
        Logger named locforge.{name}
    """
    _configure_root_logger()
    return logging.getLogger(f"locforge.{name}")
