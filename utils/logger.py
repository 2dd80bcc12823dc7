"""Logging for workflow-lens.

Nothing is logged unless the CLI runs with --verbose, in which case every
record goes to a timestamped file under ~/.workflow-lens/logs/.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .runtime import get_log_dir

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers that flood DEBUG output
_QUIET_LOGGERS = ("asyncio",)

_log_file_path: Optional[str] = None


def _resolve_level(log_level: Optional[str]) -> int:
    if log_level is None:
        from config import Config

        log_level = Config.LOG_LEVEL
    return getattr(logging, log_level.upper(), logging.DEBUG)


def setup_logger(log_dir: Optional[str] = None, log_level: Optional[str] = None) -> Optional[str]:
    """Send log records to a new file for this run.

    Calling it again after a file handler is attached is a no-op.

    Args:
        log_dir: Directory for log files (default: ~/.workflow-lens/logs/)
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: Config.LOG_LEVEL)

    Returns:
        Path of the log file.
    """
    global _log_file_path

    if _log_file_path is not None:
        return _log_file_path

    level = _resolve_level(log_level)
    directory = Path(log_dir or get_log_dir())
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / f"wflens_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _log_file_path = str(log_file)
    root.info(f"Logging to {_log_file_path} at {logging.getLevelName(level)}")
    return _log_file_path


def get_logger(name: str) -> logging.Logger:
    """Module logger; silent until setup_logger() attaches a handler."""
    return logging.getLogger(name)


def get_log_file_path() -> Optional[str]:
    """Path of the current log file, or None when file logging is off."""
    return _log_file_path
