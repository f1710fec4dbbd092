"""Logging configuration for entry points (CLI, API, sync job).

Library modules only call ``logging.getLogger(__name__)``; the handlers
are attached once, on the ``moviehub`` root logger, by ``setup_logger``.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str = "moviehub",
    level: int | str = logging.INFO,
    log_dir: Path | None = None,
    to_file: bool = True,
) -> logging.Logger:
    """Configure and return a logger with console and optional file handlers.

    Args:
        name: Logger name (e.g., 'moviehub' or 'moviehub.sync').
        level: Logging level, as int or level name.
        log_dir: Directory for log files. If None, uses 'logs/'.
        to_file: Whether to attach the dated file handler.

    Returns:
        Configured logger instance.
    """
    if name in _LOGGERS_CACHE:
        return _LOGGERS_CACHE[name]

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)
    logger.addHandler(_create_console_handler(formatter, level))

    if to_file:
        file_handler = _create_file_handler(name, formatter, level, log_dir)
        if file_handler:
            logger.addHandler(file_handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def _create_console_handler(
    formatter: logging.Formatter,
    level: int,
) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _create_file_handler(
    name: str,
    formatter: logging.Formatter,
    level: int,
    log_dir: Path | None,
) -> logging.FileHandler | None:
    """Create a file handler writing to a per-day log file.

    Returns:
        Configured FileHandler or None when the directory is not writable.
    """
    try:
        log_path = _get_log_file_path(name, log_dir)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None


def _get_log_file_path(name: str, log_dir: Path | None) -> Path:
    """Build log file path with date suffix, e.g. ``moviehub_sync_20240131.log``."""
    if log_dir is None:
        log_dir = Path("logs")

    log_dir.mkdir(parents=True, exist_ok=True)

    safe_name = name.replace(".", "_").replace("/", "_")
    date_suffix = datetime.now().strftime("%Y%m%d")
    return log_dir / f"{safe_name}_{date_suffix}.log"


def configure_from_settings(name: str = "moviehub") -> logging.Logger:
    """Set up logging using the values of ``LoggingSettings``."""
    from moviehub.settings import settings

    return setup_logger(
        name,
        level=settings.logging.level,
        log_dir=settings.logging.log_path,
        to_file=settings.logging.file_enabled,
    )
