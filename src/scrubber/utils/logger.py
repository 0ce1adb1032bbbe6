"""
Logging helpers for the literal scrubber.

All scrubber modules log under the ``scrubber`` namespace. The root
``scrubber`` logger gets a console handler on first use; child loggers
such as ``scrubber.core.engine`` propagate to it instead of installing
handlers of their own.

Examples:
    >>> from scrubber.utils.logger import setup_logger, get_logger
    >>> setup_logger("scrubber", level="DEBUG", log_file=Path("logs/scrub.log"))
    >>> logger = get_logger("scrubber.core.engine")
    >>> logger.debug("Rewrote 3 literals")
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .path_utils import ensure_directory

ROOT_LOGGER_NAME = "scrubber"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation limits for file logs
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _level_value(level: str) -> int:
    """Translate a level name into its ``logging`` constant.

    Raises:
        ValueError: If level is not one of VALID_LOG_LEVELS.
    """
    name = level.upper()
    if name not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {VALID_LOG_LEVELS}")
    return getattr(logging, name)


def _is_file_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.handlers.RotatingFileHandler)


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = "INFO",
    log_file: Path | None = None
) -> logging.Logger:
    """
    Configure and return a logger with console and optional file output.

    Calling this repeatedly for the same name does not stack handlers.

    Args:
        name: Logger name, usually ``"scrubber"``.
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file. File output always records DEBUG.

    Returns:
        The configured logger.

    Raises:
        ValueError: If level is not a valid log level.
    """
    level_value = _level_value(level)

    logger = logging.getLogger(name)
    logger.setLevel(level_value)

    has_console_handler = any(
        isinstance(h, logging.StreamHandler) and not _is_file_handler(h)
        for h in logger.handlers
    )
    has_file_handler = any(_is_file_handler(h) for h in logger.handlers)

    if not has_console_handler:
        add_console_handler(logger, level)

    if log_file is not None and not has_file_handler:
        add_file_handler(logger, log_file, level="DEBUG")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Return the named logger, configuring the scrubber root if nothing is set up.

    Args:
        name: Dotted logger name, e.g. ``"scrubber.core.matching"``.

    Returns:
        Logger instance. When neither it nor any ancestor has handlers, the
        ``scrubber`` root logger is configured at INFO and the named logger
        propagates to it.
    """
    logger = logging.getLogger(name)
    if logger.hasHandlers():
        return logger

    if name == ROOT_LOGGER_NAME or not name.startswith(f"{ROOT_LOGGER_NAME}."):
        return setup_logger(name)

    setup_logger(ROOT_LOGGER_NAME)
    return logger


def set_log_level(logger: logging.Logger, level: str) -> None:
    """
    Change a logger's level at runtime.

    Raises:
        ValueError: If level is not valid.
    """
    logger.setLevel(_level_value(level))


def add_file_handler(
    logger: logging.Logger,
    log_file: Path,
    level: str = "DEBUG"
) -> None:
    """
    Attach a rotating file handler (10MB per file, 5 backups).

    The parent directory of ``log_file`` is created when missing.

    Raises:
        ValueError: If level is not valid.
        OSError: If the log directory cannot be created.
    """
    level_value = _level_value(level)
    ensure_directory(log_file.parent)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setLevel(level_value)
    file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)


def add_console_handler(logger: logging.Logger, level: str = "INFO") -> None:
    """
    Attach a stderr handler using the short ``LEVEL: message`` format.

    Raises:
        ValueError: If level is not valid.
    """
    level_value = _level_value(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level_value)
    console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
    logger.addHandler(console_handler)


def get_log_directory() -> Path:
    """Default directory for scrubber log files (not created here)."""
    return Path("logs")
