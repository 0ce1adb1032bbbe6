"""Shared helpers: scrubber logging and source file paths."""

from .logger import (
    LOG_BACKUP_COUNT,
    MAX_LOG_BYTES,
    ROOT_LOGGER_NAME,
    VALID_LOG_LEVELS,
    add_console_handler,
    add_file_handler,
    get_log_directory,
    get_logger,
    set_log_level,
    setup_logger,
)
from .path_utils import (
    LANGUAGE_EXTENSIONS,
    SUPPORTED_LANGUAGES,
    PathLike,
    detect_language,
    ensure_directory,
    get_file_extension,
    normalize_path,
    read_source_file,
)

__all__ = [
    "PathLike",
    "LANGUAGE_EXTENSIONS",
    "SUPPORTED_LANGUAGES",
    "normalize_path",
    "ensure_directory",
    "get_file_extension",
    "read_source_file",
    "detect_language",
    "ROOT_LOGGER_NAME",
    "VALID_LOG_LEVELS",
    "MAX_LOG_BYTES",
    "LOG_BACKUP_COUNT",
    "setup_logger",
    "get_logger",
    "set_log_level",
    "add_file_handler",
    "add_console_handler",
    "get_log_directory",
]
