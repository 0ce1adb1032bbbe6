"""
Path helpers for locating and classifying source files.

Examples:
    >>> from scrubber.utils.path_utils import normalize_path, detect_language
    >>> path = normalize_path("~/project/main.lua")
    >>> detect_language(path)
    'lua'
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

# Type alias for path-like objects
PathLike = Union[str, Path]

# File extension (lowercase, with dot) -> host language
LANGUAGE_EXTENSIONS: dict[str, str] = {
    ".py": "python",
    ".pyw": "python",
    ".lua": "lua",
    ".luau": "lua",
}

SUPPORTED_LANGUAGES: tuple[str, ...] = ("python", "lua")


def normalize_path(path: PathLike) -> Path:
    """
    Convert a string or Path into an absolute, user-expanded Path.

    Args:
        path: A file system path as string or Path object.

    Returns:
        Normalized absolute Path object.

    Raises:
        ValueError: If path is empty or None.

    Examples:
        >>> normalize_path("~/project/main.py")
        PosixPath('/home/user/project/main.py')
    """
    if path is None or (isinstance(path, str) and not path.strip()):
        raise ValueError("Path cannot be None or empty")

    return Path(path).expanduser().resolve()


def ensure_directory(path: Path) -> Path:
    """
    Create directory (and parents) if it doesn't exist, return it.

    Raises:
        OSError: If directory creation fails.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_file_extension(path: PathLike) -> str:
    """
    Return the lowercase extension of ``path`` including the dot.

    Examples:
        >>> get_file_extension("Main.LUA")
        '.lua'
        >>> get_file_extension("Makefile")
        ''
    """
    return Path(path).suffix.lower()


def read_source_file(path: PathLike, max_size_mb: int) -> str:
    """
    Read a UTF-8 source file after existence, access and size checks.

    Args:
        path: File to read.
        max_size_mb: Largest accepted file size in megabytes.

    Returns:
        The file contents.

    Raises:
        FileNotFoundError: If the file does not exist.
        PermissionError: If the file is not readable.
        ValueError: If the file is too large or not valid UTF-8.
        OSError: For other I/O failures.
    """
    path_obj = Path(path)

    if not path_obj.is_file():
        raise FileNotFoundError(f"File not found: {path_obj}")

    if not os.access(path_obj, os.R_OK):
        raise PermissionError(f"File is not readable: {path_obj}")

    file_size = path_obj.stat().st_size
    if file_size > max_size_mb * 1024 * 1024:
        raise ValueError(
            f"File exceeds maximum size of {max_size_mb}MB: "
            f"{path_obj} ({file_size / (1024 * 1024):.2f}MB)"
        )

    try:
        return path_obj.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Encoding error reading file {path_obj}: {e}") from e


def detect_language(path: PathLike) -> str | None:
    """
    Map a file name to the host language its literals are parsed with.

    Returns:
        ``"python"``, ``"lua"`` or None for unsupported extensions.
    """
    return LANGUAGE_EXTENSIONS.get(get_file_extension(path))
