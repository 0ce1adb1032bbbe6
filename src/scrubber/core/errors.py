"""Exceptions raised while building a scrub engine.

Only configuration and pattern compilation can fail. Once a ScrubEngine
exists, rewriting literals never raises.
"""

from __future__ import annotations


class ScrubError(Exception):
    """Base class for all scrubber errors."""


class InvalidPatternSyntax(ScrubError):
    """Exception raised when a configured pattern is not a valid regex.

    Attributes:
        index: Position of the offending entry in ``matches``
        pattern: The raw pattern text (repr of the value if not a string)
        message: Compiler message describing the problem

    Example:
        >>> raise InvalidPatternSyntax(1, "[a-", "unterminated character set")
    """

    def __init__(self, index: int, pattern: str, message: str):
        """Initialize the exception with the failing pattern.

        Args:
            index: Index of the pattern in the configured order
            pattern: The pattern that failed to compile
            message: Reason reported by the regex compiler
        """
        self.index = index
        self.pattern = pattern
        self.message = message
        super().__init__(f"Invalid pattern #{index} {pattern!r}: {message}")


class ConfigurationError(ScrubError, ValueError):
    """Exception raised when a scrub configuration is malformed.

    Attributes:
        key: Configuration key at fault, or None for document-level problems
        message: Detailed error message
    """

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        self.message = message
        prefix = f"Invalid '{key}': " if key else ""
        super().__init__(f"{prefix}{message}")
