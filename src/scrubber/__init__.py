"""Compile-time string literal scrubber.

Rewrites the string literals of Python and Lua programs, deleting or masking
every substring that matches a configured set of regular expressions.

Example:
    >>> from scrubber import ScrubConfig, ScrubEngine
    >>> engine = ScrubEngine(ScrubConfig(matches=("[\\u4E00-\\u9FFF]",), replace_with="*"))
    >>> engine.rewrite("foo中bar").text
    'foo*bar'
"""

from scrubber.core import (
    ConfigurationError,
    InvalidPatternSyntax,
    ScrubConfig,
    ScrubEngine,
    ScrubError,
)

__version__ = "0.1.0"

__all__ = [
    "ScrubConfig",
    "ScrubEngine",
    "ScrubError",
    "InvalidPatternSyntax",
    "ConfigurationError",
    "__version__",
]
