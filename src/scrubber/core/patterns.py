"""Pattern compilation.

Patterns are compiled exactly once, when an engine is built. Compilation
is all-or-nothing: the first invalid pattern aborts with
InvalidPatternSyntax and no partial pattern set is ever returned.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from scrubber.core.errors import InvalidPatternSyntax
from scrubber.utils.logger import get_logger

logger = get_logger("scrubber.core.patterns")


@dataclass(frozen=True)
class CompiledPattern:
    """A configured pattern paired with its compiled matcher.

    Attributes:
        index: Position in the configured ``matches`` list; lower indexes win
            ties between identical spans.
        source: The pattern text as configured.
        regex: The compiled matcher. Case-sensitive, operating on str so
            every code point is one position.
    """

    index: int
    source: str
    regex: re.Pattern[str]


def compile_patterns(raw_patterns: Iterable[str]) -> tuple[CompiledPattern, ...]:
    """Compile configured patterns in order.

    Args:
        raw_patterns: Pattern strings, in priority order.

    Returns:
        Tuple of CompiledPattern, one per input, same order.

    Raises:
        InvalidPatternSyntax: For the first entry that is not a string or
            not a valid regular expression.

    Example:
        >>> patterns = compile_patterns([r"[\\u4E00-\\u9FFF]", r"baidu\\.com"])
        >>> [p.index for p in patterns]
        [0, 1]
    """
    compiled: list[CompiledPattern] = []

    for index, source in enumerate(raw_patterns):
        if not isinstance(source, str):
            raise InvalidPatternSyntax(
                index, repr(source), f"expected a string, got {type(source).__name__}"
            )
        try:
            regex = re.compile(source)
        except re.error as e:
            raise InvalidPatternSyntax(index, source, str(e)) from e

        compiled.append(CompiledPattern(index=index, source=source, regex=regex))
        logger.debug(f"Compiled pattern #{index}: {source!r}")

    return tuple(compiled)
