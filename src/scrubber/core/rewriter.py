"""Replacement computation and literal rewriting.

Example:
    >>> patterns = compile_patterns([r"baidu\\.com|google\\.com"])
    >>> rewrite_literal("see baidu.com now", patterns, "").text
    'see  now'
    >>> rewrite_literal("see baidu.com now", patterns, "*").text
    'see ********* now'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from scrubber.core.matching import MatchSpan, resolve
from scrubber.core.patterns import CompiledPattern


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of rewriting one literal's text.

    Attributes:
        text: The new decoded text. For a no-op rewrite this is the very
            object that was passed in.
        spans: The resolved spans that were replaced.
        changed: False when nothing matched; callers should then keep the
            original node as it is.
    """

    text: str
    spans: tuple[MatchSpan, ...] = field(default_factory=tuple)
    changed: bool = False


def compute_replacement(span: MatchSpan, replace_with: str) -> str:
    """Return the text that replaces ``span``.

    An empty ``replace_with`` deletes the match. Otherwise the mask is
    repeated and cut to exactly ``span.length`` code points, e.g. ``"ab"``
    over a 5 code point match gives ``"ababa"``.
    """
    if not replace_with:
        return ""

    length = span.length
    repeats = -(-length // len(replace_with))
    return (replace_with * repeats)[:length]


def rewrite_literal(
    text: str,
    patterns: Sequence[CompiledPattern],
    replace_with: str = "",
) -> RewriteResult:
    """Apply every configured substitution to one literal's decoded text.

    Args:
        text: Decoded literal text; lone surrogates are treated like any
            other code point.
        patterns: Compiled patterns in configured order.
        replace_with: Mask text, empty to delete matches.

    Returns:
        RewriteResult with the new text and the spans replaced.
    """
    spans = resolve(text, patterns)
    if not spans:
        return RewriteResult(text=text)

    pieces: list[str] = []
    cursor = 0
    for span in spans:
        pieces.append(text[cursor:span.start])
        pieces.append(compute_replacement(span, replace_with))
        cursor = span.end
    pieces.append(text[cursor:])

    return RewriteResult(text="".join(pieces), spans=tuple(spans), changed=True)
