"""Match scanning and multi-pattern span resolution.

``scan`` finds the matches of a single pattern; ``resolve`` combines the
matches of every pattern into one ordered list of spans that do not
overlap. Offsets are str indexes, i.e. Unicode code points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from scrubber.core.patterns import CompiledPattern


@dataclass(frozen=True)
class MatchSpan:
    """Half-open range ``[start, end)`` of a literal's text matched by a pattern.

    Attributes:
        start: Offset of the first matched code point.
        end: Offset one past the last matched code point.
        pattern_index: Index of the pattern that produced the match.
    """

    start: int
    end: int
    pattern_index: int

    @property
    def length(self) -> int:
        """Number of code points covered by the span."""
        return self.end - self.start


def scan(pattern: CompiledPattern, text: str) -> list[MatchSpan]:
    """Find the leftmost, non-overlapping matches of one pattern.

    After a match ``[s, e)`` the search resumes at ``e``; after an empty
    match it resumes one code point later, so the scan always terminates.
    Searching from an offset keeps the whole text visible to the regex,
    so anchors and lookbehinds see the real surrounding text.

    Args:
        pattern: The compiled pattern to search with.
        text: Decoded literal text.

    Returns:
        Spans in increasing ``start`` order; empty when nothing matches.
    """
    spans: list[MatchSpan] = []
    search = pattern.regex.search
    text_length = len(text)
    position = 0

    while position <= text_length:
        match = search(text, position)
        if match is None:
            break

        start, end = match.span()
        spans.append(MatchSpan(start, end, pattern.index))
        position = end if end > start else end + 1

    return spans


def _priority(span: MatchSpan) -> tuple[int, int, int]:
    # Earliest start first, then longest, then earliest-declared pattern
    return (span.start, -span.length, span.pattern_index)


def resolve(text: str, patterns: Sequence[CompiledPattern]) -> list[MatchSpan]:
    """Merge the matches of all patterns into non-overlapping spans.

    Every pattern is scanned over the full text. Candidates are ordered by
    start, then by length (longer first), then by pattern index (earlier
    first), and swept greedily: a candidate is kept only if it starts at or
    after the end of the last kept span. Rejected candidates are dropped,
    not retried in a shorter form.

    Empty matches are discarded; they cannot change the text.

    Args:
        text: Decoded literal text.
        patterns: Compiled patterns in configured order.

    Returns:
        Accepted spans, strictly increasing in ``start``, with
        ``spans[i].end <= spans[i + 1].start``.

    Example:
        >>> patterns = compile_patterns(["ab", "abc"])
        >>> resolve("abcd", patterns)
        [MatchSpan(start=0, end=3, pattern_index=1)]
    """
    candidates = [
        span
        for pattern in patterns
        for span in scan(pattern, text)
        if span.length > 0
    ]
    if not candidates:
        return []

    candidates.sort(key=_priority)

    accepted: list[MatchSpan] = []
    last_end = 0
    for span in candidates:
        if span.start >= last_end:
            accepted.append(span)
            last_end = span.end

    return accepted
