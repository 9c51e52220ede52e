"""Low-level matching primitives shared by :mod:`vstr.regexp`.

Everything here works on a single string at a time; vectorization happens in
:func:`map_strings`.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, NamedTuple, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MatchSpan(NamedTuple):
    """1-based inclusive offsets of one match. Both fields are None when nothing matched."""

    start: int | None
    end: int | None


NO_MATCH = MatchSpan(None, None)


def compile_pattern(pattern: str | re.Pattern | None, case: bool = False) -> re.Pattern | None:
    """Compile a pattern once for a whole call.

    Args:
        pattern: Regular expression string, an already compiled pattern, or None
        case: Whether to enable case-insensitive matching

    Returns:
        Compiled pattern, or None for a missing pattern.

    Raises:
        re.error: If the pattern is not a valid regular expression
        TypeError: If the pattern is not a string, compiled pattern or None
        ValueError: If case-insensitive matching is requested for a compiled pattern
    """
    if pattern is None:
        return None

    if isinstance(pattern, re.Pattern):
        if case:
            raise ValueError("case=True cannot be applied to a pre-compiled pattern")
        return pattern

    if not isinstance(pattern, str):
        raise TypeError(f"pattern must be a single string, got {type(pattern).__name__}")

    flags = re.IGNORECASE if case else 0
    compiled = re.compile(pattern, flags)
    logger.debug("Compiled pattern %r (flags=%d)", pattern, flags)
    return compiled


def _to_span(match: re.Match) -> MatchSpan:
    # zero-length matches end one before they start
    return MatchSpan(match.start() + 1, match.end())


class PatternMatcher:
    """Thin adapter over a compiled ``re`` pattern returning vstr conventions."""

    def __init__(self, compiled: re.Pattern) -> None:
        self.compiled = compiled

    def find_first(self, string: str) -> MatchSpan:
        match = self.compiled.search(string)
        if match is None:
            return NO_MATCH
        return _to_span(match)

    def find_all(self, string: str) -> list[MatchSpan]:
        return [_to_span(match) for match in self.compiled.finditer(string)]

    def groups(self, string: str) -> list[str | None]:
        match = self.compiled.search(string)
        if match is None:
            return []
        return [match.group(0), *match.groups()]

    def substitute(self, string: str, replacement: str, count: int = 0) -> str:
        return self.compiled.sub(replacement, string, count=count)

    def split(self, string: str) -> list[str]:
        """Split on every match. Capturing groups are not kept in the output.

        Zero-width matches at either end of the string do not produce empty
        edge fragments, so any pattern matching only the empty string splits
        into one fragment per character.
        """
        if not string and self.compiled.fullmatch(string) is not None:
            return []

        fragments = []
        position = 0
        for match in self.compiled.finditer(string):
            if match.start() == match.end() and match.start() in (0, len(string)):
                continue
            fragments.append(string[position : match.start()])
            position = match.end()
        fragments.append(string[position:])
        return fragments

    def __repr__(self) -> str:
        return f"PatternMatcher({self.compiled.pattern!r})"


def _chunks(data: Sequence[T], parts: int) -> list[Sequence[T]]:
    size, extra = divmod(len(data), parts)
    chunks = []
    start = 0
    for i in range(parts):
        stop = start + size + (1 if i < extra else 0)
        if stop > start:
            chunks.append(data[start:stop])
        start = stop
    return chunks


def map_strings(func: Callable[[T], object], data: Sequence[T], jobs: int = 1) -> list:
    """Apply ``func`` to every element, keeping input order.

    Args:
        func: Per-element function
        data: Input sequence
        jobs: Number of worker threads. 1 runs inline

    Returns:
        List with one result per input element.
    """
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")

    if jobs == 1 or len(data) < 2:
        return [func(item) for item in data]

    chunks = _chunks(data, min(jobs, len(data)))
    logger.debug("Mapping %d strings over %d chunks", len(data), len(chunks))

    with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
        parts = pool.map(lambda chunk: [func(item) for item in chunk], chunks)
        result = []
        for part in parts:
            result.extend(part)
    return result


__all__ = ["MatchSpan", "NO_MATCH", "PatternMatcher", "compile_pattern", "map_strings"]
