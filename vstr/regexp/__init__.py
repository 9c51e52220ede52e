import logging
import os
import re
import sys
from typing import Sequence

import vstr
from vstr.internal import NO_MATCH, MatchSpan, PatternMatcher

logger = logging.getLogger(__name__)

PARALLEL_THRESHOLD = 1000

Pattern = str | re.Pattern | None


def __gil_enabled() -> bool:
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    return is_gil_enabled is None or is_gil_enabled()


def __auto_select_jobs(data: Sequence[str | None]) -> int:
    """Pick a worker count for ``data``.

    ``re`` holds the GIL while matching, so threads only pay off on a
    free-threaded interpreter. With the GIL enabled a single worker is used
    unless the caller asks for more through ``jobs``.
    """
    if len(data) < PARALLEL_THRESHOLD or __gil_enabled():
        return 1
    else:
        return os.cpu_count() or 1


def __prepare(
    data: Sequence[str | None], pattern: Pattern, case: bool, jobs: int | None
) -> tuple[PatternMatcher | None, int]:
    if jobs is not None and jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")

    compiled = vstr.internal.compile_pattern(pattern, case)
    if jobs is None:
        jobs = __auto_select_jobs(data)
    logger.debug("Matching %d strings against %r with jobs=%d", len(data), pattern, jobs)

    if compiled is None:
        return None, jobs
    return PatternMatcher(compiled), jobs


def detect(
    data: Sequence[str | None], pattern: Pattern, case: bool = False, jobs: int | None = None
) -> list[bool | None]:
    """Detect the presence or absence of a pattern in each string.

    Args:
        data: List of strings to test. None marks a missing value
        pattern: Regular expression pattern to look for
        case: Whether to enable case-insensitive matching. Defaults to False
        jobs: Number of worker threads to use. Auto-selects if None; more than one
            worker only speeds up matching on a free-threaded interpreter

    Returns:
        List of booleans, True where the pattern matches anywhere in the string.
        None is returned for missing strings, and for every string when the
        pattern itself is missing.

    Examples:
        >>> vstr.regexp.detect(['apple', 'banana', 'pear', 'pinapple'], r'^a')
        [True, False, False, False]

        >>> vstr.regexp.detect(['apple', None], r'p')
        [True, None]
    """
    matcher, jobs = __prepare(data, pattern, case, jobs)
    if matcher is None:
        return [None] * len(data)

    def detect_one(string):
        if string is None:
            return None
        return matcher.find_first(string) != NO_MATCH

    return vstr.internal.map_strings(detect_one, data, jobs)


def locate_first(
    data: Sequence[str | None], pattern: Pattern, case: bool = False, jobs: int | None = None
) -> list[MatchSpan]:
    """Locate the position of the first match in each string.

    Args:
        data: List of strings to search in. None marks a missing value
        pattern: Regular expression pattern to look for
        case: Whether to enable case-insensitive matching. Defaults to False
        jobs: Number of worker threads to use. Auto-selects if None; more than one
            worker only speeds up matching on a free-threaded interpreter

    Returns:
        List of MatchSpan(start, end) with 1-based inclusive offsets.
        MatchSpan(None, None) is returned when there is no match, the string is
        missing or the pattern is missing. A zero-length match at position k
        is reported as MatchSpan(k, k - 1).

    Examples:
        >>> vstr.regexp.locate_first(['apple'], r'p')
        [MatchSpan(start=2, end=2)]

        >>> vstr.regexp.locate_first(['apple', 'kiwi'], r'p+')
        [MatchSpan(start=2, end=3), MatchSpan(start=None, end=None)]
    """
    matcher, jobs = __prepare(data, pattern, case, jobs)
    if matcher is None:
        return [NO_MATCH] * len(data)

    def locate_first_one(string):
        if string is None:
            return NO_MATCH
        return matcher.find_first(string)

    return vstr.internal.map_strings(locate_first_one, data, jobs)


def locate_all(
    data: Sequence[str | None], pattern: Pattern, case: bool = False, jobs: int | None = None
) -> list[list[MatchSpan]]:
    """Locate the positions of all non-overlapping matches in each string.

    Args:
        data: List of strings to search in. None marks a missing value
        pattern: Regular expression pattern to look for
        case: Whether to enable case-insensitive matching. Defaults to False
        jobs: Number of worker threads to use. Auto-selects if None; more than one
            worker only speeds up matching on a free-threaded interpreter

    Returns:
        List of match tables, one per string. Each table lists MatchSpan(start, end)
        left to right with 1-based inclusive offsets. Empty tables are returned
        for strings with no matches, missing strings and a missing pattern.

    Examples:
        >>> vstr.regexp.locate_all(['banana'], r'an')
        [[MatchSpan(start=2, end=3), MatchSpan(start=4, end=5)]]
    """
    matcher, jobs = __prepare(data, pattern, case, jobs)
    if matcher is None:
        return [[] for _ in data]

    def locate_all_one(string):
        if string is None:
            return []
        return matcher.find_all(string)

    return vstr.internal.map_strings(locate_all_one, data, jobs)


def extract(
    data: Sequence[str | None], pattern: Pattern, case: bool = False, jobs: int | None = None
) -> list[list[str]]:
    """Extract every piece of each string that matches the pattern.

    The pieces are the input strings sliced at the spans returned by
    :func:`locate_all`.

    Args:
        data: List of strings to extract from. None marks a missing value
        pattern: Regular expression pattern to look for
        case: Whether to enable case-insensitive matching. Defaults to False
        jobs: Number of worker threads to use. Auto-selects if None; more than one
            worker only speeds up matching on a free-threaded interpreter

    Returns:
        List of lists of matched substrings. Empty lists are returned for strings
        with no matches, missing strings and a missing pattern.

    Examples:
        >>> vstr.regexp.extract(['a1b22c333', 'none'], r'\\d+')
        [['1', '22', '333'], []]
    """
    positions = locate_all(data, pattern, case=case, jobs=jobs)
    return [
        [string[span.start - 1 : span.end] for span in spans] if string is not None else []
        for string, spans in zip(data, positions)
    ]


def capture(
    data: Sequence[str | None], pattern: Pattern, case: bool = False, jobs: int | None = None
) -> list[list[str | None]]:
    """Capture regex groups from the first match in each string.

    Args:
        data: List of strings to capture from. None marks a missing value
        pattern: Regular expression pattern with capture groups
        case: Whether to enable case-insensitive matching. Defaults to False
        jobs: Number of worker threads to use. Auto-selects if None; more than one
            worker only speeds up matching on a free-threaded interpreter

    Returns:
        List of lists containing captured groups for each string.
        Each inner list contains: [full_match, group1, group2, ...].
        Groups that did not take part in the match are None.
        Empty lists are returned for strings with no matches, missing strings
        and a missing pattern.

    Examples:
        >>> vstr.regexp.capture(['name: John'], r'name: (\\w+)')
        [['name: John', 'John']]

        >>> vstr.regexp.capture(['no match'], r'(\\d+)')
        [[]]
    """
    matcher, jobs = __prepare(data, pattern, case, jobs)
    if matcher is None:
        return [[] for _ in data]

    def capture_one(string):
        if string is None:
            return []
        return matcher.groups(string)

    return vstr.internal.map_strings(capture_one, data, jobs)


def replace(
    data: Sequence[str | None],
    pattern: Pattern,
    replacement: str,
    count: int = 0,
    case: bool = False,
    jobs: int | None = None,
) -> list[str | None]:
    """Replace regex matches in each string.

    Args:
        data: List of strings to perform replacements on. None marks a missing value
        pattern: Regular expression pattern to match
        replacement: String to replace matches with. Supports re backreferences
            (\\1, \\g<name>, etc.)
        count: Number of replacements to make per string:
            - 0 (default): Replace all matches
            - N > 0: Replace the first N matches
        case: Whether to enable case-insensitive matching. Defaults to False
        jobs: Number of worker threads to use. Auto-selects if None; more than one
            worker only speeds up matching on a free-threaded interpreter

    Returns:
        List of strings with replacements applied. None is returned for missing
        strings, and for every string when the pattern is missing.

    Examples:
        >>> vstr.regexp.replace(['test hello test'], r'test', 'TEST')
        ['TEST hello TEST']

        >>> vstr.regexp.replace(['test hello test'], r'test', 'TEST', count=1)
        ['TEST hello test']

        >>> vstr.regexp.replace(['name: John'], r'name: (\\w+)', r'Hello \\1')
        ['Hello John']
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    matcher, jobs = __prepare(data, pattern, case, jobs)
    if matcher is None:
        return [None] * len(data)

    def replace_one(string):
        if string is None:
            return None
        return matcher.substitute(string, replacement, count)

    return vstr.internal.map_strings(replace_one, data, jobs)


def split(
    data: Sequence[str | None], pattern: Pattern, case: bool = False, jobs: int | None = None
) -> list[list[str]]:
    """Split each string using a regex pattern as delimiter.

    Args:
        data: List of strings to split. None marks a missing value
        pattern: Regular expression pattern to use as delimiter. An empty pattern
            splits into individual characters. A missing pattern (None) returns
            every string unchanged as a single fragment
        case: Whether to enable case-insensitive matching. Defaults to False
        jobs: Number of worker threads to use. Auto-selects if None; more than one
            worker only speeds up matching on a free-threaded interpreter

    Returns:
        List of lists containing the split parts for each string.
        Empty lists are returned for missing strings.

    Examples:
        >>> vstr.regexp.split(['a,b,,c'], r',')
        [['a', 'b', '', 'c']]

        >>> vstr.regexp.split(['abc'], r'')
        [['a', 'b', 'c']]

        >>> vstr.regexp.split(['a,b'], None)
        [['a,b']]
    """
    matcher, jobs = __prepare(data, pattern, case, jobs)
    if matcher is None:
        return [[string] if string is not None else [] for string in data]

    def split_one(string):
        if string is None:
            return []
        return matcher.split(string)

    return vstr.internal.map_strings(split_one, data, jobs)


__all__ = ["detect", "locate_first", "locate_all", "extract", "capture", "replace", "split", "PARALLEL_THRESHOLD"]
