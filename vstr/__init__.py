"""Vstr - Vectorized regular expression helpers.

Vstr applies Python's ``re`` engine over whole lists of strings at once and
reshapes the engine's results into consistent per-element values. Missing
values (None) propagate through every function instead of raising.

Modules:
    regexp: Regular expression operations (detect, locate, extract, capture, split, replace)
    internal: Matching primitives and the element-wise mapper (for advanced users)

Examples:
    >>> import vstr
    >>> data = ['apple', 'banana', None]
    >>> vstr.regexp.detect(data, r'^a')
    [True, False, None]
    >>> vstr.regexp.replace(data, r'a', 'o')
    ['opple', 'bonono', None]
"""

import vstr.internal as internal
import vstr.regexp as regexp
from vstr.internal import MatchSpan


__all__ = ["regexp", "internal", "MatchSpan"]
