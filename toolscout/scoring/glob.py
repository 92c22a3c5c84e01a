"""Glob pattern matching for detection file patterns.

``*`` matches within one path segment, ``**`` matches across segments
(``**/`` also matches zero segments), ``?`` matches one character other than
``/``. Matching is case-insensitive and anchored at both ends.
"""

from __future__ import annotations

import re
from functools import lru_cache


@lru_cache(maxsize=512)
def compile_glob(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif char == "*":
            parts.append("[^/]*")
            i += 1
        elif char == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(char))
            i += 1
    return re.compile("^" + "".join(parts) + "$", re.IGNORECASE)


def match_glob(filepath: str, pattern: str) -> bool:
    """Return True if ``filepath`` matches ``pattern``.

    >>> match_glob("src/index.ts", "src/*.ts")
    True
    >>> match_glob("src/utils/helper.ts", "src/**/*.ts")
    True
    >>> match_glob("test.js", "*.ts")
    False
    """
    return compile_glob(pattern).match(filepath) is not None
