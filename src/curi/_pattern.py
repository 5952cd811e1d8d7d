"""Glob-style patterns over relative paths.

Pattern language:
- a trailing ``*`` matches any suffix, including the empty one
- every other character, ``*`` included, is literal
- leading and trailing slashes of the pattern are ignored
- ``foo`` also matches ``foo/``

Patterns compile to anchored ``google-re2`` expressions at construction
time. Matching is case-sensitive. An empty path never matches a non-empty
pattern.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import re2

from curi._uri import CuriError

MAX_PATTERN_LENGTH = 8192


class PatternTooLongError(CuriError):
    """A pattern exceeds MAX_PATTERN_LENGTH."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


@dataclass(frozen=True, slots=True)
class UrlPattern:
    """A compiled path pattern.

    >>> UrlPattern("foo*").matches("foo/bar")
    True
    >>> UrlPattern("foo").matches("foo/bar")
    False

    Raises:
        PatternTooLongError: If the pattern is longer than MAX_PATTERN_LENGTH.
    """

    pattern: str
    _literal: str = field(init=False, repr=False)
    _wildcard: bool = field(init=False, repr=False)
    _compiled: re2.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.pattern) > MAX_PATTERN_LENGTH:
            raise PatternTooLongError(len(self.pattern), MAX_PATTERN_LENGTH)

        literal = self.pattern.strip("/ ")
        wildcard = literal.endswith("*")
        if wildcard:
            literal = literal[:-1]
        tail = ".*" if wildcard else "/?"
        object.__setattr__(self, "_literal", literal)
        object.__setattr__(self, "_wildcard", wildcard)
        object.__setattr__(self, "_compiled", re2.compile(f"^{re2.escape(literal)}{tail}$"))

    @property
    def is_wildcard(self) -> bool:
        return self._wildcard

    def matches(self, path: str, /) -> bool:
        if not isinstance(path, str):
            return False
        if not path:
            # INV: an empty path only matches an empty pattern.
            return not self._literal and not self._wildcard
        return self._compiled.match(path) is not None


def url_is(pattern: str | UrlPattern, path: str) -> bool:
    """Test a relative path against a pattern."""
    if not isinstance(pattern, UrlPattern):
        pattern = UrlPattern(pattern)
    return pattern.matches(path)
