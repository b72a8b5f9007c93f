"""
Property query compiler.

A query without ``*`` is a case-insensitive substring test. A query with
``*`` is a wildcard pattern that has to match the whole property name,
e.g. ``"pos*"`` matches ``"posX"`` but not ``"thepos"``.
"""

import re
from typing import Pattern

WILDCARD = "*"


class PropertyMatcher:
    """Compiled property query, built once per search."""

    is_wildcard = False

    def __init__(self, query: str):
        self.query = query

    def matches(self, text: str) -> bool:
        raise NotImplementedError

    def __call__(self, text: str) -> bool:
        return self.matches(text)

    def __repr__(self):
        return f"{type(self).__name__}({self.query!r})"


class LiteralMatcher(PropertyMatcher):
    """Case-insensitive substring containment."""

    def __init__(self, query: str):
        super().__init__(query)
        self._needle = query.lower()

    def matches(self, text: str) -> bool:
        return self._needle in text.lower()


class WildcardMatcher(PropertyMatcher):
    """Case-insensitive full match where ``*`` stands for any run of characters."""

    is_wildcard = True

    def __init__(self, query: str):
        super().__init__(query)
        self.pattern: Pattern[str] = re.compile(wildcard_to_regex(query), re.IGNORECASE | re.DOTALL)

    def matches(self, text: str) -> bool:
        return self.pattern.fullmatch(text) is not None


def wildcard_to_regex(query: str) -> str:
    """Escape every literal run of ``query`` and turn each ``*`` into ``.*``."""
    return ".*".join(re.escape(part) for part in query.split(WILDCARD))


def compile_property_query(query: str) -> PropertyMatcher:
    """Build the matcher for a property query."""
    if query is None:
        raise TypeError("property query must not be None")
    if WILDCARD in query:
        return WildcardMatcher(query)
    return LiteralMatcher(query)
