"""
==============================================================================
Filter Matcher Module
==============================================================================

Evaluates attribute filters against product records.

A filter maps attribute names to glob patterns. A record matches when
every filter key is present in its attributes and the value matches the
pattern. An empty filter matches every record.

Glob Dialect:
------------
- ``*`` matches zero or more characters
- ``?`` matches exactly one character
- everything else is literal, including ``[``, ``]`` and regex syntax
- ``\\`` makes the next character literal (``\\*``, ``\\?``, ``\\\\``);
  a trailing lone backslash is itself literal
- matching covers the whole value and ignores case

==============================================================================
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Pattern

from .models import ProductRecord


@lru_cache(maxsize=1024)
def compile_glob(pattern: str) -> Pattern[str]:
    """
    Compile a glob pattern to a case-insensitive regular expression.

    Example:
        >>> bool(compile_glob("db.*.large").fullmatch("DB.M4.LARGE"))
        True
    """
    parts: List[str] = []
    i = 0

    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
        i += 1

    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def glob_match(value: str, pattern: str) -> bool:
    """Check a single value against a glob pattern."""
    return compile_glob(pattern).fullmatch(value) is not None


class FilterMatcher:
    """
    Matcher for one attribute filter.

    Patterns are compiled once per matcher so the same filter can be run
    against every record of a large catalog.

    Example:
        >>> matcher = FilterMatcher({"instanceType": "db.*.large"})
        >>> matcher.matches(record)
        True
        >>> matcher.match_all(records)
        [...]
    """

    def __init__(self, filters: Optional[Mapping[str, str]] = None) -> None:
        """
        Initialize the matcher.

        Args:
            filters: Attribute name to glob pattern mapping
        """
        self._filters: Dict[str, str] = {
            key: str(pattern) for key, pattern in (filters or {}).items()
        }
        self._compiled: Dict[str, Pattern[str]] = {
            key: compile_glob(pattern) for key, pattern in self._filters.items()
        }

    @property
    def filters(self) -> Dict[str, str]:
        return dict(self._filters)

    def matches(self, record: ProductRecord) -> bool:
        """
        Check one record, stopping at the first failing key.

        Returns:
            True if every filter key is present and matches
        """
        attributes = record.attributes

        for key, regex in self._compiled.items():
            value = attributes.get(key)
            if value is None or regex.fullmatch(value) is None:
                return False

        return True

    def match_all(self, records: Iterable[ProductRecord]) -> List[ProductRecord]:
        """Return the records that match, preserving input order."""
        return [record for record in records if self.matches(record)]


def matches(record: ProductRecord, filters: Optional[Mapping[str, str]] = None) -> bool:
    """Check a record against a filter without keeping a matcher."""
    return FilterMatcher(filters).matches(record)
