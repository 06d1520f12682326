"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for caller-supplied query input.

This module implements:
- FilterValidator: Validates attribute filters

Validation Rules for Filters:
----------------------------
- Keys: non-empty after stripping, at most 200 characters
- Patterns: strings (numbers are converted), at most 500 characters
- An empty filter is valid and matches every product

==============================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple


class FilterValidator:
    """
    Validator for attribute filters.

    Example:
        >>> validator = FilterValidator()
        >>> is_valid, normalized, error = validator.validate({" instanceType ": "db.*"})
        >>> print(normalized)
        {'instanceType': 'db.*'}
    """

    MAX_KEY_LENGTH = 200
    MAX_PATTERN_LENGTH = 500

    def validate(
        self,
        filters: Optional[Mapping[str, Any]]
    ) -> Tuple[bool, Optional[Dict[str, str]], Optional[str]]:
        """
        Validate and normalize a filter.

        Args:
            filters: Raw filter mapping

        Returns:
            Tuple of (is_valid, normalized_filter, error_message)
        """
        if filters is None:
            return True, {}, None

        if not isinstance(filters, Mapping):
            return False, None, "Filter must be a mapping of attribute name to pattern"

        normalized: Dict[str, str] = {}

        for raw_key, raw_pattern in filters.items():
            if not isinstance(raw_key, str):
                return False, None, f"Filter key must be a string: {raw_key!r}"

            key = raw_key.strip()
            if not key:
                return False, None, "Filter key cannot be empty"

            if len(key) > self.MAX_KEY_LENGTH:
                return False, None, f"Filter key must be at most {self.MAX_KEY_LENGTH} characters"

            if isinstance(raw_pattern, bool) or raw_pattern is None:
                return False, None, f"Pattern for '{key}' must be a string"
            if isinstance(raw_pattern, (int, float)):
                raw_pattern = str(raw_pattern)
            if not isinstance(raw_pattern, str):
                return False, None, f"Pattern for '{key}' must be a string"

            if len(raw_pattern) > self.MAX_PATTERN_LENGTH:
                return False, None, f"Pattern for '{key}' must be at most {self.MAX_PATTERN_LENGTH} characters"

            if key in normalized:
                return False, None, f"Duplicate filter key: {key}"

            normalized[key] = raw_pattern

        return True, normalized, None

    def is_valid(self, filters: Optional[Mapping[str, Any]]) -> bool:
        """Quick validation check."""
        is_valid, _, _ = self.validate(filters)
        return is_valid

