"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the application.

This package provides:
- The catalog error taxonomy (retrieval, not found, unknown product, parse)
- Consistent JSON error responses for the API
- Exception factory functions for request validation errors

Usage:
------
    from pricing_catalog.core import UnknownProductError, ParseError

    # Or use exception factory functions via module
    from pricing_catalog.core import exceptions
    raise exceptions.invalid_filter("empty key")

==============================================================================
"""

from .exceptions import (
    AppException,
    NotFoundError,
    ParseError,
    RetrievalError,
    UnknownProductError,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "ParseError",
    "RetrievalError",
    "UnknownProductError",
    "register_exception_handlers",
]
