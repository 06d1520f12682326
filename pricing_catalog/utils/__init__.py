"""
==============================================================================
Utilities Package
==============================================================================

Utility classes for the application.

Modules:
--------
- validators: Filter validation

==============================================================================
"""

from .validators import FilterValidator

__all__ = [
    "FilterValidator",
]
