"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

This package provides:
- Environment-based configuration loading
- Type-safe settings with validation
- Singleton pattern for global access

Usage:
------
    from pricing_catalog.config import get_settings, Settings

    # Get the global settings instance
    settings = get_settings()

    # Access configuration values
    print(settings.pricing_base_url)
    print(settings.request_timeout_seconds)

==============================================================================
"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
