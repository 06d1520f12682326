"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes exposing the catalog pipeline to the API and CLI.

    ┌─────────────────┐
    │ API Router / CLI│
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ PricingService  │  ← Validation, listings, queries
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │  Catalog pipe   │  ← Source → Parser → Matcher
    └─────────────────┘

Usage:
------
    from pricing_catalog.services import PricingService

    service = PricingService()
    names = service.list_services()

==============================================================================
"""

from .pricing_service import PricingService, get_pricing_service

__all__ = [
    "PricingService",
    "get_pricing_service",
]
