"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- offers: Offer index listings
- products: Product queries

==============================================================================
"""

from . import health, offers, products

__all__ = ["health", "offers", "products"]
