"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: Shared response schemas
- Product: Offer listing and product query schemas

==============================================================================
"""

from .common import SuccessResponse
from .product import (
    SourceSelectorRequest,
    ProductQueryRequest,
    ProductRecordResponse,
    ProductQueryResponse,
    OfferListResponse,
    OfferUrlListResponse,
)

__all__ = [
    # Common
    "SuccessResponse",
    # Product
    "SourceSelectorRequest",
    "ProductQueryRequest",
    "ProductRecordResponse",
    "ProductQueryResponse",
    "OfferListResponse",
    "OfferUrlListResponse",
]
