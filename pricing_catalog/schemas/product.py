"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for offer listings and product queries.

==============================================================================
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from pricing_catalog.catalog.models import ProductRecord, QueryResult, SourceMode, SourceSelector


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class SourceSelectorRequest(BaseModel):
    """Catalog selector in a query request."""
    mode: SourceMode = Field(default=SourceMode.PRODUCT_NAME)
    value: str = Field(..., min_length=1, max_length=2048)

    @field_validator("value")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Selector value cannot be empty")
        return v

    def to_selector(self) -> SourceSelector:
        return SourceSelector(mode=self.mode, value=self.value)


class ProductQueryRequest(BaseModel):
    """Product query: which catalog, and the attribute filter."""
    source: SourceSelectorRequest
    filters: Dict[str, str] = Field(default_factory=dict)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ProductRecordResponse(BaseModel):
    """Single product in a query response."""
    sku: str
    product_family: Optional[str] = None
    attributes: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_record(cls, record: ProductRecord) -> "ProductRecordResponse":
        return cls(
            sku=record.sku,
            product_family=record.product_family,
            attributes=dict(record.attributes)
        )


class ProductQueryResponse(BaseModel):
    """Product query results."""
    success: bool = Field(default=True)
    total: int = Field(ge=0)
    scanned: int = Field(ge=0)
    products: List[ProductRecordResponse]
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: QueryResult) -> "ProductQueryResponse":
        return cls(
            total=result.total,
            scanned=result.scanned,
            products=[ProductRecordResponse.from_record(p) for p in result.products],
            warnings=result.warnings
        )


class OfferListResponse(BaseModel):
    """Product names from the offer index."""
    success: bool = Field(default=True)
    total: int = Field(ge=0)
    services: List[str]


class OfferUrlListResponse(BaseModel):
    """Current offer file URLs from the offer index."""
    success: bool = Field(default=True)
    total: int = Field(ge=0)
    urls: List[str]
