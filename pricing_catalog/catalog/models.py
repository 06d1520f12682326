"""
==============================================================================
Catalog Models Module
==============================================================================

Pydantic models for the offer index, parsed product records and the
source selectors used to locate a catalog.

Attribute names and product names are catalog-defined and change over
time, so both are kept as plain string-keyed mappings.

==============================================================================
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SourceMode(str, Enum):
    """How a catalog selector value is interpreted."""
    PATH = "path"
    URL = "url"
    PRODUCT_NAME = "product_name"


class SourceSelector(BaseModel):
    """
    Identifies the catalog a query runs against.

    Example:
        >>> SourceSelector.product_name("AmazonRDS")
        SourceSelector(mode=<SourceMode.PRODUCT_NAME: 'product_name'>, value='AmazonRDS')
    """

    model_config = ConfigDict(frozen=True)

    mode: SourceMode
    value: str = Field(..., min_length=1)

    @classmethod
    def path(cls, value: str) -> "SourceSelector":
        return cls(mode=SourceMode.PATH, value=value)

    @classmethod
    def url(cls, value: str) -> "SourceSelector":
        return cls(mode=SourceMode.URL, value=value)

    @classmethod
    def product_name(cls, value: str) -> "SourceSelector":
        return cls(mode=SourceMode.PRODUCT_NAME, value=value)


class OfferIndexEntry(BaseModel):
    """
    One product listed in the offer index.

    Attributes:
        product_name: Offer name, unique within the index (e.g. "AmazonEC2")
        current_version_url: Path of the current offer file, relative to
            the pricing base URL
        offer_code: Offer code reported by the index, when present
        version_index_url: Path of the version history, when present
        current_region_index_url: Path of the per-region index, when present
    """

    model_config = ConfigDict(frozen=True)

    product_name: str = Field(..., min_length=1)
    current_version_url: str = Field(..., min_length=1)
    offer_code: Optional[str] = None
    version_index_url: Optional[str] = None
    current_region_index_url: Optional[str] = None


class OfferIndex(BaseModel):
    """Parsed offer index with entries keyed by product name."""

    entries: Dict[str, OfferIndexEntry] = Field(default_factory=dict)
    format_version: Optional[str] = None
    publication_date: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)

    def product_names(self) -> List[str]:
        return list(self.entries.keys())

    def get(self, product_name: str) -> Optional[OfferIndexEntry]:
        """Exact-name lookup."""
        return self.entries.get(product_name)


class ProductRecord(BaseModel):
    """
    A single SKU with its flattened attributes.

    Attributes:
        sku: Identifier unique within one catalog
        product_family: Family reported by the catalog (e.g.
            "Database Instance"); some SKUs carry none
        attributes: Flat attribute-name to attribute-value mapping
    """

    model_config = ConfigDict(frozen=True)

    sku: str = Field(..., min_length=1)
    product_family: Optional[str] = None
    attributes: Dict[str, str] = Field(default_factory=dict)


class Catalog(BaseModel):
    """Parsed offer file: metadata plus every readable product record."""

    offer_code: Optional[str] = None
    version: Optional[str] = None
    publication_date: Optional[str] = None
    products: List[ProductRecord] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def skus(self) -> List[str]:
        return [product.sku for product in self.products]


class QueryResult(BaseModel):
    """Outcome of one product query."""

    products: List[ProductRecord] = Field(default_factory=list)
    scanned: int = Field(default=0, ge=0)
    warnings: List[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.products)
