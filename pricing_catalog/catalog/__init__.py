"""
==============================================================================
Catalog Package - Product Lookup Pipeline
==============================================================================

Retrieval, parsing and attribute matching for vendor pricing catalogs.

Classes:
--------
- OfferIndexResolver: Product name to offer file URL
- CatalogSource: Path / URL / product name to raw bytes
- CatalogParser: Raw offer file to flat ProductRecords
- FilterMatcher: Wildcard attribute filters
- ProductQuery: The pipeline wired together

==============================================================================
"""

from .models import (
    Catalog,
    OfferIndex,
    OfferIndexEntry,
    ProductRecord,
    QueryResult,
    SourceMode,
    SourceSelector,
)
from .http import HttpClient
from .index import OfferIndexResolver, parse_offer_index
from .parser import CatalogParser, flatten_attributes
from .matcher import FilterMatcher, glob_match, matches
from .source import CatalogSource
from .query import ProductQuery

__all__ = [
    "Catalog",
    "OfferIndex",
    "OfferIndexEntry",
    "ProductRecord",
    "QueryResult",
    "SourceMode",
    "SourceSelector",
    "HttpClient",
    "OfferIndexResolver",
    "parse_offer_index",
    "CatalogParser",
    "flatten_attributes",
    "FilterMatcher",
    "glob_match",
    "matches",
    "CatalogSource",
    "ProductQuery",
]
