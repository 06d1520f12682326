"""
==============================================================================
Pricing Service Module
==============================================================================

Programmatic surface of the pricing catalog.

This module implements:
- PricingService: offer index listings and product queries
- get_pricing_service: cached default instance

Operations:
----------
- list_services(): product names in the offer index
- list_catalog_urls(): fully-qualified current offer file URLs
- fetch_index(as_raw_text): the index as a document or as text
- query_products(selector, filters): products matching a filter

Each call fetches what it needs; nothing is cached between calls.

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Union

from pricing_catalog.catalog import (
    CatalogSource,
    HttpClient,
    OfferIndexResolver,
    ProductQuery,
    ProductRecord,
    QueryResult,
    SourceSelector,
)
from pricing_catalog.catalog.parser import load_json_document
from pricing_catalog.core import exceptions
from pricing_catalog.utils.validators import FilterValidator


# Module logger
logger = logging.getLogger(__name__)


class PricingService:
    """
    Service for offer listings and product queries.

    Attributes:
        _client: HttpClient shared by the pipeline
        _resolver: OfferIndexResolver for listings
        _query: ProductQuery for product lookups

    Example:
        >>> service = PricingService()
        >>> "AmazonRDS" in service.list_services()
        True
        >>> service.query_products(
        ...     SourceSelector.product_name("AmazonRDS"),
        ...     {"instanceType": "db.m4.large"}
        ... )
        [ProductRecord(sku='...', ...)]
    """

    def __init__(
        self,
        client: Optional[HttpClient] = None,
        resolver: Optional[OfferIndexResolver] = None,
        product_query: Optional[ProductQuery] = None
    ) -> None:
        """
        Initialize the service.

        Args:
            client: Shared HttpClient (created if None)
            resolver: OfferIndexResolver (built on the client if None)
            product_query: ProductQuery (built on the resolver if None)
        """
        self._client = client or HttpClient()
        self._resolver = resolver or OfferIndexResolver(client=self._client)
        self._query = product_query or ProductQuery(
            CatalogSource(client=self._client, resolver=self._resolver)
        )
        self._filter_validator = FilterValidator()

    # =========================================================================
    # OFFER INDEX OPERATIONS
    # =========================================================================

    def list_services(self) -> List[str]:
        """Product names listed in the offer index, sorted."""
        return sorted(self._resolver.product_names())

    def list_catalog_urls(self) -> List[str]:
        """Fully-qualified current offer file URL for every product."""
        return self._resolver.catalog_urls()

    def fetch_index(self, as_raw_text: bool = False) -> Union[Dict[str, Any], str]:
        """
        Fetch the offer index.

        Args:
            as_raw_text: Return the undecoded JSON text instead of a document

        Returns:
            Parsed index document, or its text

        Raises:
            RetrievalError: If the download fails
            ParseError: If the body is not valid JSON
        """
        text = self._resolver.fetch_raw()
        if as_raw_text:
            return text
        return load_json_document(text, self._resolver.index_url)

    # =========================================================================
    # PRODUCT OPERATIONS
    # =========================================================================

    def run_query(
        self,
        selector: SourceSelector,
        filters: Optional[Mapping[str, Any]] = None
    ) -> QueryResult:
        """
        Run a product query keeping scan details.

        Raises:
            AppException: INVALID_FILTER if the filter is malformed
            NotFoundError, UnknownProductError, RetrievalError, ParseError:
                from the underlying pipeline, unchanged
        """
        is_valid, normalized, error = self._filter_validator.validate(filters)
        if not is_valid:
            logger.warning(f"Rejected filter: {error}")
            raise exceptions.invalid_filter(error)

        return self._query.run(selector, normalized)

    def query_products(
        self,
        selector: SourceSelector,
        filters: Optional[Mapping[str, Any]] = None
    ) -> List[ProductRecord]:
        """Products of the selected catalog matching the filter."""
        return self.run_query(selector, filters).products

    def close(self) -> None:
        """Close the HTTP client shared by the resolver and the source."""
        self._client.close()


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_pricing_service() -> PricingService:
    """Get the global PricingService instance."""
    return PricingService()
