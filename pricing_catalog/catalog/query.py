"""
==============================================================================
Product Query Module
==============================================================================

Runs a product query end to end:

    selector -> CatalogSource -> bytes -> CatalogParser -> records
             -> FilterMatcher -> matching records

No matches is an empty result, not an error. Retrieval, parse, not-found
and unknown-product errors propagate unchanged.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from .matcher import FilterMatcher
from .models import ProductRecord, QueryResult, SourceSelector
from .parser import CatalogParser
from .source import CatalogSource


# Module logger
logger = logging.getLogger(__name__)


class ProductQuery:
    """
    Orchestrator for product queries.

    Holds no state between calls, so one instance may serve concurrent
    queries as long as its source's session allows it.

    Example:
        >>> product_query = ProductQuery()
        >>> records = product_query.query(
        ...     SourceSelector.product_name("AmazonRDS"),
        ...     {"instanceType": "db.m4.*", "databaseEngine": "PostgreSQL"}
        ... )
    """

    def __init__(self, source: Optional[CatalogSource] = None) -> None:
        """
        Initialize the query.

        Args:
            source: CatalogSource to read catalogs from (created if None)
        """
        self._source = source or CatalogSource()

    def run(
        self,
        selector: SourceSelector,
        filters: Optional[Mapping[str, str]] = None
    ) -> QueryResult:
        """
        Run a query and keep the parse details.

        Args:
            selector: Catalog to query
            filters: Attribute name to glob pattern mapping

        Returns:
            QueryResult with matches, scanned count and parse warnings
        """
        matcher = FilterMatcher(filters)

        data = self._source.resolve(selector)

        # A fresh parser per call keeps warnings local to this query
        parser = CatalogParser()
        records = parser.parse(data, source=selector.value)

        matched = matcher.match_all(records)

        logger.info(
            f"Query on {selector.mode.value}={selector.value!r} matched "
            f"{len(matched)} of {len(records)} products"
        )

        return QueryResult(products=matched, scanned=len(records), warnings=parser.warnings)

    def query(
        self,
        selector: SourceSelector,
        filters: Optional[Mapping[str, str]] = None
    ) -> List[ProductRecord]:
        """Run a query and return only the matching records."""
        return self.run(selector, filters).products
