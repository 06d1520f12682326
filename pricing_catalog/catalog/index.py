"""
==============================================================================
Offer Index Module
==============================================================================

Fetches the top-level offer index and maps product names to the URL of
their current offer file.

JSON Structure:
--------------
{
  "formatVersion": "v1.0",
  "publicationDate": "2024-01-01T00:00:00Z",
  "offers": {
    "AmazonRDS": {
      "offerCode": "AmazonRDS",
      "versionIndexUrl": "/offers/v1.0/aws/AmazonRDS/index.json",
      "currentVersionUrl": "/offers/v1.0/aws/AmazonRDS/current/index.json",
      "currentRegionIndexUrl": "/offers/v1.0/aws/AmazonRDS/current/region_index.json"
    },
    ...
  }
}

Product names are the property names of "offers" and are not known in
advance. An entry without a usable currentVersionUrl is skipped with a
warning; the rest of the index is still returned.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from pricing_catalog.config import get_settings
from pricing_catalog.core.exceptions import ParseError, UnknownProductError

from .http import HttpClient
from .models import OfferIndex, OfferIndexEntry
from .parser import load_json_document


# Module logger
logger = logging.getLogger(__name__)


OFFERS_KEY = "offers"


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def parse_offer_index(data: Union[bytes, str], source: Optional[str] = None) -> OfferIndex:
    """
    Parse an offer index document.

    Args:
        data: Raw index bytes (or text)
        source: Description of the document origin (for errors)

    Returns:
        OfferIndex with entries and warnings for skipped products

    Raises:
        ParseError: If the document is not JSON or lacks the offers object
    """
    document = load_json_document(data, source)

    offers = document.get(OFFERS_KEY)
    if offers is None:
        raise ParseError(f"Offer index has no '{OFFERS_KEY}' collection", source)
    if not isinstance(offers, dict):
        raise ParseError(
            f"Offer index '{OFFERS_KEY}' must be an object, got {type(offers).__name__}",
            source
        )

    index = OfferIndex(
        format_version=_optional_str(document.get("formatVersion")),
        publication_date=_optional_str(document.get("publicationDate")),
    )

    for product_name, offer in offers.items():
        if not product_name.strip():
            index.warnings.append("Skipping offer with an empty product name")
            continue

        if not isinstance(offer, dict):
            index.warnings.append(f"Skipping offer '{product_name}': entry is not an object")
            continue

        current_url = offer.get("currentVersionUrl")
        if not isinstance(current_url, str) or not current_url.strip():
            index.warnings.append(f"Skipping offer '{product_name}': missing currentVersionUrl")
            continue

        try:
            index.entries[product_name] = OfferIndexEntry(
                product_name=product_name,
                current_version_url=current_url.strip(),
                offer_code=_optional_str(offer.get("offerCode")),
                version_index_url=_optional_str(offer.get("versionIndexUrl")),
                current_region_index_url=_optional_str(offer.get("currentRegionIndexUrl")),
            )
        except ValidationError as e:
            index.warnings.append(
                f"Skipping offer '{product_name}': {e.error_count()} invalid field(s)"
            )

    for warning in index.warnings:
        logger.warning(warning)

    return index


class OfferIndexResolver:
    """
    Resolver from product name to offer file URL.

    Every fetch performs exactly one read of the index; nothing is cached
    between calls.

    Attributes:
        base_url: Pricing endpoint the index and offer paths are relative to
        index_url: Fully-qualified offer index URL
        warnings: Warnings from the most recent fetch

    Example:
        >>> resolver = OfferIndexResolver()
        >>> resolver.resolve_url("AmazonRDS")
        'https://pricing.us-east-1.amazonaws.com/offers/v1.0/aws/AmazonRDS/current/index.json'
    """

    def __init__(
        self,
        client: Optional[HttpClient] = None,
        base_url: Optional[str] = None,
        index_path: Optional[str] = None
    ) -> None:
        """
        Initialize the resolver.

        Args:
            client: HttpClient to use (a default one is created if None)
            base_url: Pricing base URL (uses settings if None)
            index_path: Offer index path (uses settings if None)
        """
        settings = get_settings()
        self._client = client or HttpClient()
        self.base_url = (base_url or settings.pricing_base_url).rstrip("/")
        self.index_url = f"{self.base_url}{index_path or settings.offer_index_path}"
        self.warnings: List[str] = []

    # =========================================================================
    # FETCHING
    # =========================================================================

    def fetch_raw(self) -> str:
        """
        Download the offer index as text.

        Raises:
            RetrievalError: If the download fails
            ParseError: If the body is not valid UTF-8
        """
        body = self._client.get_bytes(self.index_url)
        try:
            return body.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Offer index is not valid UTF-8: {e}", self.index_url) from e

    def fetch_offer_index(self) -> OfferIndex:
        """
        Download and parse the offer index.

        Raises:
            RetrievalError: If the download fails
            ParseError: If the index is malformed
        """
        logger.info(f"Fetching offer index from {self.index_url}")
        index = parse_offer_index(self._client.get_bytes(self.index_url), self.index_url)
        self.warnings = list(index.warnings)
        logger.info(f"Offer index lists {len(index.entries)} products")
        return index

    def fetch_index(self) -> List[OfferIndexEntry]:
        """
        Download the offer index and return its entries.

        Raises:
            RetrievalError: If the download fails
            ParseError: If the index is malformed
        """
        return list(self.fetch_offer_index().entries.values())

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def qualify(self, path: str) -> str:
        """Join a relative offer path onto the base URL."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def product_names(self) -> List[str]:
        """Names of every product in the index."""
        return self.fetch_offer_index().product_names()

    def catalog_urls(self) -> List[str]:
        """Fully-qualified current offer file URL for every product."""
        return [self.qualify(entry.current_version_url) for entry in self.fetch_index()]

    def resolve_url(self, product_name: str) -> str:
        """
        Validate a product name against the index and return its offer URL.

        Args:
            product_name: Exact product name (e.g. "AmazonRDS")

        Returns:
            Fully-qualified URL of the current offer file

        Raises:
            UnknownProductError: If the name is not in the index
            RetrievalError: If the index download fails
            ParseError: If the index is malformed
        """
        entry = self.fetch_offer_index().get(product_name)
        if entry is None:
            logger.warning(f"Product not found in offer index: {product_name}")
            raise UnknownProductError(product_name)

        return self.qualify(entry.current_version_url)
