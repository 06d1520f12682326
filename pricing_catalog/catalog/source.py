"""
==============================================================================
Catalog Source Module
==============================================================================

Produces the raw bytes of an offer file from one of three selectors:

- path: a pre-downloaded file on the local filesystem
- url: a fully-qualified offer file URL
- product_name: a product listed in the offer index

Product names are validated against the index before any offer file is
downloaded. All network reads use the configured timeout (default 30s)
and are never retried.

==============================================================================
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from pricing_catalog.core.exceptions import NotFoundError, RetrievalError

from .http import HttpClient
from .index import OfferIndexResolver
from .models import SourceMode, SourceSelector


# Module logger
logger = logging.getLogger(__name__)


class CatalogSource:
    """
    Resolver from a source selector to raw catalog bytes.

    Example:
        >>> source = CatalogSource()
        >>> data = source.resolve(SourceSelector.product_name("AmazonRDS"))
        >>> data = source.resolve_mode(SourceMode.PATH, "offers/rds.json")
    """

    def __init__(
        self,
        client: Optional[HttpClient] = None,
        resolver: Optional[OfferIndexResolver] = None
    ) -> None:
        """
        Initialize the source.

        Args:
            client: HttpClient for catalog downloads (created if None)
            resolver: OfferIndexResolver for product names (shares the
                client if None)
        """
        self._client = client or HttpClient()
        self._resolver = resolver or OfferIndexResolver(client=self._client)

    @property
    def resolver(self) -> OfferIndexResolver:
        return self._resolver

    def resolve(self, selector: SourceSelector) -> bytes:
        """
        Fetch the catalog a selector points at.

        Raises:
            NotFoundError: Path mode and the file does not exist
            UnknownProductError: Product-name mode and the name is not indexed
            RetrievalError: Download or file read failed
            ParseError: Product-name mode and the offer index is malformed
        """
        return self.resolve_mode(selector.mode, selector.value)

    def resolve_mode(self, mode: Union[SourceMode, str], value: str) -> bytes:
        """Fetch the catalog for an explicit mode/value pair."""
        mode = SourceMode(mode)

        if mode is SourceMode.PATH:
            return self.read_path(value)
        if mode is SourceMode.URL:
            return self.fetch_url(value)

        url = self._resolver.resolve_url(value)
        logger.info(f"Resolved product '{value}' to {url}")
        return self.fetch_url(url)

    # =========================================================================
    # READERS
    # =========================================================================

    def read_path(self, path: Union[str, Path]) -> bytes:
        """
        Read a local catalog file.

        Raises:
            NotFoundError: If the path does not exist or is not a file
            RetrievalError: If the file cannot be read
        """
        file_path = Path(path).expanduser()

        if not file_path.is_file():
            logger.error(f"Catalog file not found: {file_path}")
            raise NotFoundError(str(path))

        try:
            data = file_path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise RetrievalError(f"Failed to read {file_path}: {e}") from e

        logger.info(f"Read {len(data)} bytes from {file_path}")
        return data

    def fetch_url(self, url: str) -> bytes:
        """
        Download a catalog.

        Raises:
            RetrievalError: On transport failure or non-success status
        """
        logger.info(f"Downloading catalog from {url}")
        return self._client.get_bytes(url)
