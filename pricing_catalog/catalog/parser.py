"""
==============================================================================
Catalog Parser Module
==============================================================================

Turns a raw offer file into flat product records.

JSON Structure:
--------------
{
  "offerCode": "AmazonRDS",
  "version": "20240101000000",
  "publicationDate": "2024-01-01T00:00:00Z",
  "products": {
    "A1": {
      "sku": "A1",
      "productFamily": "Database Instance",
      "attributes": {
        "location": "US East (N. Virginia)",
        "instanceType": "db.m4.large",
        ...
      }
    },
    ...
  }
}

Attribute names are defined by each catalog, so attributes are walked
generically. Nested values are flattened:

- objects become dotted keys ("a": {"b": "x"} -> "a.b": "x")
- lists become indexed keys ("a": ["x", "y"] -> "a.0": "x", "a.1": "y")
- booleans become "true" / "false", null becomes ""

When a literal dotted key and a nested path flatten to the same name, the
one appearing later in the object wins. Nesting deeper than
MAX_ATTRIBUTE_DEPTH levels skips the product with a warning.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from pricing_catalog.core.exceptions import ParseError

from .models import Catalog, ProductRecord


# Module logger
logger = logging.getLogger(__name__)


MAX_ATTRIBUTE_DEPTH = 32


def load_json_document(data: Union[bytes, str], source: Optional[str] = None) -> Dict[str, Any]:
    """
    Decode a UTF-8 JSON document whose root must be an object.

    Args:
        data: Raw bytes or already-decoded text
        source: Description of where the document came from (for errors)

    Returns:
        Parsed root object

    Raises:
        ParseError: On invalid UTF-8, invalid JSON or a non-object root
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            # utf-8-sig tolerates a leading byte order mark
            text = bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Document is not valid UTF-8: {e}", source) from e
    else:
        text = data

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}", source) from e
    except RecursionError as e:
        raise ParseError("JSON document is nested too deeply", source) from e

    if not isinstance(document, dict):
        raise ParseError(
            f"Expected a JSON object at document root, got {type(document).__name__}",
            source
        )

    return document


def _scalar_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _metadata_str(value: Any) -> Optional[str]:
    """Catalog metadata as text; absent, empty or structured values give None."""
    if value is None or isinstance(value, (dict, list)):
        return None
    return _scalar_to_str(value) or None


def flatten_attributes(
    attributes: Dict[str, Any],
    prefix: str = "",
    depth: int = 0
) -> Dict[str, str]:
    """
    Flatten an arbitrarily nested attribute object into str -> str.

    Keys are written in document order, so on a name collision such as
    {"a.b": "x", "a": {"b": "y"}} the later value ("y") is kept.

    Args:
        attributes: Attribute object as found in the catalog
        prefix: Key prefix for nested values
        depth: Current nesting level

    Returns:
        Flat attribute mapping

    Raises:
        ValueError: If nesting exceeds MAX_ATTRIBUTE_DEPTH

    Example:
        >>> flatten_attributes({"a": {"b": 1}, "c": [True, None]})
        {'a.b': '1', 'c.0': 'true', 'c.1': ''}
    """
    if depth > MAX_ATTRIBUTE_DEPTH:
        raise ValueError(f"attributes nested deeper than {MAX_ATTRIBUTE_DEPTH} levels")

    flat: Dict[str, str] = {}

    for key, value in attributes.items():
        name = f"{prefix}{key}"

        if isinstance(value, dict):
            flat.update(flatten_attributes(value, prefix=f"{name}.", depth=depth + 1))
        elif isinstance(value, list):
            indexed = {str(i): item for i, item in enumerate(value)}
            flat.update(flatten_attributes(indexed, prefix=f"{name}.", depth=depth + 1))
        else:
            flat[name] = _scalar_to_str(value)

    return flat


class CatalogParser:
    """
    Parser for offer files.

    Malformed product entries are skipped and recorded in ``warnings``;
    the remaining entries are still returned.

    Attributes:
        warnings: Warnings collected by the most recent parse

    Example:
        >>> parser = CatalogParser()
        >>> records = parser.parse(raw_bytes)
        >>> parser.warnings
        []
    """

    PRODUCTS_KEY = "products"

    def __init__(self) -> None:
        self.warnings: List[str] = []

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def parse(self, data: Union[bytes, str], source: Optional[str] = None) -> List[ProductRecord]:
        """
        Parse an offer file into product records.

        Args:
            data: Raw document bytes (or text)
            source: Description of the document origin (for errors)

        Returns:
            List of ProductRecord, in no particular order

        Raises:
            ParseError: If the document or its products collection is malformed
        """
        return self.parse_catalog(data, source).products

    def parse_catalog(self, data: Union[bytes, str], source: Optional[str] = None) -> Catalog:
        """
        Parse an offer file keeping its metadata.

        Args:
            data: Raw document bytes (or text)
            source: Description of the document origin (for errors)

        Returns:
            Catalog with products and warnings

        Raises:
            ParseError: If the document or its products collection is malformed
        """
        document = load_json_document(data, source)

        products = document.get(self.PRODUCTS_KEY)
        if products is None:
            raise ParseError(f"Catalog has no '{self.PRODUCTS_KEY}' collection", source)
        if not isinstance(products, dict):
            raise ParseError(
                f"Catalog '{self.PRODUCTS_KEY}' must be an object, got {type(products).__name__}",
                source
            )

        warnings: List[str] = []
        records: List[ProductRecord] = []

        for key, entry in products.items():
            record = self._parse_entry(key, entry, warnings)
            if record is not None:
                records.append(record)

        for warning in warnings:
            logger.warning(warning)

        self.warnings = warnings

        logger.info(f"Parsed {len(records)} products ({len(warnings)} skipped)")

        return Catalog(
            offer_code=_metadata_str(document.get("offerCode")),
            version=_metadata_str(document.get("version")),
            publication_date=_metadata_str(document.get("publicationDate")),
            products=records,
            warnings=warnings,
        )

    # =========================================================================
    # ENTRY PARSING
    # =========================================================================

    def _parse_entry(self, key: str, entry: Any, warnings: List[str]) -> Optional[ProductRecord]:
        """Build one record, or record a warning and return None."""
        if not isinstance(entry, dict):
            warnings.append(f"Skipping product '{key}': entry is not an object")
            return None

        sku = entry.get("sku") or key
        if not isinstance(sku, str):
            warnings.append(f"Skipping product '{key}': sku is not a string")
            return None
        if not sku.strip():
            warnings.append(f"Skipping product '{key}': sku is empty")
            return None

        attributes = entry.get("attributes", {})
        if attributes is None:
            attributes = {}
        if not isinstance(attributes, dict):
            warnings.append(f"Skipping product '{key}': attributes is not an object")
            return None

        family = entry.get("productFamily")

        try:
            flat = flatten_attributes(attributes)
        except ValueError as e:
            warnings.append(f"Skipping product '{key}': {e}")
            return None

        try:
            return ProductRecord(
                sku=sku,
                product_family=_scalar_to_str(family) if family is not None else None,
                attributes=flat,
            )
        except ValidationError as e:
            warnings.append(
                f"Skipping product '{key}': {e.error_count()} invalid field(s)"
            )
            return None
