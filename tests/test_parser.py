"""
==============================================================================
Catalog Parser Tests
==============================================================================

Tests for offer file parsing and attribute flattening.

==============================================================================
"""

import json

import pytest

from pricing_catalog.catalog import CatalogParser, flatten_attributes
from pricing_catalog.catalog.parser import MAX_ATTRIBUTE_DEPTH
from pricing_catalog.core import ParseError


class TestCatalogParser:
    """Tests for CatalogParser."""

    def test_parses_every_well_formed_product(self, catalog_bytes: bytes):
        parser = CatalogParser()
        records = parser.parse(catalog_bytes)
        assert {r.sku for r in records} == {"A1", "A2", "A3", "S1"}

    def test_record_fields(self, catalog_bytes: bytes):
        records = {r.sku: r for r in CatalogParser().parse(catalog_bytes)}
        a1 = records["A1"]
        assert a1.product_family == "Database Instance"
        assert a1.attributes == {
            "location": "US East (N. Virginia)",
            "instanceType": "db.m4.large",
            "databaseEngine": "PostgreSQL",
        }

    def test_nested_attributes_are_flattened(self, catalog_bytes: bytes):
        records = {r.sku: r for r in CatalogParser().parse(catalog_bytes)}
        assert records["A3"].attributes["features.multiAz"] == "true"
        assert "features" not in records["A3"].attributes

    def test_malformed_entry_is_skipped_with_warning(self, catalog_bytes: bytes):
        parser = CatalogParser()
        records = parser.parse(catalog_bytes)
        assert "BAD" not in {r.sku for r in records}
        assert len(parser.warnings) == 1
        assert "BAD" in parser.warnings[0]

    def test_entry_with_empty_key_and_no_sku_is_skipped(self):
        document = {"products": {
            "": {"attributes": {}},
            "A1": {"sku": "A1", "attributes": {"location": "US East (N. Virginia)"}},
        }}
        parser = CatalogParser()
        records = parser.parse(json.dumps(document))
        assert [r.sku for r in records] == ["A1"]
        assert len(parser.warnings) == 1
        assert "sku is empty" in parser.warnings[0]

    def test_blank_sku_is_skipped(self):
        document = {"products": {
            "K1": {"sku": "   ", "attributes": {}},
            "K2": {"sku": "K2"},
        }}
        parser = CatalogParser()
        assert [r.sku for r in parser.parse(json.dumps(document))] == ["K2"]
        assert "K1" in parser.warnings[0]

    def test_deeply_nested_attributes_skip_only_that_entry(self):
        nested = "x"
        for _ in range(MAX_ATTRIBUTE_DEPTH + 5):
            nested = {"n": nested}
        document = {"products": {
            "DEEP": {"sku": "DEEP", "attributes": {"a": nested}},
            "OK": {"sku": "OK", "attributes": {"a": "b"}},
        }}
        parser = CatalogParser()
        records = parser.parse(json.dumps(document))
        assert [r.sku for r in records] == ["OK"]
        assert "DEEP" in parser.warnings[0]

    def test_non_string_metadata_is_stringified(self):
        document = {
            "offerCode": "AmazonRDS",
            "version": 20240101000000,
            "publicationDate": {"not": "a date"},
            "products": {"A1": {"sku": "A1"}},
        }
        catalog = CatalogParser().parse_catalog(json.dumps(document))
        assert catalog.version == "20240101000000"
        assert catalog.publication_date is None
        assert catalog.skus == ["A1"]

    def test_attributes_not_an_object_is_skipped(self):
        document = {"products": {
            "X1": {"sku": "X1", "attributes": ["a", "b"]},
            "X2": {"sku": "X2", "attributes": {"a": "b"}},
        }}
        parser = CatalogParser()
        records = parser.parse(json.dumps(document))
        assert [r.sku for r in records] == ["X2"]
        assert "X1" in parser.warnings[0]

    def test_missing_sku_falls_back_to_key(self):
        document = {"products": {"K1": {"attributes": {"a": "b"}}}}
        records = CatalogParser().parse(json.dumps(document))
        assert records[0].sku == "K1"

    def test_missing_product_family_and_attributes(self):
        document = {"products": {"K1": {"sku": "K1"}}}
        record = CatalogParser().parse(json.dumps(document))[0]
        assert record.product_family is None
        assert record.attributes == {}

    def test_empty_products_collection(self):
        assert CatalogParser().parse(b'{"products": {}}') == []

    def test_catalog_metadata(self, catalog_bytes: bytes):
        catalog = CatalogParser().parse_catalog(catalog_bytes)
        assert catalog.offer_code == "AmazonRDS"
        assert catalog.version == "20240101000000"
        assert catalog.publication_date == "2024-01-01T00:00:00Z"
        assert set(catalog.skus) == {"A1", "A2", "A3", "S1"}
        assert len(catalog.warnings) == 1

    def test_utf8_with_byte_order_mark(self):
        text = "\ufeff" + '{"products": {"Z1": {"sku": "Z1", "attributes": {"location": "São Paulo"}}}}'
        data = text.encode("utf-8")
        record = CatalogParser().parse(data)[0]
        assert record.attributes["location"] == "São Paulo"

    def test_warnings_reset_between_parses(self, catalog_bytes: bytes):
        parser = CatalogParser()
        parser.parse(catalog_bytes)
        parser.parse(b'{"products": {}}')
        assert parser.warnings == []

    @pytest.mark.parametrize("data", [
        b"not json",
        b"",
        b"[1, 2, 3]",
        b'{"offerCode": "AmazonRDS"}',
        b'{"products": []}',
        b'{"products": "x"}',
        b"\xff\xfe\xfa",
        b"[" * 200000,
        b'{"products": ' + b"[" * 200000,
    ])
    def test_malformed_documents_raise_parse_error(self, data: bytes):
        with pytest.raises(ParseError) as exc_info:
            CatalogParser().parse(data, source="test.json")
        assert exc_info.value.code == "PARSE_FAILED"
        assert exc_info.value.details == {"source": "test.json"}


class TestFlattenAttributes:
    """Tests for attribute flattening."""

    def test_flat_strings_unchanged(self):
        assert flatten_attributes({"a": "x", "b": "y"}) == {"a": "x", "b": "y"}

    def test_nested_objects_use_dotted_keys(self):
        assert flatten_attributes({"a": {"b": {"c": "x"}}}) == {"a.b.c": "x"}

    def test_lists_use_indexed_keys(self):
        assert flatten_attributes({"a": ["x", {"b": "y"}]}) == {"a.0": "x", "a.1.b": "y"}

    def test_scalars_are_stringified(self):
        assert flatten_attributes({"n": 2, "f": 1.5, "t": True, "z": False, "none": None}) == {
            "n": "2",
            "f": "1.5",
            "t": "true",
            "z": "false",
            "none": "",
        }

    def test_empty_nested_object_produces_no_keys(self):
        assert flatten_attributes({"a": {}, "b": "x"}) == {"b": "x"}

    def test_later_key_wins_on_flattened_name_collision(self):
        assert flatten_attributes({"a.b": "x", "a": {"b": "y"}}) == {"a.b": "y"}
        assert flatten_attributes({"a": {"b": "y"}, "a.b": "x"}) == {"a.b": "x"}

    def test_nesting_beyond_limit_raises(self):
        nested = "x"
        for _ in range(MAX_ATTRIBUTE_DEPTH + 2):
            nested = {"n": nested}
        with pytest.raises(ValueError):
            flatten_attributes({"a": nested})
