"""
==============================================================================
Product Query Tests
==============================================================================

End-to-end tests for the retrieve, parse and match pipeline.

==============================================================================
"""

import pytest

from pricing_catalog.catalog import ProductQuery, SourceSelector
from pricing_catalog.core import NotFoundError, ParseError, RetrievalError, UnknownProductError

from conftest import RDS_URL, FakeSession


def skus(records):
    return {record.sku for record in records}


class TestProductQuery:
    """Tests for ProductQuery."""

    def test_exact_instance_type(self, product_query: ProductQuery):
        records = product_query.query(
            SourceSelector.product_name("AmazonRDS"),
            {"instanceType": "db.m4.large"}
        )
        assert [r.sku for r in records] == ["A1"]

    def test_same_result_from_every_source_mode(self, product_query: ProductQuery, catalog_file):
        filters = {"instanceType": "db.*.large"}
        by_name = product_query.query(SourceSelector.product_name("AmazonRDS"), filters)
        by_url = product_query.query(SourceSelector.url(RDS_URL), filters)
        by_path = product_query.query(SourceSelector.path(str(catalog_file)), filters)
        assert skus(by_name) == skus(by_url) == skus(by_path) == {"A1", "A3"}

    def test_empty_filter_matches_all_parsed_records(self, product_query: ProductQuery):
        records = product_query.query(SourceSelector.url(RDS_URL), {})
        assert skus(records) == {"A1", "A2", "A3", "S1"}

    def test_case_insensitive_location(self, product_query: ProductQuery):
        records = product_query.query(SourceSelector.url(RDS_URL), {"location": "us east*"})
        assert skus(records) == {"A1", "A2", "S1"}

    def test_no_matches_is_empty_list(self, product_query: ProductQuery):
        records = product_query.query(SourceSelector.url(RDS_URL), {"databaseEngine": "Oracle"})
        assert records == []

    def test_idempotent(self, product_query: ProductQuery):
        selector = SourceSelector.product_name("AmazonRDS")
        filters = {"location": "US East*"}
        assert skus(product_query.query(selector, filters)) == skus(product_query.query(selector, filters))

    def test_filter_monotonicity(self, product_query: ProductQuery):
        selector = SourceSelector.url(RDS_URL)
        f1 = {"location": "US East*"}
        f2 = {"location": "US East*", "databaseEngine": "PostgreSQL", "instanceType": "*xlarge"}
        assert skus(product_query.query(selector, f2)) <= skus(product_query.query(selector, f1))

    def test_run_reports_scan_details(self, product_query: ProductQuery):
        result = product_query.run(SourceSelector.url(RDS_URL), {"databaseEngine": "MySQL"})
        assert result.total == 1
        assert result.scanned == 4
        assert len(result.warnings) == 1

    def test_unknown_product(self, product_query: ProductQuery):
        with pytest.raises(UnknownProductError):
            product_query.query(SourceSelector.product_name("NotARealProduct"), {})

    def test_missing_local_file(self, product_query: ProductQuery, session: FakeSession):
        with pytest.raises(NotFoundError):
            product_query.query(SourceSelector.path("/no/such/file.json"), {})
        assert session.calls == []

    def test_retrieval_error_propagates(self, product_query: ProductQuery, session: FakeSession):
        session.routes[RDS_URL] = (403, b"Forbidden")
        with pytest.raises(RetrievalError):
            product_query.query(SourceSelector.url(RDS_URL), {})

    def test_parse_error_propagates(self, product_query: ProductQuery, session: FakeSession):
        session.routes[RDS_URL] = (200, b'{"offerCode": "AmazonRDS"}')
        with pytest.raises(ParseError):
            product_query.query(SourceSelector.url(RDS_URL), {})
