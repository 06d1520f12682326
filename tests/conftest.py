"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides sample offer documents, a fake HTTP session, catalog pipeline
objects and an API test client.

==============================================================================
"""

import json
from typing import Dict, Generator, List, Optional, Tuple

import pytest
import requests
from fastapi.testclient import TestClient

from pricing_catalog.catalog import (
    CatalogSource,
    HttpClient,
    OfferIndexResolver,
    ProductQuery,
)
from pricing_catalog.config import Settings, get_settings
from pricing_catalog.main import app
from pricing_catalog.services import PricingService, get_pricing_service


BASE_URL = "https://pricing.example.com"
INDEX_URL = f"{BASE_URL}/offers/v1.0/aws/index.json"
RDS_URL = f"{BASE_URL}/offers/v1.0/aws/AmazonRDS/current/index.json"
EC2_URL = f"{BASE_URL}/offers/v1.0/aws/AmazonEC2/current/index.json"


# ============================================================================
# DOCUMENT FIXTURES
# ============================================================================

def make_index_document() -> dict:
    return {
        "formatVersion": "v1.0",
        "publicationDate": "2024-01-01T00:00:00Z",
        "offers": {
            "AmazonRDS": {
                "offerCode": "AmazonRDS",
                "versionIndexUrl": "/offers/v1.0/aws/AmazonRDS/index.json",
                "currentVersionUrl": "/offers/v1.0/aws/AmazonRDS/current/index.json",
                "currentRegionIndexUrl": "/offers/v1.0/aws/AmazonRDS/current/region_index.json",
            },
            "AmazonEC2": {
                "offerCode": "AmazonEC2",
                "currentVersionUrl": "/offers/v1.0/aws/AmazonEC2/current/index.json",
            },
            "AmazonBroken": {
                "offerCode": "AmazonBroken",
            },
        },
    }


def make_catalog_document() -> dict:
    return {
        "formatVersion": "v1.0",
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
                    "databaseEngine": "PostgreSQL",
                },
            },
            "A2": {
                "sku": "A2",
                "productFamily": "Database Instance",
                "attributes": {
                    "location": "US East (N. Virginia)",
                    "instanceType": "db.m4.xlarge",
                    "databaseEngine": "PostgreSQL",
                },
            },
            "A3": {
                "sku": "A3",
                "productFamily": "Database Instance",
                "attributes": {
                    "location": "US West (Oregon)",
                    "instanceType": "db.r5.large",
                    "databaseEngine": "MySQL",
                    "features": {"multiAz": True},
                },
            },
            "S1": {
                "sku": "S1",
                "productFamily": "Database Storage",
                "attributes": {
                    "location": "US East (N. Virginia)",
                    "volumeType": "General Purpose",
                },
            },
            "BAD": "not-an-object",
        },
        "terms": {},
    }


@pytest.fixture
def index_document() -> dict:
    return make_index_document()


@pytest.fixture
def catalog_document() -> dict:
    return make_catalog_document()


@pytest.fixture
def catalog_bytes(catalog_document: dict) -> bytes:
    return json.dumps(catalog_document).encode("utf-8")


@pytest.fixture
def catalog_file(tmp_path, catalog_bytes: bytes):
    """Offer file written to a temporary directory."""
    path = tmp_path / "rds.json"
    path.write_bytes(catalog_bytes)
    return path


# ============================================================================
# FAKE HTTP SESSION
# ============================================================================

class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, url: str, status_code: int, content: bytes):
        self.url = url
        self.status_code = status_code
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(
                f"{self.status_code} Error for url: {self.url}", response=self
            )


class FakeSession:
    """
    Session serving canned responses by URL.

    Unknown URLs answer 404; URLs in ``failures`` raise ConnectionError.
    """

    def __init__(self, routes: Optional[Dict[str, Tuple[int, bytes]]] = None):
        self.routes: Dict[str, Tuple[int, bytes]] = dict(routes or {})
        self.failures: List[str] = []
        self.calls: List[dict] = []
        self.closed = False

    def add_json(self, url: str, document, status: int = 200) -> None:
        self.routes[url] = (status, json.dumps(document).encode("utf-8"))

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if url in self.failures:
            raise requests.exceptions.ConnectionError(f"Connection refused: {url}")
        status, content = self.routes.get(url, (404, b"Not Found"))
        return FakeResponse(url, status, content)

    def close(self) -> None:
        self.closed = True

    def urls(self) -> List[str]:
        return [call["url"] for call in self.calls]


@pytest.fixture
def session(index_document: dict, catalog_document: dict) -> FakeSession:
    """Session serving the sample index and the RDS offer file."""
    fake = FakeSession()
    fake.add_json(INDEX_URL, index_document)
    fake.add_json(RDS_URL, catalog_document)
    return fake


# ============================================================================
# PIPELINE FIXTURES
# ============================================================================

@pytest.fixture
def http_client(session: FakeSession) -> HttpClient:
    return HttpClient(session=session, timeout=5, user_agent="pricing-catalog-tests")


@pytest.fixture
def resolver(http_client: HttpClient) -> OfferIndexResolver:
    return OfferIndexResolver(client=http_client, base_url=BASE_URL)


@pytest.fixture
def source(http_client: HttpClient, resolver: OfferIndexResolver) -> CatalogSource:
    return CatalogSource(client=http_client, resolver=resolver)


@pytest.fixture
def product_query(source: CatalogSource) -> ProductQuery:
    return ProductQuery(source)


@pytest.fixture
def service(http_client: HttpClient, resolver: OfferIndexResolver) -> PricingService:
    return PricingService(client=http_client, resolver=resolver)


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def api_settings() -> Settings:
    return Settings(pricing_base_url=BASE_URL, allow_local_paths=False)


@pytest.fixture
def client(service: PricingService, api_settings: Settings) -> Generator[TestClient, None, None]:
    """Create test client with service and settings overrides."""
    app.dependency_overrides[get_pricing_service] = lambda: service
    app.dependency_overrides[get_settings] = lambda: api_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
