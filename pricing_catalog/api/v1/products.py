"""
==============================================================================
Product Query Endpoints
==============================================================================

Endpoint for finding products whose attributes match a filter.

Request:
-------
POST /api/v1/products/query
{
  "source": {"mode": "product_name", "value": "AmazonRDS"},
  "filters": {"instanceType": "db.m4.*", "location": "us east*"}
}

Path-mode sources read the server's filesystem and are refused unless
ALLOW_LOCAL_PATHS is enabled.

==============================================================================
"""

from fastapi import APIRouter, Depends

from pricing_catalog.catalog.models import SourceMode
from pricing_catalog.config import Settings, get_settings
from pricing_catalog.core import exceptions
from pricing_catalog.schemas import ProductQueryRequest, ProductQueryResponse
from pricing_catalog.services import PricingService, get_pricing_service


router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product query operations."""

    def __init__(self, service: PricingService, settings: Settings):
        self._service = service
        self._settings = settings

    def query(self, request: ProductQueryRequest) -> ProductQueryResponse:
        """Run a product query."""
        if request.source.mode is SourceMode.PATH and not self._settings.allow_local_paths:
            raise exceptions.local_path_disabled()

        result = self._service.run_query(request.source.to_selector(), request.filters)
        return ProductQueryResponse.from_result(result)


@router.post("/query", response_model=ProductQueryResponse)
def query_products(
    request: ProductQueryRequest,
    service: PricingService = Depends(get_pricing_service),
    settings: Settings = Depends(get_settings)
):
    """
    Find products matching an attribute filter.

    An empty result is a successful response with total 0.
    """
    controller = ProductController(service, settings)
    return controller.query(request)
