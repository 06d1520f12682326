"""
==============================================================================
Offer Index Endpoints
==============================================================================

Endpoints listing the products and offer files in the offer index.

Route functions are synchronous: each one performs a blocking download
and runs in FastAPI's threadpool.

==============================================================================
"""

from fastapi import APIRouter, Depends, Query

from pricing_catalog.schemas import OfferListResponse, OfferUrlListResponse, SuccessResponse
from pricing_catalog.services import PricingService, get_pricing_service


router = APIRouter(prefix="/offers", tags=["Offers"])


class OfferController:
    """Controller for offer index operations."""

    def __init__(self, service: PricingService):
        self._service = service

    def list_services(self) -> OfferListResponse:
        """List product names."""
        services = self._service.list_services()
        return OfferListResponse(total=len(services), services=services)

    def list_urls(self) -> OfferUrlListResponse:
        """List current offer file URLs."""
        urls = self._service.list_catalog_urls()
        return OfferUrlListResponse(total=len(urls), urls=urls)

    def get_index(self, raw: bool) -> SuccessResponse:
        """Get the offer index document or text."""
        return SuccessResponse(data=self._service.fetch_index(as_raw_text=raw))


@router.get("", response_model=OfferListResponse)
def list_services(service: PricingService = Depends(get_pricing_service)):
    """List every product name in the offer index."""
    controller = OfferController(service)
    return controller.list_services()


@router.get("/urls", response_model=OfferUrlListResponse)
def list_catalog_urls(service: PricingService = Depends(get_pricing_service)):
    """List the fully-qualified current offer file URL of every product."""
    controller = OfferController(service)
    return controller.list_urls()


@router.get("/index", response_model=SuccessResponse)
def get_offer_index(
    raw: bool = Query(False, description="Return the index as raw JSON text"),
    service: PricingService = Depends(get_pricing_service)
):
    """Get the offer index."""
    controller = OfferController(service)
    return controller.get_index(raw)
