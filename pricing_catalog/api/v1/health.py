"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

The health check does not contact the pricing endpoint; it reports the
configuration the service would use.

==============================================================================
"""

from fastapi import APIRouter, Depends

from pricing_catalog.config import Settings, get_settings


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def get_health(self) -> dict:
        """Get full health status."""
        return {
            "status": "healthy",
            "components": {
                "api": "healthy",
            },
            "details": {
                "environment": self._settings.app_env,
                "offer_index_url": self._settings.offer_index_url,
                "request_timeout_seconds": self._settings.request_timeout_seconds,
                "local_paths_enabled": self._settings.allow_local_paths
            }
        }


@router.get("")
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Health check endpoint.

    Returns API status and the active pricing endpoint configuration.
    """
    controller = HealthController(settings)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
