"""Health check router."""

from fastapi import APIRouter, Depends

from lingotube import __version__
from lingotube.service_factory import ServiceFactory

from ...api.models.base import HealthResponse
from ...dependencies import get_service_factory

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(service_factory: ServiceFactory = Depends(get_service_factory)):
    """
    Health check endpoint.

    Reports which cache tier and translation mode the service is running with.
    """
    cache_repo = service_factory.get_cache_repository()
    translation_service = service_factory.get_translation_service()
    return HealthResponse(
        status="healthy",
        message="LingoTube API is running",
        version=__version__,
        dependencies={
            "cache": cache_repo.get_cache_stats()["durable_tier"] or "memory",
            "translation": "enabled" if translation_service.is_enabled else "disabled"
        }
    )
