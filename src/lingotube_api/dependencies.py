"""FastAPI dependencies for service injection."""

from lingotube.repositories import CacheRepository, YouTubeRepository
from lingotube.service_factory import ServiceFactory, get_service_factory as _get_service_factory
from lingotube.services import TranscriptService


def get_service_factory() -> ServiceFactory:
    """
    Get service factory instance.

    Returns:
        The process-wide ServiceFactory
    """
    return _get_service_factory()


def get_transcript_service() -> TranscriptService:
    """Get the transcript orchestrator."""
    return get_service_factory().get_transcript_service()


def get_cache_repository() -> CacheRepository:
    """Get the transcript cache."""
    return get_service_factory().get_cache_repository()


def get_youtube_repository() -> YouTubeRepository:
    """Get the video metadata repository."""
    return get_service_factory().get_youtube_repository()
