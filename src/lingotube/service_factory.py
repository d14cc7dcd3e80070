"""Factory for creating and configuring services."""

from typing import List, Optional

from .core import config as default_config, Config, LLMManager, CaptionFetcher, create_durable_store
from .repositories import CacheRepository, MemoryTranscriptStore, YouTubeRepository
from .services import (
    TranslationService,
    TranscriptService,
    TranscriptSourceStrategy,
    CaptionSourceStrategy,
    PlaceholderSourceStrategy
)
from .utils.logging import get_logger

logger = get_logger("service_factory")


class ServiceFactory:
    """Factory for creating and managing service dependencies."""

    def __init__(self, app_config: Optional[Config] = None):
        self.config = app_config or default_config
        self._llm_manager = None
        self._caption_fetcher = None
        self._cache_repository = None
        self._youtube_repository = None
        self._translation_service = None
        self._transcript_service = None

        logger.info("Initialized ServiceFactory")

    def get_llm_manager(self) -> LLMManager:
        """Get or create LLM manager."""
        if self._llm_manager is None:
            self._llm_manager = LLMManager()
        return self._llm_manager

    def get_caption_fetcher(self) -> CaptionFetcher:
        """Get or create caption fetcher."""
        if self._caption_fetcher is None:
            self._caption_fetcher = CaptionFetcher(
                timeout=self.config.network.caption_timeout,
                languages=self.config.transcript.caption_languages
            )
        return self._caption_fetcher

    def get_cache_repository(self) -> CacheRepository:
        """Get or create cache repository."""
        if self._cache_repository is None:
            cache_config = self.config.cache
            self._cache_repository = CacheRepository(
                durable_store=create_durable_store(cache_config, self.config.network),
                memory_store=MemoryTranscriptStore(cache_config.memory_max_entries),
                ttl_seconds=cache_config.ttl_seconds,
                key_prefix=cache_config.key_prefix,
                timeout=self.config.network.cache_timeout
            )
        return self._cache_repository

    def get_youtube_repository(self) -> YouTubeRepository:
        """Get or create YouTube repository."""
        if self._youtube_repository is None:
            self._youtube_repository = YouTubeRepository(
                api_key=self.config.api.youtube_api_key,
                timeout=self.config.network.metadata_timeout
            )
        return self._youtube_repository

    def get_translation_service(self) -> TranslationService:
        """Get or create translation service."""
        if self._translation_service is None:
            transcript_config = self.config.transcript
            self._translation_service = TranslationService(
                self.get_llm_manager(),
                batch_size=transcript_config.batch_size,
                max_concurrency=transcript_config.max_concurrent_batches,
                timeout=self.config.network.translation_timeout,
                source_language=transcript_config.source_language
            )
        return self._translation_service

    def get_transcript_sources(self) -> List[TranscriptSourceStrategy]:
        """Build the ordered source strategy list."""
        sources: List[TranscriptSourceStrategy] = [CaptionSourceStrategy(self.get_caption_fetcher())]
        if self.config.transcript.enable_placeholder_fallback:
            sources.append(PlaceholderSourceStrategy())
        return sources

    def get_transcript_service(self) -> TranscriptService:
        """Get or create transcript service."""
        if self._transcript_service is None:
            self._transcript_service = TranscriptService(
                self.get_cache_repository(),
                self.get_translation_service(),
                self.get_transcript_sources(),
                default_target_language=self.config.transcript.default_target_language
            )
        return self._transcript_service

    async def cleanup(self):
        """Cleanup all services."""
        if self._cache_repository:
            await self._cache_repository.cleanup()

        if self._youtube_repository:
            await self._youtube_repository.cleanup()

        logger.info("ServiceFactory cleanup completed")


# Global service factory instance
_service_factory = None


def get_service_factory() -> ServiceFactory:
    """Get the global service factory instance."""
    global _service_factory
    if _service_factory is None:
        _service_factory = ServiceFactory()
    return _service_factory


def get_transcript_service() -> TranscriptService:
    """Get the transcript service."""
    return get_service_factory().get_transcript_service()


async def cleanup_services():
    """Cleanup all services."""
    global _service_factory
    if _service_factory:
        await _service_factory.cleanup()
        _service_factory = None
