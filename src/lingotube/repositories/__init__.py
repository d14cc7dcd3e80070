"""Repository layer for data access."""

from .cache_repository import CacheRepository, CacheEntry, MemoryTranscriptStore
from .youtube_repository import YouTubeRepository

__all__ = ["CacheRepository", "CacheEntry", "MemoryTranscriptStore", "YouTubeRepository"]
