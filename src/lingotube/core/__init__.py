"""Core modules for the transcript pipeline."""

from .config import config, Config
from .exceptions import (
    LingoTubeError,
    InvalidVideoIdError,
    CaptionsUnavailableError,
    TranslationError,
    CacheStoreError,
    TranscriptUnavailableError,
    MetadataUnavailableError,
    VideoNotFoundError
)
from .cache_backends import DurableStore, FileStore, UpstashRedisStore, create_durable_store
from .caption_fetcher import CaptionFetcher, CaptionProvider, RawCaptionCue, YouTubeCaptionProvider, normalize_cues
from .llm_manager import LLMManager, LLMConfig

__all__ = [
    'config',
    'Config',
    'LingoTubeError',
    'InvalidVideoIdError',
    'CaptionsUnavailableError',
    'TranslationError',
    'CacheStoreError',
    'TranscriptUnavailableError',
    'MetadataUnavailableError',
    'VideoNotFoundError',
    'DurableStore',
    'FileStore',
    'UpstashRedisStore',
    'create_durable_store',
    'CaptionFetcher',
    'CaptionProvider',
    'RawCaptionCue',
    'YouTubeCaptionProvider',
    'normalize_cues',
    'LLMManager',
    'LLMConfig'
]
