"""Service layer for business logic."""

from .translation_service import TranslationService, parse_numbered_response
from .transcript_sources import (
    SourceResult,
    TranscriptSourceStrategy,
    CaptionSourceStrategy,
    PlaceholderSourceStrategy,
    PLACEHOLDER_CUES
)
from .transcript_service import TranscriptService

__all__ = [
    "TranslationService",
    "parse_numbered_response",
    "SourceResult",
    "TranscriptSourceStrategy",
    "CaptionSourceStrategy",
    "PlaceholderSourceStrategy",
    "PLACEHOLDER_CUES",
    "TranscriptService"
]
