"""Ordered transcript source strategies consumed by the orchestrator."""

import abc
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.caption_fetcher import CaptionFetcher
from ..core.exceptions import CaptionsUnavailableError
from ..models import CaptionCue, TranscriptSource
from ..utils.logging import get_logger

logger = get_logger("transcript_sources")

# Filler shown when a video has no usable captions
PLACEHOLDER_CUES = (
    CaptionCue(start=0.0, end=5.0, text="This video doesn't have captions available."),
    CaptionCue(start=5.0, end=10.0, text="We would normally use Whisper AI to transcribe it."),
    CaptionCue(start=10.0, end=15.0, text="For now, this is a demo transcript."),
)


@dataclass
class SourceResult:
    """Tagged outcome of one source strategy."""
    label: TranscriptSource
    cues: List[CaptionCue] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.cues)

    @classmethod
    def success(cls, label: TranscriptSource, cues: List[CaptionCue]) -> "SourceResult":
        return cls(label=label, cues=list(cues))

    @classmethod
    def unavailable(cls, label: TranscriptSource, error: str) -> "SourceResult":
        return cls(label=label, error=error)


class TranscriptSourceStrategy(abc.ABC):
    """One way of obtaining caption cues for a video."""

    label: TranscriptSource

    @property
    def name(self) -> str:
        return self.label.value

    @abc.abstractmethod
    async def fetch(self, video_id: str) -> SourceResult:
        """Return a tagged result; implementations do not raise for unavailability."""


class CaptionSourceStrategy(TranscriptSourceStrategy):
    """Platform captions through the caption source adapter."""

    label = TranscriptSource.CAPTIONS

    def __init__(self, caption_fetcher: CaptionFetcher):
        self.caption_fetcher = caption_fetcher

    async def fetch(self, video_id: str) -> SourceResult:
        try:
            cues = await self.caption_fetcher.fetch_captions(video_id)
        except CaptionsUnavailableError as e:
            return SourceResult.unavailable(self.label, e.reason)
        return SourceResult.success(self.label, cues)


class PlaceholderSourceStrategy(TranscriptSourceStrategy):
    """Fixed demo transcript; always available."""

    label = TranscriptSource.GENERATED_FALLBACK

    def __init__(self, cues: Optional[List[CaptionCue]] = None):
        self.cues = list(cues or PLACEHOLDER_CUES)

    async def fetch(self, video_id: str) -> SourceResult:
        logger.info(f"Using placeholder transcript for {video_id}")
        return SourceResult.success(self.label, self.cues)
