"""
Caption source adapter.

Fetches raw caption cues for a video from YouTube and normalizes them into
``CaptionCue`` objects: seconds rounded to one decimal place, single-line
text, ascending and non-overlapping. Any upstream problem is reported as
``CaptionsUnavailableError``; the adapter never returns partial data and
never retries.
"""

import abc
import asyncio
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from youtube_transcript_api import YouTubeTranscriptApi

from ..models import CaptionCue
from ..utils.logging import get_logger
from ..utils.text_utils import clean_caption_text
from .exceptions import CaptionsUnavailableError

logger = get_logger("caption_fetcher")

# Shortest cue kept after rounding, in seconds
MIN_CUE_SECONDS = 0.1


@dataclass(frozen=True)
class RawCaptionCue:
    """A cue exactly as the captions provider reports it."""
    offset_ms: float
    duration_ms: float
    text: str


class CaptionProvider(abc.ABC):
    """Blocking upstream captions provider."""

    @abc.abstractmethod
    def fetch_raw(self, video_id: str) -> List[RawCaptionCue]:
        """Return the provider's cues or raise on any failure."""


class YouTubeCaptionProvider(CaptionProvider):
    """Caption tracks via youtube-transcript-api."""

    def __init__(self, languages: Optional[Sequence[str]] = None):
        self.languages = list(languages or ["en"])
        self._api = YouTubeTranscriptApi()

    def fetch_raw(self, video_id: str) -> List[RawCaptionCue]:
        fetched = self._api.fetch(video_id, languages=self.languages)
        # The library reports seconds; the adapter contract is milliseconds
        return [
            RawCaptionCue(
                offset_ms=snippet.start * 1000,
                duration_ms=snippet.duration * 1000,
                text=snippet.text
            )
            for snippet in fetched
        ]


def _round_tenth(seconds: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(seconds * 10 + 0.5) / 10


def normalize_cues(raw_cues: Iterable[RawCaptionCue]) -> List[CaptionCue]:
    """
    Convert provider cues into ordered, non-overlapping caption cues.

    Cues whose text is empty after cleanup are dropped. A cue that collapses
    to zero length after rounding is stretched to ``MIN_CUE_SECONDS``.
    """
    cues = []
    for raw in raw_cues:
        text = clean_caption_text(raw.text)
        if not text:
            continue
        start = max(0.0, _round_tenth(raw.offset_ms / 1000))
        end = _round_tenth((raw.offset_ms + max(raw.duration_ms, 0)) / 1000)
        if end <= start:
            end = round(start + MIN_CUE_SECONDS, 1)
        cues.append(CaptionCue(start=start, end=end, text=text))

    cues.sort(key=lambda c: c.start)

    # Clamp overlaps onto the next cue's start where that leaves a positive length
    for i in range(len(cues) - 1):
        current, following = cues[i], cues[i + 1]
        if current.end > following.start > current.start:
            cues[i] = CaptionCue(start=current.start, end=following.start, text=current.text)

    return cues


class CaptionFetcher:
    """Async facade over a blocking caption provider with a bounded timeout."""

    def __init__(
        self,
        provider: Optional[CaptionProvider] = None,
        timeout: float = 20.0,
        languages: Optional[Sequence[str]] = None
    ):
        self.provider = provider or YouTubeCaptionProvider(languages)
        self.timeout = timeout
        logger.info(f"Initialized CaptionFetcher with {type(self.provider).__name__} (timeout={timeout}s)")

    async def fetch_captions(self, video_id: str) -> List[CaptionCue]:
        """
        Fetch and normalize captions for a video.

        Args:
            video_id: YouTube video ID (only checked for non-emptiness)

        Returns:
            Non-empty list of caption cues

        Raises:
            CaptionsUnavailableError: On any upstream failure, timeout or empty track
        """
        if not video_id or not video_id.strip():
            raise CaptionsUnavailableError(video_id or "", "empty video id")

        try:
            raw_cues = await asyncio.wait_for(
                asyncio.to_thread(self.provider.fetch_raw, video_id),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Caption fetch for {video_id} timed out after {self.timeout}s")
            raise CaptionsUnavailableError(video_id, "timeout") from e
        except Exception as e:
            # Disabled captions, missing track, rate limit and network errors look the same to callers
            logger.info(f"No captions available for {video_id}: {type(e).__name__}: {e}")
            raise CaptionsUnavailableError(video_id, type(e).__name__) from e

        cues = normalize_cues(raw_cues)
        if not cues:
            raise CaptionsUnavailableError(video_id, "empty caption track")

        logger.info(f"Found {len(cues)} caption segments for {video_id}")
        return cues
