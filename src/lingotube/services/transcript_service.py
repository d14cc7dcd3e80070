"""Service that resolves a video ID into a cached, translated transcript."""

import asyncio
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.exceptions import InvalidVideoIdError, TranscriptUnavailableError
from ..models import Transcript, TranscriptSegment
from ..repositories import CacheRepository
from ..utils.logging import get_logger
from ..utils.language_utils import normalize_language_code
from .transcript_sources import SourceResult, TranscriptSourceStrategy
from .translation_service import TranslationService

logger = get_logger("transcript_service")


class TranscriptService:
    """
    Transcript orchestrator.

    ``resolve`` checks the cache, then walks the source strategies in order
    until one yields cues, translates them and writes the result back once.
    A cache hit never triggers captions, translation or a write. Concurrent
    calls for the same video and language share a single in-flight
    generation.
    """

    def __init__(
        self,
        cache_repository: CacheRepository,
        translation_service: TranslationService,
        sources: Sequence[TranscriptSourceStrategy],
        default_target_language: str = "es"
    ):
        if not sources:
            raise ValueError("At least one transcript source strategy is required")
        self.cache_repo = cache_repository
        self.translation_service = translation_service
        self.sources = list(sources)
        self.default_target_language = default_target_language
        self._in_flight: Dict[Tuple[str, str], "asyncio.Future[Transcript]"] = {}
        logger.info(f"Initialized TranscriptService with sources: {[s.name for s in self.sources]}")

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    async def resolve(self, video_id: str, target_language: Optional[str] = None) -> Transcript:
        """
        Get the bilingual transcript for a video.

        Args:
            video_id: YouTube video ID
            target_language: ISO-639-1 code to translate into

        Returns:
            Transcript labelled ``cache``, ``captions`` or ``generated-fallback``

        Raises:
            InvalidVideoIdError: If video_id is missing or blank
            TranscriptUnavailableError: If no source strategy produced cues
        """
        video_id = (video_id or "").strip()
        if not video_id:
            raise InvalidVideoIdError("Video ID is required")

        target = normalize_language_code(target_language) or self.default_target_language

        cached = await self.cache_repo.get(video_id)
        if cached is not None:
            if cached.target_language == target:
                logger.info(f"Using cached transcript for {video_id} ({target})")
                return cached.as_cached()
            logger.info(
                f"Cached transcript for {video_id} is in {cached.target_language}, "
                f"regenerating for {target}"
            )

        key = (video_id, target)
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._generate(video_id, target))
            self._in_flight[key] = task
            task.add_done_callback(lambda t, k=key: self._release(k, t))
        else:
            logger.info(f"Joining in-flight transcript generation for {video_id} ({target})")

        # A cancelled caller must not cancel work other callers are awaiting
        return await asyncio.shield(task)

    def _release(self, key: Tuple[str, str], task: "asyncio.Future[Transcript]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _acquire_cues(self, video_id: str) -> SourceResult:
        for source in self.sources:
            try:
                result = await source.fetch(video_id)
            except Exception as e:
                logger.error(f"Source '{source.name}' failed unexpectedly for {video_id}: {e}")
                continue
            if result.ok:
                logger.info(f"Source '{source.name}' produced {len(result.cues)} cues for {video_id}")
                return result
            logger.info(f"Source '{source.name}' unavailable for {video_id}: {result.error}")

        raise TranscriptUnavailableError(f"No transcript source produced data for {video_id}")

    async def _translate(self, texts: List[str], target: str) -> List[Tuple[str, str]]:
        try:
            return await self.translation_service.translate(texts, target)
        except Exception as e:
            logger.error(f"Translation failed, keeping source text: {e}")
            return [(text, text) for text in texts]

    async def _generate(self, video_id: str, target: str) -> Transcript:
        logger.info(f"Generating transcript for {video_id} ({target})")
        result = await self._acquire_cues(video_id)

        pairs = await self._translate([cue.text for cue in result.cues], target)
        segments = [
            TranscriptSegment(
                start=cue.start,
                end=cue.end,
                source_text=source_text,
                translated_text=translated_text
            )
            for cue, (source_text, translated_text) in zip(result.cues, pairs)
        ]

        transcript = Transcript(
            video_id=video_id,
            segments=segments,
            source_label=result.label,
            target_language=target
        )

        try:
            stored = await self.cache_repo.put(video_id, transcript)
        except Exception as e:
            logger.error(f"Cache write-back failed for {video_id}: {e}")
            stored = False
        if not stored:
            logger.warning(f"Transcript for {video_id} was not cached")

        return transcript
