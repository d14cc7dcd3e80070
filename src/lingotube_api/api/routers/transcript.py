"""Transcript router."""

from fastapi import APIRouter, Depends

from lingotube.core.exceptions import InvalidVideoIdError, TranscriptUnavailableError
from lingotube.repositories import CacheRepository
from lingotube.services import TranscriptService
from lingotube.utils.logging import get_logger
from lingotube.utils.youtube_utils import extract_video_id

from ...api.models.transcript import (
    SegmentModel,
    TranscriptRequest,
    TranscriptResponse,
    CachedTranscriptResponse,
    CacheTranscriptRequest,
    CacheTranscriptResponse
)
from ...dependencies import get_transcript_service, get_cache_repository
from ...exceptions import (
    ValidationError,
    NotFoundError,
    TranscriptNotFoundError,
    CacheError,
    InternalServerError
)

router = APIRouter()
logger = get_logger("api.transcript")


def _resolve_video_id(request: TranscriptRequest) -> str:
    if request.video_id and request.video_id.strip():
        return request.video_id.strip()
    if request.youtube_url and request.youtube_url.strip():
        video_id = extract_video_id(request.youtube_url)
        if not video_id:
            raise ValidationError("Could not extract video ID from URL")
        return video_id
    raise ValidationError("Video ID is required")


@router.post("/transcript", response_model=TranscriptResponse)
async def get_transcript(
    request: TranscriptRequest,
    transcript_service: TranscriptService = Depends(get_transcript_service)
):
    """
    Get the bilingual transcript for a video.

    Served from cache when available, otherwise built from captions (or
    placeholder text) and translated.
    """
    video_id = _resolve_video_id(request)
    logger.info(f"Transcript requested for {video_id} ({request.target_language})")

    try:
        transcript = await transcript_service.resolve(video_id, request.target_language)
    except InvalidVideoIdError as e:
        raise ValidationError(str(e))
    except TranscriptUnavailableError as e:
        raise TranscriptNotFoundError(str(e))
    except Exception as e:
        logger.error(f"Transcript processing failed for {video_id}: {str(e)}")
        raise InternalServerError("Failed to process video")

    return TranscriptResponse.from_transcript(transcript)


@router.get("/transcript/cache/{video_id}", response_model=CachedTranscriptResponse)
async def get_cached_transcript(
    video_id: str,
    cache_repo: CacheRepository = Depends(get_cache_repository)
):
    """Look up a cached transcript without generating one."""
    transcript = await cache_repo.get(video_id.strip())
    if transcript is None:
        raise NotFoundError("Transcript not found in cache")

    return CachedTranscriptResponse(
        video_id=transcript.video_id,
        origin=transcript.origin.value,
        language=transcript.target_language,
        transcript=[SegmentModel.from_segment(seg) for seg in transcript.segments]
    )


@router.post("/transcript/cache", response_model=CacheTranscriptResponse)
async def cache_transcript(
    request: CacheTranscriptRequest,
    cache_repo: CacheRepository = Depends(get_cache_repository)
):
    """Store a ready-made transcript."""
    try:
        transcript = request.to_transcript()
    except ValueError as e:
        raise ValidationError(f"Invalid transcript: {e}")

    if not await cache_repo.put(transcript.video_id, transcript):
        raise CacheError("Failed to cache transcript")

    return CacheTranscriptResponse(video_id=transcript.video_id, total_segments=transcript.total_segments)
