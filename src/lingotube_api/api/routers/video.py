"""Video metadata router."""

from fastapi import APIRouter, Depends

from lingotube.core.exceptions import MetadataUnavailableError, VideoNotFoundError
from lingotube.repositories import YouTubeRepository
from lingotube.utils.logging import get_logger

from ...api.models.video import VideoInfo
from ...dependencies import get_youtube_repository
from ...exceptions import ExternalServiceError, NotFoundError

router = APIRouter()
logger = get_logger("api.video")


@router.get("/{video_id}/info", response_model=VideoInfo)
async def get_video_info(
    video_id: str,
    youtube_repo: YouTubeRepository = Depends(get_youtube_repository)
):
    """Get title, duration, channel and thumbnail for a video."""
    try:
        metadata = await youtube_repo.get_video_metadata(video_id)
    except VideoNotFoundError as e:
        raise NotFoundError(str(e))
    except MetadataUnavailableError as e:
        logger.error(f"Metadata lookup failed for {video_id}: {e}")
        raise ExternalServiceError(str(e), service_name="YouTube")

    return VideoInfo.from_metadata(metadata)
