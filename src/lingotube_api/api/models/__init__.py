"""API models package."""

from .base import BaseResponse, ErrorDetail, ErrorResponseModel, HealthResponse
from .transcript import (
    SegmentModel,
    TranscriptRequest,
    TranscriptResponse,
    CachedTranscriptResponse,
    CacheTranscriptRequest,
    CacheTranscriptResponse
)
from .video import VideoInfo

__all__ = [
    # Base models
    "BaseResponse",
    "ErrorDetail",
    "ErrorResponseModel",
    "HealthResponse",

    # Transcript models
    "SegmentModel",
    "TranscriptRequest",
    "TranscriptResponse",
    "CachedTranscriptResponse",
    "CacheTranscriptRequest",
    "CacheTranscriptResponse",

    # Video models
    "VideoInfo"
]
