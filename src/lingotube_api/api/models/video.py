"""Video metadata models for the API."""

from typing import Optional

from pydantic import BaseModel, Field

from lingotube.models import VideoMetadata


class VideoInfo(BaseModel):
    """Video information model."""

    video_id: str = Field(..., description="YouTube video ID")
    title: str = Field(..., description="Video title")
    description: Optional[str] = Field(default=None, description="Video description")
    duration_seconds: Optional[int] = Field(default=None, description="Video duration in seconds")
    channel: Optional[str] = Field(default=None, description="Channel name")
    thumbnail_url: Optional[str] = Field(default=None, description="Video thumbnail URL")
    published_at: Optional[str] = Field(default=None, description="Publish timestamp")
    view_count: Optional[int] = Field(default=None, description="View count")
    default_language: str = Field(default="en", description="Default audio language")
    youtube_url: str = Field(..., description="Watch URL")

    @classmethod
    def from_metadata(cls, metadata: VideoMetadata) -> "VideoInfo":
        return cls(**metadata.to_dict())
