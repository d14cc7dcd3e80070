"""Data models for video-related information."""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass
class VideoMetadata:
    """Represents YouTube video metadata shown next to the player."""
    video_id: str
    title: str
    description: Optional[str] = None
    duration_seconds: Optional[int] = None
    channel: Optional[str] = None
    thumbnail_url: Optional[str] = None
    published_at: Optional[str] = None
    view_count: Optional[int] = None
    default_language: str = "en"
    
    @property
    def youtube_url(self) -> str:
        """Get YouTube URL from video ID."""
        return f"https://youtu.be/{self.video_id}"
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["youtube_url"] = self.youtube_url
        return data
