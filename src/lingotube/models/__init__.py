"""Data models for LingoTube."""

from .transcript import CaptionCue, Transcript, TranscriptSegment, TranscriptSource
from .video import VideoMetadata

__all__ = [
    "CaptionCue",
    "Transcript",
    "TranscriptSegment",
    "TranscriptSource",
    "VideoMetadata"
]
