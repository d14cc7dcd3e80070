"""
LingoTube Package

Bilingual transcripts for YouTube videos: fetches platform captions, translates
them into a target language and caches the result for repeat viewers.
"""

__version__ = "0.1.0"

from .utils.logging import get_logger
from .models import Transcript, TranscriptSegment, TranscriptSource, VideoMetadata
from .utils.youtube_utils import extract_video_id, validate_youtube_url

__all__ = [
    'get_logger',
    'Transcript',
    'TranscriptSegment',
    'TranscriptSource',
    'VideoMetadata',
    'extract_video_id',
    'validate_youtube_url'
]

# Set up package-level logger
logger = get_logger(__name__)
