"""
Utility modules for the LingoTube transcript pipeline.
"""

from .logging import setup_logger, get_logger
from .youtube_utils import (
    extract_video_id,
    validate_youtube_url,
    normalize_youtube_url,
    parse_iso8601_duration
)
from .language_utils import (
    get_language_name,
    normalize_language_code,
    validate_language_code
)
from .text_utils import clean_caption_text, estimate_difficulty

__all__ = [
    'setup_logger',
    'get_logger',
    'extract_video_id',
    'validate_youtube_url',
    'normalize_youtube_url',
    'parse_iso8601_duration',
    'get_language_name',
    'normalize_language_code',
    'validate_language_code',
    'clean_caption_text',
    'estimate_difficulty'
]
