"""YouTube utility functions."""

import re
from typing import Optional
from urllib.parse import urlparse, parse_qs

VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

# YouTube URL patterns
_URL_PATTERNS = [
    r'^https?://(?:www\.)?youtube\.com/watch\?(?:.*&)?v=[\w-]+',
    r'^https?://(?:www\.)?youtu\.be/[\w-]+',
    r'^https?://(?:www\.)?youtube\.com/embed/[\w-]+',
    r'^https?://(?:www\.)?youtube\.com/shorts/[\w-]+',
    r'^https?://(?:www\.)?youtube\.com/v/[\w-]+',
    r'^https?://(?:m\.)?youtube\.com/watch\?(?:.*&)?v=[\w-]+',
]

_ISO8601_DURATION = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)


def validate_youtube_url(url: str) -> bool:
    """
    Validate if a URL is a valid YouTube URL.
    
    Args:
        url: The URL to validate
        
    Returns:
        True if valid YouTube URL, False otherwise
    """
    if not url or not isinstance(url, str):
        return False
    
    return any(re.match(pattern, url.strip()) for pattern in _URL_PATTERNS)


def extract_video_id(url_or_id: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL, or pass a bare ID through.
    
    Args:
        url_or_id: YouTube URL or 11-character video ID
        
    Returns:
        Video ID if found, None otherwise
    """
    if not url_or_id or not isinstance(url_or_id, str):
        return None
    
    s = url_or_id.strip()
    if VIDEO_ID_PATTERN.match(s):
        return s
    
    if not validate_youtube_url(s):
        return None
    
    parsed = urlparse(s)
    host = (parsed.netloc or "").lower()
    
    if "youtu.be" in host:
        candidate = parsed.path.strip("/").split("/")[0]
    else:
        qs = parse_qs(parsed.query)
        if qs.get("v"):
            candidate = qs["v"][0]
        else:
            parts = [p for p in parsed.path.split("/") if p]
            candidate = parts[1] if len(parts) > 1 else ""
    
    return candidate if VIDEO_ID_PATTERN.match(candidate) else None


def normalize_youtube_url(url: str) -> Optional[str]:
    """Normalize a YouTube URL (or bare ID) to the standard watch URL."""
    video_id = extract_video_id(url)
    if not video_id:
        return None
    
    return f"https://www.youtube.com/watch?v={video_id}"


def parse_iso8601_duration(duration: Optional[str]) -> Optional[int]:
    """
    Convert a YouTube Data API duration such as "PT1H2M3S" to seconds.
    
    Returns None when the value is missing or malformed.
    """
    if not duration:
        return None
    
    match = _ISO8601_DURATION.match(duration.strip())
    if not match:
        return None
    
    parts = {k: int(v) if v else 0 for k, v in match.groupdict().items()}
    return parts["days"] * 86400 + parts["hours"] * 3600 + parts["minutes"] * 60 + parts["seconds"]
