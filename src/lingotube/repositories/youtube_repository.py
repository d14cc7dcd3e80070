"""Repository for YouTube video metadata with connection pooling."""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from ..core.exceptions import MetadataUnavailableError, VideoNotFoundError
from ..models import VideoMetadata
from ..utils.logging import get_logger
from ..utils.youtube_utils import parse_iso8601_duration

logger = get_logger("youtube_repository")

YOUTUBE_DATA_API_URL = "https://www.googleapis.com/youtube/v3/videos"
YOUTUBE_OEMBED_URL = "https://www.youtube.com/oembed"


class YouTubeRepository:
    """
    Read-only video metadata lookup.

    Uses the YouTube Data API v3 when an API key is configured and the
    keyless oEmbed endpoint (title, channel, thumbnail only) otherwise.
    """

    def __init__(self, api_key: Optional[str] = None, timeout: float = 10.0, max_concurrency: int = 10):
        self.api_key = api_key
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None
        self._rate_limiter = asyncio.Semaphore(max_concurrency)
        logger.info(f"Initialized YouTubeRepository ({'Data API' if api_key else 'oEmbed only'})")

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with connection pooling."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=20, ttl_dns_cache=300)
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={'User-Agent': 'LingoTube/1.0'}
            )
            logger.info("Created new HTTP session with connection pooling")
        return self._session

    async def _get_json(self, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        """GET a JSON document, mapping 404-like statuses to VideoNotFoundError."""
        async with self._rate_limiter:
            session = await self._get_session()
            try:
                async with session.get(url, params=params) as response:
                    if response.status in (401, 403, 404) and url == YOUTUBE_OEMBED_URL:
                        # oEmbed answers private/unknown videos with 401/404
                        raise VideoNotFoundError(f"Video not found: {params.get('url')}")
                    if response.status != 200:
                        raise MetadataUnavailableError(f"Metadata request failed with HTTP {response.status}")
                    return await response.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                raise MetadataUnavailableError(f"Metadata request failed: {e}") from e

    async def get_video_metadata(self, video_id: str) -> VideoMetadata:
        """
        Look up title, duration, channel and thumbnail for a video.

        Raises:
            VideoNotFoundError: The video does not exist or is private
            MetadataUnavailableError: The provider could not be reached
        """
        if self.api_key:
            return await self._from_data_api(video_id)
        return await self._from_oembed(video_id)

    async def _from_data_api(self, video_id: str) -> VideoMetadata:
        data = await self._get_json(YOUTUBE_DATA_API_URL, {
            "id": video_id,
            "key": self.api_key,
            "part": "snippet,contentDetails,statistics",
        })
        items = data.get("items") or []
        if not items:
            raise VideoNotFoundError(f"Video not found: {video_id}")

        return self.parse_data_api_item(items[0])

    @staticmethod
    def parse_data_api_item(item: Dict[str, Any]) -> VideoMetadata:
        """Map one ``videos.list`` item onto VideoMetadata."""
        snippet = item.get("snippet") or {}
        thumbnails = snippet.get("thumbnails") or {}
        thumbnail = (thumbnails.get("maxres") or thumbnails.get("high") or thumbnails.get("default") or {}).get("url")
        statistics = item.get("statistics") or {}
        view_count = statistics.get("viewCount")

        return VideoMetadata(
            video_id=item["id"],
            title=snippet.get("title", f"YouTube Video ({item['id']})"),
            description=snippet.get("description"),
            duration_seconds=parse_iso8601_duration((item.get("contentDetails") or {}).get("duration")),
            channel=snippet.get("channelTitle"),
            thumbnail_url=thumbnail,
            published_at=snippet.get("publishedAt"),
            view_count=int(view_count) if view_count is not None else None,
            default_language=snippet.get("defaultLanguage") or "en"
        )

    async def _from_oembed(self, video_id: str) -> VideoMetadata:
        data = await self._get_json(YOUTUBE_OEMBED_URL, {
            "url": f"https://www.youtube.com/watch?v={video_id}",
            "format": "json",
        })
        return VideoMetadata(
            video_id=video_id,
            title=data.get("title", f"YouTube Video ({video_id})"),
            channel=data.get("author_name"),
            thumbnail_url=data.get("thumbnail_url") or f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"
        )

    async def cleanup(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.info("Closed YouTubeRepository HTTP session")
