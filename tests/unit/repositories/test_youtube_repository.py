"""Unit tests for the video metadata repository."""

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from lingotube.core.exceptions import MetadataUnavailableError, VideoNotFoundError
from lingotube.repositories import YouTubeRepository
from lingotube.repositories.youtube_repository import YOUTUBE_DATA_API_URL, YOUTUBE_OEMBED_URL

pytestmark = pytest.mark.unit


@pytest.fixture
def data_api_item():
    """One ``videos.list`` item."""
    return {
        "id": "dQw4w9WgXcQ",
        "snippet": {
            "title": "Test Video",
            "description": "Test description",
            "channelTitle": "Test Channel",
            "publishedAt": "2009-10-25T06:57:33Z",
            "defaultLanguage": "en",
            "thumbnails": {
                "default": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg"},
                "high": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg"},
            },
        },
        "contentDetails": {"duration": "PT3M32S"},
        "statistics": {"viewCount": "1000000"},
    }


def _session_returning(status, body=None, error=None):
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=body or {})
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    if error:
        session.get = MagicMock(side_effect=error)
    else:
        session.get = MagicMock(return_value=context)
    return session


class TestParseDataApiItem:
    """Test mapping of Data API responses."""

    def test_full_item(self, data_api_item):
        metadata = YouTubeRepository.parse_data_api_item(data_api_item)

        assert metadata.video_id == "dQw4w9WgXcQ"
        assert metadata.title == "Test Video"
        assert metadata.duration_seconds == 212
        assert metadata.channel == "Test Channel"
        assert metadata.view_count == 1000000
        assert metadata.thumbnail_url.endswith("hqdefault.jpg")

    def test_prefers_maxres_thumbnail(self, data_api_item):
        data_api_item["snippet"]["thumbnails"]["maxres"] = {"url": "https://i.ytimg.com/vi/x/maxresdefault.jpg"}

        metadata = YouTubeRepository.parse_data_api_item(data_api_item)

        assert metadata.thumbnail_url.endswith("maxresdefault.jpg")

    def test_sparse_item(self):
        metadata = YouTubeRepository.parse_data_api_item({"id": "abc123"})

        assert metadata.title == "YouTube Video (abc123)"
        assert metadata.duration_seconds is None
        assert metadata.view_count is None
        assert metadata.thumbnail_url is None


class TestYouTubeRepository:
    """Test metadata lookups."""

    @pytest.mark.asyncio
    async def test_data_api_lookup(self, data_api_item):
        repo = YouTubeRepository(api_key="key")
        with patch.object(repo, "_get_json", AsyncMock(return_value={"items": [data_api_item]})) as get_json:
            metadata = await repo.get_video_metadata("dQw4w9WgXcQ")

        url, params = get_json.call_args.args
        assert url == YOUTUBE_DATA_API_URL
        assert params["id"] == "dQw4w9WgXcQ"
        assert params["key"] == "key"
        assert metadata.duration_seconds == 212

    @pytest.mark.asyncio
    async def test_data_api_no_items(self):
        repo = YouTubeRepository(api_key="key")
        with patch.object(repo, "_get_json", AsyncMock(return_value={"items": []})):
            with pytest.raises(VideoNotFoundError):
                await repo.get_video_metadata("missing0000")

    @pytest.mark.asyncio
    async def test_oembed_lookup_without_key(self):
        repo = YouTubeRepository()
        body = {"title": "oEmbed Title", "author_name": "Channel", "thumbnail_url": "https://i.ytimg.com/t.jpg"}
        with patch.object(repo, "_get_json", AsyncMock(return_value=body)) as get_json:
            metadata = await repo.get_video_metadata("dQw4w9WgXcQ")

        assert get_json.call_args.args[0] == YOUTUBE_OEMBED_URL
        assert metadata.title == "oEmbed Title"
        assert metadata.channel == "Channel"
        assert metadata.duration_seconds is None

    @pytest.mark.asyncio
    async def test_oembed_404_is_not_found(self):
        repo = YouTubeRepository()
        repo._session = _session_returning(404)

        with pytest.raises(VideoNotFoundError):
            await repo.get_video_metadata("missing0000")

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self):
        repo = YouTubeRepository(api_key="key")
        repo._session = _session_returning(500)

        with pytest.raises(MetadataUnavailableError):
            await repo.get_video_metadata("dQw4w9WgXcQ")

    @pytest.mark.asyncio
    async def test_network_error_is_unavailable(self):
        repo = YouTubeRepository()
        repo._session = _session_returning(200, error=aiohttp.ClientConnectionError("down"))

        with pytest.raises(MetadataUnavailableError):
            await repo.get_video_metadata("dQw4w9WgXcQ")

    @pytest.mark.asyncio
    async def test_cleanup_closes_session(self):
        repo = YouTubeRepository()
        session = _session_returning(200)
        repo._session = session

        await repo.cleanup()

        session.close.assert_awaited_once()
