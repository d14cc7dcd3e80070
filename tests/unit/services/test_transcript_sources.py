"""Unit tests for transcript source strategies."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from lingotube.core.exceptions import CaptionsUnavailableError
from lingotube.models import CaptionCue, TranscriptSource
from lingotube.services import (
    CaptionSourceStrategy,
    PlaceholderSourceStrategy,
    SourceResult,
    PLACEHOLDER_CUES
)

pytestmark = pytest.mark.unit


class TestSourceResult:
    """Test the tagged result type."""

    def test_success(self):
        result = SourceResult.success(TranscriptSource.CAPTIONS, [CaptionCue(0, 1, "Hi")])

        assert result.ok is True
        assert result.error is None

    def test_unavailable(self):
        result = SourceResult.unavailable(TranscriptSource.CAPTIONS, "timeout")

        assert result.ok is False
        assert result.cues == []

    def test_success_without_cues_is_not_ok(self):
        assert SourceResult.success(TranscriptSource.CAPTIONS, []).ok is False


class TestCaptionSourceStrategy:
    """Test the captions strategy."""

    @pytest.mark.asyncio
    async def test_wraps_fetcher_cues(self):
        fetcher = MagicMock()
        fetcher.fetch_captions = AsyncMock(return_value=[CaptionCue(0, 3, "Hello")])

        result = await CaptionSourceStrategy(fetcher).fetch("abc123")

        assert result.ok is True
        assert result.label == TranscriptSource.CAPTIONS
        fetcher.fetch_captions.assert_awaited_once_with("abc123")

    @pytest.mark.asyncio
    async def test_unavailable_captions_are_tagged(self):
        fetcher = MagicMock()
        fetcher.fetch_captions = AsyncMock(side_effect=CaptionsUnavailableError("xyz789", "TranscriptsDisabled"))

        result = await CaptionSourceStrategy(fetcher).fetch("xyz789")

        assert result.ok is False
        assert result.error == "TranscriptsDisabled"

    def test_name(self):
        assert CaptionSourceStrategy(MagicMock()).name == "captions"


class TestPlaceholderSourceStrategy:
    """Test the placeholder strategy."""

    @pytest.mark.asyncio
    async def test_always_available(self):
        result = await PlaceholderSourceStrategy().fetch("anything")

        assert result.ok is True
        assert result.label == TranscriptSource.GENERATED_FALLBACK
        assert result.cues == list(PLACEHOLDER_CUES)

    def test_placeholder_cues_are_contiguous(self):
        for current, following in zip(PLACEHOLDER_CUES, PLACEHOLDER_CUES[1:]):
            assert current.end == following.start
            assert current.end > current.start
