"""Unit tests for the caption source adapter."""

import time
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from lingotube.core.caption_fetcher import (
    CaptionFetcher,
    RawCaptionCue,
    YouTubeCaptionProvider,
    normalize_cues
)
from lingotube.core.exceptions import CaptionsUnavailableError
from lingotube.models import CaptionCue

from mocks.mock_services import StaticCaptionProvider

pytestmark = pytest.mark.unit


class TestNormalizeCues:
    """Test conversion of provider cues into caption cues."""

    def test_milliseconds_to_rounded_seconds(self):
        cues = normalize_cues([RawCaptionCue(offset_ms=1234, duration_ms=2000, text="Hello")])

        assert cues == [CaptionCue(start=1.2, end=3.2, text="Hello")]

    def test_half_rounds_up(self):
        cues = normalize_cues([RawCaptionCue(offset_ms=1250, duration_ms=1000, text="x")])

        assert cues[0].start == 1.3
        assert cues[0].end == 2.3

    def test_text_is_single_line(self):
        cues = normalize_cues([RawCaptionCue(offset_ms=0, duration_ms=1000, text="Hello\n  there ")])

        assert cues[0].text == "Hello there"

    def test_blank_cues_dropped(self):
        cues = normalize_cues([
            RawCaptionCue(offset_ms=0, duration_ms=1000, text="  \n "),
            RawCaptionCue(offset_ms=1000, duration_ms=1000, text="kept"),
        ])

        assert [c.text for c in cues] == ["kept"]

    def test_zero_length_cue_gets_minimum_length(self):
        cues = normalize_cues([RawCaptionCue(offset_ms=5000, duration_ms=20, text="blip")])

        assert cues[0].start == 5.0
        assert cues[0].end == 5.1

    def test_cues_sorted_and_overlaps_clamped(self):
        cues = normalize_cues([
            RawCaptionCue(offset_ms=3000, duration_ms=1000, text="second"),
            RawCaptionCue(offset_ms=0, duration_ms=4000, text="first"),
        ])

        assert [c.text for c in cues] == ["first", "second"]
        assert cues[0].end == 3.0
        assert cues[0].end <= cues[1].start
        for cue in cues:
            assert cue.end > cue.start

    def test_empty_input(self):
        assert normalize_cues([]) == []


class TestCaptionFetcher:
    """Test the async adapter around a blocking provider."""

    @pytest.mark.asyncio
    async def test_fetch_captions_success(self):
        provider = StaticCaptionProvider([RawCaptionCue(offset_ms=0, duration_ms=3000, text="Hello")])
        fetcher = CaptionFetcher(provider=provider)

        cues = await fetcher.fetch_captions("abc123")

        assert cues == [CaptionCue(start=0.0, end=3.0, text="Hello")]
        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_provider_error_becomes_unavailable(self):
        fetcher = CaptionFetcher(provider=StaticCaptionProvider(error=RuntimeError("Subtitles are disabled")))

        with pytest.raises(CaptionsUnavailableError) as exc_info:
            await fetcher.fetch_captions("xyz789")

        assert exc_info.value.video_id == "xyz789"
        assert exc_info.value.reason == "RuntimeError"

    @pytest.mark.asyncio
    async def test_empty_track_is_unavailable(self):
        provider = StaticCaptionProvider([RawCaptionCue(offset_ms=0, duration_ms=1000, text="   ")])
        fetcher = CaptionFetcher(provider=provider)

        with pytest.raises(CaptionsUnavailableError) as exc_info:
            await fetcher.fetch_captions("xyz789")

        assert exc_info.value.reason == "empty caption track"

    @pytest.mark.asyncio
    async def test_blank_video_id_skips_provider(self):
        provider = StaticCaptionProvider([RawCaptionCue(offset_ms=0, duration_ms=1000, text="x")])
        fetcher = CaptionFetcher(provider=provider)

        with pytest.raises(CaptionsUnavailableError):
            await fetcher.fetch_captions("  ")

        assert provider.calls == 0

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        class SlowProvider(StaticCaptionProvider):
            def fetch_raw(self, video_id):
                time.sleep(0.3)
                return super().fetch_raw(video_id)

        fetcher = CaptionFetcher(provider=SlowProvider([RawCaptionCue(0, 1000, "late")]), timeout=0.05)

        with pytest.raises(CaptionsUnavailableError) as exc_info:
            await fetcher.fetch_captions("slow1")

        assert exc_info.value.reason == "timeout"


class TestYouTubeCaptionProvider:
    """Test mapping of youtube-transcript-api snippets."""

    def test_fetch_raw_converts_seconds_to_milliseconds(self):
        snippets = [SimpleNamespace(text="Hello", start=1.5, duration=2.25)]
        with patch("lingotube.core.caption_fetcher.YouTubeTranscriptApi") as api_cls:
            api_cls.return_value.fetch = MagicMock(return_value=snippets)
            provider = YouTubeCaptionProvider(languages=["en", "en-US"])

            raw = provider.fetch_raw("abc123")

        api_cls.return_value.fetch.assert_called_once_with("abc123", languages=["en", "en-US"])
        assert raw == [RawCaptionCue(offset_ms=1500.0, duration_ms=2250.0, text="Hello")]
