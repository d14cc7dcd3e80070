"""Pytest configuration and fixtures for the transcript pipeline tests."""

import os
import sys
from datetime import datetime
from unittest.mock import MagicMock

import pytest

# Add the src layout and the tests directory to path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(ROOT, 'src'))
sys.path.insert(0, os.path.dirname(__file__))

# Set test environment variables before importing the packages
os.environ["CACHE_BACKEND"] = "memory"
os.environ["API_DEBUG"] = "true"
os.environ["ENVIRONMENT"] = "test"
for key in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY", "YOUTUBE_API_KEY",
            "UPSTASH_REDIS_REST_URL", "UPSTASH_REDIS_REST_TOKEN", "LLM_PROVIDER"):
    os.environ.pop(key, None)

from lingotube.models import CaptionCue, Transcript, TranscriptSegment, TranscriptSource
from lingotube.repositories import CacheRepository, MemoryTranscriptStore
from lingotube.services import TranslationService

from mocks.mock_services import FakeTranslationLLM, InMemoryDurableStore


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line("markers", "integration: HTTP-level tests through the FastAPI app")


@pytest.fixture
def hello_cues():
    """Single caption cue used by the captions scenario."""
    return [CaptionCue(start=0.0, end=3.0, text="Hello")]


@pytest.fixture
def make_transcript():
    """Factory for small valid transcripts."""
    def _make(
        video_id: str = "abc123",
        source_label: TranscriptSource = TranscriptSource.CAPTIONS,
        target_language: str = "es",
        texts=("Hello", "Goodbye"),
        created_at: datetime = None
    ) -> Transcript:
        segments = [
            TranscriptSegment(start=i * 2.0, end=i * 2.0 + 1.5, source_text=text, translated_text=f"ES:{text}")
            for i, text in enumerate(texts)
        ]
        kwargs = {"created_at": created_at} if created_at else {}
        return Transcript(
            video_id=video_id,
            segments=segments,
            source_label=source_label,
            target_language=target_language,
            **kwargs
        )
    return _make


@pytest.fixture
def durable_store():
    """Dict-backed durable tier."""
    return InMemoryDurableStore()


@pytest.fixture
def cache_repository(durable_store):
    """Cache repository over a fake durable tier and a small memory tier."""
    return CacheRepository(
        durable_store=durable_store,
        memory_store=MemoryTranscriptStore(max_entries=10),
        ttl_seconds=3600,
        timeout=1.0
    )


@pytest.fixture
def memory_cache_repository():
    """Cache repository with no durable tier."""
    return CacheRepository(memory_store=MemoryTranscriptStore(max_entries=10), ttl_seconds=3600)


@pytest.fixture
def fake_llm():
    """Chat model double mapping Hello to Hola."""
    return FakeTranslationLLM(translations={"Hello": "Hola"})


@pytest.fixture
def llm_manager(fake_llm):
    """LLM manager double with credentials that hands out ``fake_llm``."""
    manager = MagicMock()
    manager.has_credentials.return_value = True
    manager.get_langchain_llm.return_value = fake_llm
    return manager


@pytest.fixture
def translation_service(llm_manager):
    """Translation service wired to the fake chat model."""
    return TranslationService(llm_manager, batch_size=5, max_concurrency=4, timeout=2.0)


@pytest.fixture
def disabled_translation_service():
    """Translation service without any credential."""
    manager = MagicMock()
    manager.has_credentials.return_value = False
    return TranslationService(manager)
