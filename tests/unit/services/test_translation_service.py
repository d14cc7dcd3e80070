"""Unit tests for batched translation."""

import asyncio
from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage

from lingotube.services import TranslationService, parse_numbered_response

from mocks.mock_services import FakeTranslationLLM, prompt_texts

pytestmark = pytest.mark.unit


def _service(llm, **kwargs):
    manager = MagicMock()
    manager.has_credentials.return_value = True
    manager.get_langchain_llm.return_value = llm
    return TranslationService(manager, **kwargs)


class TestParseNumberedResponse:
    """Test ordinal parsing of model output."""

    def test_common_numbering_styles(self):
        text = "1. Hola\n2) Adiós\n3: Gracias\n[4] Por favor\n5 - Sí"

        assert parse_numbered_response(text, 5) == {
            1: "Hola", 2: "Adiós", 3: "Gracias", 4: "Por favor", 5: "Sí"
        }

    def test_ignores_chatter_out_of_range_and_duplicates(self):
        text = "Here are your translations:\n1. Hola\n1. Otra vez\n7. Fuera\n2.   \n"

        assert parse_numbered_response(text, 3) == {1: "Hola"}

    def test_empty_text(self):
        assert parse_numbered_response("", 3) == {}
        assert parse_numbered_response(None, 3) == {}


class TestTranslationService:
    """Test translate() semantics."""

    @pytest.mark.asyncio
    async def test_translates_in_order(self, translation_service, fake_llm):
        result = await translation_service.translate(["Hello", "World"], "es")

        assert result == [("Hello", "Hola"), ("World", "ES:World")]
        assert fake_llm.calls == [["Hello", "World"]]

    @pytest.mark.asyncio
    async def test_empty_input(self, translation_service, fake_llm):
        assert await translation_service.translate([], "es") == []
        assert fake_llm.calls == []

    @pytest.mark.asyncio
    async def test_same_language_is_noop(self, translation_service, llm_manager):
        result = await translation_service.translate(["Hello"], "en-US")

        assert result == [("Hello", "Hello")]
        llm_manager.get_langchain_llm.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_credential_is_noop(self, disabled_translation_service):
        result = await disabled_translation_service.translate(["Hello", "World"], "es")

        assert result == [("Hello", "Hello"), ("World", "World")]
        disabled_translation_service.llm_manager.get_langchain_llm.assert_not_called()

    @pytest.mark.asyncio
    async def test_model_construction_failure_is_noop(self, llm_manager, translation_service):
        llm_manager.get_langchain_llm.side_effect = ValueError("Unsupported model")

        result = await translation_service.translate(["Hello"], "es")

        assert result == [("Hello", "Hello")]

    @pytest.mark.asyncio
    async def test_batches_of_five(self):
        llm = FakeTranslationLLM()
        service = _service(llm, batch_size=5)
        texts = [f"line {i}" for i in range(12)]

        result = await service.translate(texts, "es")

        assert sorted(len(call) for call in llm.calls) == [2, 5, 5]
        assert [source for source, _ in result] == texts

    @pytest.mark.asyncio
    async def test_order_preserved_when_batches_finish_in_reverse(self):
        texts = [f"line {i}" for i in range(15)]
        llm = FakeTranslationLLM(delays={"line 0": 0.15, "line 5": 0.08, "line 10": 0.0})
        service = _service(llm, batch_size=5)

        result = await service.translate(texts, "es")

        assert result == [(text, f"ES:{text}") for text in texts]

    @pytest.mark.asyncio
    async def test_failed_batch_keeps_source_text(self):
        texts = [f"line {i}" for i in range(10)]
        llm = FakeTranslationLLM(fail_on={"line 7"})
        service = _service(llm, batch_size=5)

        result = await service.translate(texts, "es")

        assert result[:5] == [(t, f"ES:{t}") for t in texts[:5]]
        assert result[5:] == [(t, t) for t in texts[5:]]

    @pytest.mark.asyncio
    async def test_missing_line_falls_back_per_segment(self):
        texts = ["one", "two", "three"]
        llm = FakeTranslationLLM(drop={"two"})
        service = _service(llm)

        result = await service.translate(texts, "es")

        assert result == [("one", "ES:one"), ("two", "two"), ("three", "ES:three")]

    @pytest.mark.asyncio
    async def test_batch_timeout_keeps_source_text(self):
        llm = FakeTranslationLLM(delays={"slow": 1.0})
        service = _service(llm, timeout=0.05)

        result = await service.translate(["slow", "line"], "es")

        assert result == [("slow", "slow"), ("line", "line")]

    @pytest.mark.asyncio
    async def test_content_blocks_response(self):
        class BlockLLM:
            async def ainvoke(self, messages):
                return AIMessage(content=[{"type": "text", "text": "1. Hola"}])

        result = await _service(BlockLLM()).translate(["Hello"], "es")

        assert result == [("Hello", "Hola")]

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        active = 0
        peak = 0

        class CountingLLM:
            async def ainvoke(self, messages):
                nonlocal active, peak
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1
                texts = prompt_texts(messages)
                return AIMessage(content="\n".join(f"{i}. x" for i in range(1, len(texts) + 1)))

        service = _service(CountingLLM(), batch_size=1, max_concurrency=2)

        await service.translate([f"t{i}" for i in range(6)], "fr")

        assert peak == 2

    def test_prompt_numbers_lines(self, translation_service):
        messages = translation_service._build_prompt(["Hello", "World"], "es")

        assert "Spanish" in messages[-1].content
        assert prompt_texts(messages) == ["Hello", "World"]

    def test_invalid_batch_size(self, llm_manager):
        with pytest.raises(ValueError):
            TranslationService(llm_manager, batch_size=0)
