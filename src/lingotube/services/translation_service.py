"""Service for batched transcript translation using LangChain chat models."""

import asyncio
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from langchain_core.messages import SystemMessage, HumanMessage

from ..core.llm_manager import LLMManager, LLMConfig
from ..utils.logging import get_logger
from ..utils.language_utils import get_language_name, normalize_language_code

logger = get_logger("translation_service")

# "1. text", "1) text", "1: text", "1 - text" or "[1] text"
_ORDINAL_LINE = re.compile(r"^\s*(?:\[\s*(\d+)\s*\]|(\d+)\s*[.):\-])\s*(.*)$")

SYSTEM_PROMPT = (
    "You are a professional translator. Translate accurately while maintaining natural flow."
)


def parse_numbered_response(text: str, expected: int) -> Dict[int, str]:
    """
    Map 1-based ordinals in a model response to their translated text.

    Lines without a leading ordinal, ordinals outside ``1..expected``,
    repeated ordinals and empty translations are ignored.
    """
    translations: Dict[int, str] = {}
    for line in (text or "").splitlines():
        match = _ORDINAL_LINE.match(line)
        if not match:
            continue
        ordinal = int(match.group(1) or match.group(2))
        translated = match.group(3).strip()
        if 1 <= ordinal <= expected and translated and ordinal not in translations:
            translations[ordinal] = translated
    return translations


def _response_text(response: Any) -> str:
    """Extract plain text from a LangChain message (str or content blocks)."""
    content = getattr(response, "content", response)
    if isinstance(content, list):
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return str(content or "")


class TranslationService:
    """
    Translates ordered caption texts in fixed-size batches.

    Every failure mode degrades to returning the source text: a missing
    credential disables translation entirely, a failed batch falls back as a
    whole and an unparsable line falls back for that segment only.
    """

    def __init__(
        self,
        llm_manager: LLMManager,
        batch_size: int = 5,
        max_concurrency: int = 8,
        timeout: float = 45.0,
        source_language: str = "en",
        llm_config: Optional[LLMConfig] = None
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.llm_manager = llm_manager
        self.batch_size = batch_size
        self.timeout = timeout
        self.source_language = normalize_language_code(source_language) or "en"
        self.llm_config = llm_config
        self._semaphore = asyncio.Semaphore(max(1, max_concurrency))
        logger.info(f"Initialized TranslationService (batch_size={batch_size}, max_concurrency={max_concurrency})")

    @property
    def is_enabled(self) -> bool:
        """True when a translation credential is configured."""
        return self.llm_manager.has_credentials(self.llm_config)

    @staticmethod
    def _untranslated(texts: Sequence[str]) -> List[Tuple[str, str]]:
        return [(text, text) for text in texts]

    def _build_prompt(self, batch: Sequence[str], target_language: str) -> List[Any]:
        source_name = get_language_name(self.source_language) or self.source_language
        target_name = get_language_name(target_language) or target_language
        numbered = "\n".join(f"{i}. {text}" for i, text in enumerate(batch, 1))
        user_message = (
            f"Translate the following {source_name} text to {target_name}.\n"
            f"Maintain the same numbering format and keep translations natural and contextual. "
            f"Return exactly {len(batch)} lines, one per numbered input line, each starting with its number.\n\n"
            f"{numbered}"
        )
        return [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=user_message)]

    async def translate(self, texts: Sequence[str], target_language: str) -> List[Tuple[str, str]]:
        """
        Translate caption texts into the target language.

        Args:
            texts: Source texts in transcript order
            target_language: ISO-639-1 code of the target language

        Returns:
            ``(source_text, translated_text)`` pairs, same length and order as ``texts``
        """
        texts = list(texts)
        if not texts:
            return []

        target = normalize_language_code(target_language) or target_language
        if target == self.source_language:
            logger.info(f"Source and target languages are the same ({target}), no translation needed")
            return self._untranslated(texts)

        if not self.is_enabled:
            logger.info("No translation credential configured; returning source text")
            return self._untranslated(texts)

        try:
            llm = self.llm_manager.get_langchain_llm(self.llm_config)
        except Exception as e:
            logger.error(f"Could not create translation model, returning source text: {e}")
            return self._untranslated(texts)

        batches = [texts[i:i + self.batch_size] for i in range(0, len(texts), self.batch_size)]
        logger.info(f"Translating {len(texts)} segments to {target} in {len(batches)} batches")

        results = await asyncio.gather(*[
            self._translate_batch(llm, idx, batch, target, len(batches))
            for idx, batch in enumerate(batches)
        ])
        results.sort(key=lambda x: x[0])
        return [pair for _, batch_pairs in results for pair in batch_pairs]

    async def _translate_batch(
        self,
        llm: Any,
        batch_idx: int,
        batch: List[str],
        target_language: str,
        batch_count: int
    ) -> Tuple[int, List[Tuple[str, str]]]:
        async with self._semaphore:
            logger.debug(f"Translating batch {batch_idx + 1}/{batch_count} with {len(batch)} segments")
            try:
                response = await asyncio.wait_for(
                    llm.ainvoke(self._build_prompt(batch, target_language)),
                    timeout=self.timeout
                )
            except Exception as e:
                logger.error(f"Batch {batch_idx + 1} translation failed, keeping source text: {type(e).__name__}: {e}")
                return batch_idx, self._untranslated(batch)

        translated_text = _response_text(response)
        translations = parse_numbered_response(translated_text, len(batch))

        missing = [i for i in range(1, len(batch) + 1) if i not in translations]
        if missing:
            logger.warning(f"Batch {batch_idx + 1} missing segments {missing}; using source text. Model output:\n{translated_text}")

        return batch_idx, [
            (source, translations.get(i, source))
            for i, source in enumerate(batch, 1)
        ]
