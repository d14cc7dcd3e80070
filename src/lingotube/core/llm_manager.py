"""Unified LLM management for consistent model initialization."""

import os
from typing import Optional, Dict, Any
from dataclasses import dataclass

from langchain_openai import ChatOpenAI
from langchain_anthropic import ChatAnthropic
from langchain_google_genai import ChatGoogleGenerativeAI

from ..utils.logging import get_logger
from .config import config

logger = get_logger("llm_manager")

# Credential environment variable per provider
PROVIDER_API_KEYS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GEMINI_API_KEY",
}


@dataclass
class LLMConfig:
    """LLM configuration settings."""
    model: str = config.llm.default_model
    temperature: float = config.llm.translation_temperature
    max_tokens: Optional[int] = config.llm.max_tokens
    timeout: int = config.llm.timeout
    provider: Optional[str] = config.llm.provider


def infer_provider(model: str) -> Optional[str]:
    """Guess the provider from a model name prefix."""
    if model.startswith("gpt") or model.startswith("o1") or model.startswith("o3"):
        return "openai"
    if model.startswith("claude"):
        return "anthropic"
    if model.startswith("gemini"):
        return "google"
    return None


class LLMManager:
    """Unified LLM manager for consistent model initialization."""

    def __init__(self, default_config: Optional[LLMConfig] = None):
        self._default_config = default_config
        self._llm_cache: Dict[str, Any] = {}

    def get_config(self) -> LLMConfig:
        """Get LLM configuration from environment or defaults."""
        if self._default_config is not None:
            return self._default_config

        model = os.environ.get("LLM_MODEL", config.llm.default_model)
        return LLMConfig(
            model=model,
            temperature=config.llm.translation_temperature,
            max_tokens=config.llm.max_tokens,
            timeout=config.llm.timeout,
            provider=config.llm.provider or infer_provider(model)
        )

    def _resolve_provider(self, llm_config: LLMConfig) -> Optional[str]:
        return llm_config.provider or infer_provider(llm_config.model)

    def has_credentials(self, llm_config: Optional[LLMConfig] = None) -> bool:
        """True when an API key for the configured provider is present."""
        llm_config = llm_config or self.get_config()
        env_var = PROVIDER_API_KEYS.get(self._resolve_provider(llm_config) or "")
        return bool(env_var and os.getenv(env_var))

    def _get_cache_key(self, llm_config: LLMConfig) -> str:
        """Generate cache key for LLM instance."""
        return f"langchain_{llm_config.model}_{llm_config.temperature}_{llm_config.max_tokens}_{llm_config.provider or 'default'}"

    def get_langchain_llm(self, llm_config: Optional[LLMConfig] = None) -> Any:
        """Get a LangChain chat model for the configured provider."""
        llm_config = llm_config or self.get_config()
        cache_key = self._get_cache_key(llm_config)
        if cache_key in self._llm_cache:
            return self._llm_cache[cache_key]

        provider = self._resolve_provider(llm_config)
        logger.info(f"Creating LangChain LLM: {llm_config.model} (temp: {llm_config.temperature}, provider: {provider or 'auto'})")

        if provider == "openai":
            llm = ChatOpenAI(
                model=llm_config.model,
                temperature=llm_config.temperature,
                max_tokens=llm_config.max_tokens,
                timeout=llm_config.timeout
            )
        elif provider == "anthropic":
            llm = ChatAnthropic(
                model=llm_config.model,
                temperature=llm_config.temperature,
                max_tokens=llm_config.max_tokens or 2000,
                timeout=llm_config.timeout,
                api_key=os.getenv("ANTHROPIC_API_KEY")
            )
        elif provider == "google":
            llm = ChatGoogleGenerativeAI(
                model=llm_config.model,
                temperature=llm_config.temperature,
                max_output_tokens=llm_config.max_tokens,
                timeout=llm_config.timeout,
                google_api_key=os.getenv("GEMINI_API_KEY")
            )
        else:
            raise ValueError(f"Unsupported model/provider combination: {llm_config.model} with provider {llm_config.provider}")

        self._llm_cache[cache_key] = llm
        return llm

    def clear_cache(self) -> None:
        """Clear LLM cache."""
        logger.info(f"Clearing LLM cache ({len(self._llm_cache)} instances)")
        self._llm_cache.clear()
