"""
Configuration for the LingoTube transcript pipeline.
All tunables are centralized here and can be overridden via environment variables.
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Tuple
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path('.env')
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

# =============================================================================
# CORE APPLICATION SETTINGS
# =============================================================================

@dataclass
class AppConfig:
    """Core application configuration."""
    version: str = field(default_factory=lambda: os.getenv('APP_VERSION', '0.1.0'))
    debug: bool = field(default_factory=lambda: os.getenv('DEBUG', 'false').lower() == 'true')
    environment: str = field(default_factory=lambda: os.getenv('ENVIRONMENT', 'development'))

@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = field(default_factory=lambda: os.getenv('LOG_LEVEL', 'INFO'))

# =============================================================================
# LLM CONFIGURATION
# =============================================================================

@dataclass
class LLMConfig:
    """LLM settings used by the translation engine."""
    default_model: str = field(default_factory=lambda: os.getenv('LLM_DEFAULT_MODEL', 'gpt-4o-mini'))
    translation_temperature: float = field(default_factory=lambda: float(os.getenv('LLM_TRANSLATION_TEMPERATURE', '0.3')))
    max_tokens: Optional[int] = field(default_factory=lambda: int(os.getenv('LLM_MAX_TOKENS', '2000')) or None)
    timeout: int = field(default_factory=lambda: int(os.getenv('LLM_DEFAULT_TIMEOUT', '60')))
    provider: Optional[str] = field(default_factory=lambda: os.getenv('LLM_PROVIDER') or None)

# =============================================================================
# CACHE CONFIGURATION
# =============================================================================

@dataclass
class CacheConfig:
    """Transcript cache configuration."""
    # auto | upstash | file | memory
    backend: str = field(default_factory=lambda: os.getenv('CACHE_BACKEND', 'auto').lower())
    ttl_days: int = field(default_factory=lambda: int(os.getenv('CACHE_TTL_DAYS', '7')))
    cache_dir: str = field(default_factory=lambda: os.getenv('CACHE_DIR', str(Path.cwd() / 'transcript_cache')))
    memory_max_entries: int = field(default_factory=lambda: int(os.getenv('CACHE_MEMORY_MAX_ENTRIES', '500')))
    key_prefix: str = field(default_factory=lambda: os.getenv('CACHE_KEY_PREFIX', 'transcript:'))

    # Upstash Redis REST credentials
    upstash_url: Optional[str] = field(default_factory=lambda: os.getenv('UPSTASH_REDIS_REST_URL'))
    upstash_token: Optional[str] = field(default_factory=lambda: os.getenv('UPSTASH_REDIS_REST_TOKEN'))

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_days * 24 * 3600

# =============================================================================
# NETWORK CONFIGURATION
# =============================================================================

@dataclass
class NetworkConfig:
    """Per-call timeouts, in seconds."""
    caption_timeout: float = field(default_factory=lambda: float(os.getenv('CAPTION_TIMEOUT', '20')))
    translation_timeout: float = field(default_factory=lambda: float(os.getenv('TRANSLATION_TIMEOUT', '45')))
    cache_timeout: float = field(default_factory=lambda: float(os.getenv('CACHE_TIMEOUT', '5')))
    metadata_timeout: float = field(default_factory=lambda: float(os.getenv('METADATA_TIMEOUT', '10')))

# =============================================================================
# API KEYS
# =============================================================================

@dataclass
class APIKeysConfig:
    """External API credentials."""
    openai_api_key: Optional[str] = field(default_factory=lambda: os.getenv('OPENAI_API_KEY'))
    anthropic_api_key: Optional[str] = field(default_factory=lambda: os.getenv('ANTHROPIC_API_KEY'))
    gemini_api_key: Optional[str] = field(default_factory=lambda: os.getenv('GEMINI_API_KEY'))
    youtube_api_key: Optional[str] = field(default_factory=lambda: os.getenv('YOUTUBE_API_KEY'))

# =============================================================================
# TRANSCRIPT PIPELINE
# =============================================================================

@dataclass
class TranscriptConfig:
    """Caption fetching and translation settings."""
    batch_size: int = field(default_factory=lambda: int(os.getenv('TRANSLATION_BATCH_SIZE', '5')))
    max_concurrent_batches: int = field(default_factory=lambda: int(os.getenv('TRANSLATION_MAX_CONCURRENCY', '8')))
    caption_languages: List[str] = field(default_factory=lambda: _parse_list_env('CAPTION_LANGUAGES', ['en']))
    source_language: str = field(default_factory=lambda: os.getenv('SOURCE_LANGUAGE', 'en'))
    default_target_language: str = field(default_factory=lambda: os.getenv('DEFAULT_TARGET_LANGUAGE', 'es'))
    enable_placeholder_fallback: bool = field(default_factory=lambda: os.getenv('ENABLE_PLACEHOLDER_FALLBACK', 'true').lower() == 'true')

# =============================================================================
# MAIN CONFIGURATION CLASS
# =============================================================================

@dataclass
class Config:
    """Main configuration class that aggregates all configuration sections."""
    app: AppConfig = field(default_factory=AppConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    api: APIKeysConfig = field(default_factory=APIKeysConfig)
    transcript: TranscriptConfig = field(default_factory=TranscriptConfig)

# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def _parse_list_env(env_var: str, default: List[str]) -> List[str]:
    """Parse a comma-separated environment variable into a list."""
    value = os.getenv(env_var)
    if value:
        return [item.strip() for item in value.split(',') if item.strip()]
    return default

# =============================================================================
# GLOBAL CONFIGURATION INSTANCE
# =============================================================================

config = Config()

# =============================================================================
# CONFIGURATION VALIDATION
# =============================================================================

def validate_config(cfg: Optional[Config] = None) -> Tuple[bool, List[str]]:
    """
    Check the configuration for settings that degrade the pipeline.

    Nothing here is fatal: without an LLM key translation runs as a no-op,
    without Upstash credentials caching is process-local.

    Returns:
        Tuple of (is_valid, warnings)
    """
    cfg = cfg or config
    warnings = []

    if not any([cfg.api.openai_api_key, cfg.api.anthropic_api_key, cfg.api.gemini_api_key]):
        warnings.append('No LLM API key set (OPENAI_API_KEY, ANTHROPIC_API_KEY or GEMINI_API_KEY); translation disabled')

    if cfg.cache.backend == 'upstash' and not (cfg.cache.upstash_url and cfg.cache.upstash_token):
        warnings.append('CACHE_BACKEND=upstash but UPSTASH_REDIS_REST_URL/UPSTASH_REDIS_REST_TOKEN missing')

    if cfg.cache.backend not in ('auto', 'upstash', 'file', 'memory'):
        warnings.append(f"Unknown CACHE_BACKEND '{cfg.cache.backend}', falling back to in-process cache")

    if cfg.transcript.batch_size < 1:
        warnings.append('TRANSLATION_BATCH_SIZE must be positive')

    if not cfg.api.youtube_api_key:
        warnings.append('YOUTUBE_API_KEY not set; video info limited to oEmbed data')

    for warning in warnings:
        logging.getLogger("lingotube.config").warning(warning)

    return len(warnings) == 0, warnings
