"""Configuration management for the FastAPI backend."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

load_dotenv()


@dataclass
class APIConfig:
    """API configuration settings."""

    # Core API settings
    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("API_PORT", "8000"))
    debug: bool = os.getenv("API_DEBUG", "false").lower() == "true"

    # CORS settings
    cors_origins: List[str] = None

    # Application metadata
    title: str = os.getenv("API_TITLE", "LingoTube API")
    description: str = "Bilingual transcripts for YouTube videos"
    version: str = os.getenv("APP_VERSION", "0.1.0")

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "development")

    # Request settings
    request_timeout: int = int(os.getenv("API_REQUEST_TIMEOUT", "120"))

    # Logging
    log_level: str = os.getenv("API_LOG_LEVEL", "INFO")

    def __post_init__(self):
        """Post-initialization processing."""
        if self.cors_origins is None:
            origins_str = os.getenv("API_CORS_ORIGINS", "http://localhost:3000")
            self.cors_origins = [origin.strip() for origin in origins_str.split(",") if origin.strip()]

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.port < 1 or self.port > 65535:
            errors.append("API_PORT must be between 1 and 65535")

        if self.request_timeout < 1:
            errors.append("API_REQUEST_TIMEOUT must be positive")

        return errors


@lru_cache()
def get_api_config() -> APIConfig:
    """Get validated API configuration."""
    config = APIConfig()

    errors = config.validate()
    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return config
