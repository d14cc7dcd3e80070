"""Utilities for language code handling."""

from typing import Dict, Optional
import logging

logger = logging.getLogger("lingotube.utils.language")

# ISO 639-1 codes offered as translation targets
SUPPORTED_LANGUAGES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "ru": "Russian",
    "ar": "Arabic",
    "hi": "Hindi",
    "pt": "Portuguese",
    "it": "Italian",
    "nl": "Dutch",
    "tr": "Turkish",
    "pl": "Polish",
    "vi": "Vietnamese",
    "th": "Thai",
    "id": "Indonesian",
    "sv": "Swedish",
    "fi": "Finnish",
    "no": "Norwegian",
    "da": "Danish",
    "cs": "Czech",
    "el": "Greek",
    "he": "Hebrew",
    "hu": "Hungarian",
    "ro": "Romanian",
    "uk": "Ukrainian",
    "fa": "Persian",
    "ms": "Malay",
    "ta": "Tamil",
    "bn": "Bengali",
    "ur": "Urdu"
}

# Regional variants folded onto their base code
_LANGUAGE_ALIASES = {"zh-hans": "zh", "zh-hant": "zh", "pt-br": "pt", "pt-pt": "pt"}


def normalize_language_code(code: Optional[str]) -> Optional[str]:
    """
    Normalize a language tag to a bare lowercase ISO 639-1 code.
    
    "es-MX" -> "es", "zh-Hans" -> "zh", "" -> None.
    """
    if not code:
        return None
    c = code.lower().strip().replace("_", "-")
    if c in _LANGUAGE_ALIASES:
        return _LANGUAGE_ALIASES[c]
    return c.split("-")[0] or None


def validate_language_code(language_code: str) -> bool:
    """
    Validate if a language code is supported.
    
    Args:
        language_code: ISO 639-1 language code (regional variants accepted)
        
    Returns:
        True if language code is valid, False otherwise
    """
    return normalize_language_code(language_code) in SUPPORTED_LANGUAGES


def get_language_name(language_code: str) -> Optional[str]:
    """Get language name from language code, or None if unknown."""
    return SUPPORTED_LANGUAGES.get(normalize_language_code(language_code))
