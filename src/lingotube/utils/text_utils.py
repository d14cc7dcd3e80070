"""Text helpers for caption cues."""

import re

_WHITESPACE = re.compile(r"\s+")

DIFFICULTY_BEGINNER = "beginner"
DIFFICULTY_INTERMEDIATE = "intermediate"
DIFFICULTY_ADVANCED = "advanced"


def clean_caption_text(text: str) -> str:
    """Collapse line breaks and runs of whitespace, strip the ends."""
    if not text:
        return ""
    text = text.replace("\u200b", "")
    return _WHITESPACE.sub(" ", text).strip()


def estimate_difficulty(text: str) -> str:
    """
    Rough reading level of a caption line.
    
    Based on average word length and the share of long (9+ letter) words.
    """
    words = [w for w in (text or "").lower().split(" ") if w]
    if not words:
        return DIFFICULTY_BEGINNER
    
    avg_word_length = sum(len(w) for w in words) / len(words)
    complexity_ratio = sum(1 for w in words if len(w) > 8) / len(words)
    
    if complexity_ratio > 0.25 or avg_word_length > 6:
        return DIFFICULTY_ADVANCED
    if complexity_ratio > 0.1 or avg_word_length > 4.5:
        return DIFFICULTY_INTERMEDIATE
    return DIFFICULTY_BEGINNER
