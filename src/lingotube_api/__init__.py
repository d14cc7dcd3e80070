"""HTTP API for bilingual YouTube transcripts."""

__version__ = "0.1.0"
