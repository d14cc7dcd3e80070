"""Data models for bilingual transcripts."""

import json
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict, Any

from ..utils.text_utils import estimate_difficulty


class TranscriptSource(str, Enum):
    """Provenance of a transcript returned by the pipeline."""
    CAPTIONS = "captions"
    GENERATED_FALLBACK = "generated-fallback"
    CACHE = "cache"


@dataclass(frozen=True)
class CaptionCue:
    """One normalized caption unit, before translation."""
    start: float
    end: float
    text: str

    @property
    def duration(self) -> float:
        """Cue length in seconds."""
        return round(self.end - self.start, 1)


@dataclass(frozen=True)
class TranscriptSegment:
    """Represents a single bilingual transcript segment with timing."""
    start: float
    end: float
    source_text: str
    translated_text: str
    difficulty: Optional[str] = None

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Segment start must be non-negative, got {self.start}")
        if self.end <= self.start:
            raise ValueError(f"Segment end ({self.end}) must be after start ({self.start})")
        if not self.source_text:
            raise ValueError("Segment source_text must not be empty")
        if not self.translated_text:
            # Untranslated segments carry their source text
            object.__setattr__(self, "translated_text", self.source_text)
        if self.difficulty is None:
            object.__setattr__(self, "difficulty", estimate_difficulty(self.source_text))

    @property
    def is_translated(self) -> bool:
        """True when the segment carries text different from its source."""
        return self.translated_text != self.source_text

    @property
    def timestamp_str(self) -> str:
        """Get formatted timestamp string."""
        minutes, seconds = divmod(int(self.start), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "source_text": self.source_text,
            "translated_text": self.translated_text,
            "difficulty": self.difficulty,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranscriptSegment":
        return cls(
            start=float(data["start"]),
            end=float(data["end"]),
            source_text=str(data["source_text"]),
            translated_text=str(data.get("translated_text") or data["source_text"]),
            difficulty=data.get("difficulty"),
        )


@dataclass(frozen=True)
class Transcript:
    """
    An ordered, time-aligned bilingual transcript for one video.

    ``source_label`` describes how this particular result was obtained
    (``cache`` on a hit), while ``origin`` always names the source that
    originally produced the segments (``captions`` or ``generated-fallback``).
    """
    video_id: str
    segments: List[TranscriptSegment]
    source_label: TranscriptSource
    target_language: str
    origin: Optional[TranscriptSource] = None
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not self.video_id:
            raise ValueError("Transcript video_id must not be empty")
        object.__setattr__(self, "segments", list(self.segments))
        object.__setattr__(self, "source_label", TranscriptSource(self.source_label))
        if self.origin is None:
            object.__setattr__(self, "origin", self.source_label)
        else:
            object.__setattr__(self, "origin", TranscriptSource(self.origin))

    @property
    def is_fallback(self) -> bool:
        """True when the segments are placeholder filler, not real captions."""
        return self.origin == TranscriptSource.GENERATED_FALLBACK

    @property
    def total_segments(self) -> int:
        return len(self.segments)

    @property
    def duration(self) -> float:
        """End time of the last segment in seconds."""
        return self.segments[-1].end if self.segments else 0.0

    def as_cached(self) -> "Transcript":
        """Copy of this transcript labelled as served from cache."""
        return replace(self, source_label=TranscriptSource.CACHE)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "video_id": self.video_id,
            "source_label": self.source_label.value,
            "origin": self.origin.value,
            "target_language": self.target_language,
            "created_at": self.created_at.isoformat(),
            "segments": [seg.to_dict() for seg in self.segments],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, sort_keys=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transcript":
        """
        Create from dictionary.

        Raises:
            TypeError/ValueError/KeyError: If the payload is not a complete transcript
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected dictionary, got {type(data)}")

        if "video_id" not in data:
            raise ValueError("Missing required field 'video_id' in data")

        segments = data.get("segments")
        if not isinstance(segments, list) or not segments:
            raise ValueError("Transcript payload has no segments")

        created_at = data.get("created_at")
        return cls(
            video_id=data["video_id"],
            segments=[TranscriptSegment.from_dict(seg) for seg in segments],
            source_label=TranscriptSource(data["source_label"]),
            target_language=data["target_language"],
            origin=TranscriptSource(data["origin"]) if data.get("origin") else None,
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
        )

    @classmethod
    def from_json(cls, payload: str) -> "Transcript":
        return cls.from_dict(json.loads(payload))
