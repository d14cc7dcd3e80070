"""Transcript models for the API."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from lingotube.models import Transcript, TranscriptSegment, TranscriptSource
from lingotube.utils.language_utils import normalize_language_code, validate_language_code


def _check_language(v: str) -> str:
    if not validate_language_code(v):
        raise ValueError(f"Unsupported language code: {v}")
    return normalize_language_code(v)


class SegmentModel(BaseModel):
    """One bilingual transcript segment."""

    start: float = Field(..., ge=0, description="Start time in seconds")
    end: float = Field(..., gt=0, description="End time in seconds")
    source_text: str = Field(..., min_length=1)
    translated_text: Optional[str] = None
    difficulty: Optional[str] = None

    @classmethod
    def from_segment(cls, segment: TranscriptSegment) -> "SegmentModel":
        return cls(**segment.to_dict())

    def to_segment(self) -> TranscriptSegment:
        return TranscriptSegment(
            start=self.start,
            end=self.end,
            source_text=self.source_text,
            translated_text=self.translated_text or self.source_text,
            difficulty=self.difficulty
        )


class TranscriptRequest(BaseModel):
    """Transcript request model; either video_id or youtube_url identifies the video."""

    video_id: Optional[str] = Field(default=None, description="YouTube video ID")
    youtube_url: Optional[str] = Field(default=None, description="YouTube video URL")
    target_language: str = Field(default="es", description="ISO 639-1 target language")

    @field_validator("target_language")
    @classmethod
    def validate_target_language(cls, v):
        return _check_language(v)


class TranscriptResponse(BaseModel):
    """Bilingual transcript response."""

    video_id: str
    source: str = Field(..., description="captions, generated-fallback or cache")
    origin: str = Field(..., description="Source that originally produced the segments")
    language: str
    total_segments: int
    transcript: List[SegmentModel]

    @classmethod
    def from_transcript(cls, transcript: Transcript) -> "TranscriptResponse":
        return cls(
            video_id=transcript.video_id,
            source=transcript.source_label.value,
            origin=transcript.origin.value,
            language=transcript.target_language,
            total_segments=transcript.total_segments,
            transcript=[SegmentModel.from_segment(seg) for seg in transcript.segments]
        )


class CachedTranscriptResponse(BaseModel):
    """Cached transcript lookup response."""

    video_id: str
    cached: bool = True
    origin: str
    language: str
    transcript: List[SegmentModel]


class CacheTranscriptRequest(BaseModel):
    """Request to store a ready-made transcript."""

    video_id: str = Field(..., min_length=1)
    transcript: List[SegmentModel] = Field(..., min_length=1)
    target_language: str = Field(default="es")
    source: str = Field(default=TranscriptSource.CAPTIONS.value)

    @field_validator("video_id")
    @classmethod
    def validate_video_id(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("video_id must not be blank")
        return v

    @field_validator("target_language")
    @classmethod
    def validate_target_language(cls, v):
        return _check_language(v)

    @field_validator("source")
    @classmethod
    def validate_source(cls, v):
        allowed = {TranscriptSource.CAPTIONS.value, TranscriptSource.GENERATED_FALLBACK.value}
        if v not in allowed:
            raise ValueError(f"source must be one of {sorted(allowed)}")
        return v

    def to_transcript(self) -> Transcript:
        return Transcript(
            video_id=self.video_id,
            segments=[seg.to_segment() for seg in self.transcript],
            source_label=TranscriptSource(self.source),
            target_language=self.target_language
        )


class CacheTranscriptResponse(BaseModel):
    """Result of storing a transcript."""

    success: bool = True
    video_id: str
    total_segments: int
