"""Error taxonomy for the transcript pipeline."""


class LingoTubeError(Exception):
    """Base class for pipeline errors."""
    pass


class InvalidVideoIdError(LingoTubeError, ValueError):
    """The caller supplied a missing or blank video identifier."""
    pass


class CaptionsUnavailableError(LingoTubeError):
    """Captions could not be obtained for this video (any upstream cause)."""
    
    def __init__(self, video_id: str, reason: str = "unavailable"):
        self.video_id = video_id
        self.reason = reason
        super().__init__(f"Captions unavailable for {video_id}: {reason}")


class TranslationError(LingoTubeError):
    """A translation batch failed or could not be parsed."""
    pass


class CacheStoreError(LingoTubeError):
    """A cache backend could not complete a read or write."""
    pass


class TranscriptUnavailableError(LingoTubeError):
    """No source strategy produced any transcript data."""
    pass


class MetadataUnavailableError(LingoTubeError):
    """Video metadata could not be fetched."""
    pass


class VideoNotFoundError(MetadataUnavailableError):
    """The metadata provider does not know this video."""
    pass
