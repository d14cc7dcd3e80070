"""Custom exceptions for the FastAPI backend."""

import json
from typing import Any, Dict


class APIError(Exception):
    """Base API exception class."""

    def __init__(
        self,
        detail: str,
        status_code: int = 500,
        error_code: str = "API_ERROR"
    ):
        self.detail = detail
        self.message = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message
            }
        }

    def to_json(self) -> str:
        """Convert error to JSON string."""
        return json.dumps(self.to_dict())


class ValidationError(APIError):
    """Validation error exception."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=400,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(APIError):
    """Resource not found exception."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            detail=detail,
            status_code=404,
            error_code="NOT_FOUND"
        )


class TranscriptNotFoundError(NotFoundError):
    """Transcript not found exception."""

    def __init__(self, detail: str = "Transcript not available for this video"):
        super().__init__(detail)
        self.error_code = "TRANSCRIPT_NOT_FOUND"


class ExternalServiceError(APIError):
    """External service error exception."""

    def __init__(self, detail: str, service_name: str = "external"):
        super().__init__(
            detail=f"{service_name}: {detail}",
            status_code=502,
            error_code="EXTERNAL_SERVICE_ERROR"
        )


class CacheError(APIError):
    """Cache operation error."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=500,
            error_code="CACHE_ERROR"
        )


class InternalServerError(APIError):
    """Internal server error exception."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            detail=detail,
            status_code=500,
            error_code="INTERNAL_ERROR"
        )
