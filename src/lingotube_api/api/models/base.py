"""Base response models for the API."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    """Base response model."""

    success: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    request_id: Optional[str] = None


class ErrorDetail(BaseModel):
    """Error response details."""

    code: str
    message: str


class ErrorResponseModel(BaseModel):
    """Error response model."""

    success: bool = False
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    version: str
    timestamp: datetime = Field(default_factory=datetime.now)
    dependencies: Dict[str, str] = Field(default_factory=dict)
