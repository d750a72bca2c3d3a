"""Base response models for the API."""

from datetime import datetime
from typing import Optional, TypeVar, Generic
from pydantic import BaseModel, Field


T = TypeVar('T')


class BaseResponse(BaseModel):
    """Base response model."""

    success: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    request_id: Optional[str] = None


class SuccessResponse(BaseResponse, Generic[T]):
    """Success response model."""

    success: bool = True
    data: T


class ErrorDetail(BaseModel):
    """Error response details."""

    code: str
    message: str


class ErrorResponseModel(BaseModel):
    """Error envelope returned for every failed request."""

    success: bool = False
    error: ErrorDetail


class HealthStatus(BaseModel):
    """Health check response model."""

    status: str
    message: str
    version: str


class HealthResponse(SuccessResponse[HealthStatus]):
    """Health check response model."""
    pass
