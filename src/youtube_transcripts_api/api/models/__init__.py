"""API models package."""

from .base import BaseResponse, SuccessResponse, ErrorResponseModel, HealthResponse, HealthStatus
from .transcript import (
    BatchRequest,
    CommentsRequest,
    ExtractData,
    ExtractRequest,
    ExtractResponse,
    PlaylistRequest,
    SearchRequest,
    ServiceResultData,
    TextResponse,
    TranscriptRequest,
    VideoRequest,
)

__all__ = [
    # Base models
    "BaseResponse",
    "SuccessResponse",
    "ErrorResponseModel",
    "HealthResponse",
    "HealthStatus",

    # Transcript models
    "BatchRequest",
    "CommentsRequest",
    "ExtractData",
    "ExtractRequest",
    "ExtractResponse",
    "PlaylistRequest",
    "SearchRequest",
    "ServiceResultData",
    "TextResponse",
    "TranscriptRequest",
    "VideoRequest",
]
