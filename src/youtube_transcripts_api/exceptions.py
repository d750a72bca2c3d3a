"""Custom exceptions for the FastAPI backend."""

from youtube_transcripts.core.exceptions import (
    InvalidInputError,
    RateLimitedError,
    TranscriptError,
    UpstreamUnavailableError,
    VideoUnplayableError,
)


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

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message
            }
        }


class ValidationError(APIError):
    """Invalid URL or out-of-range parameter."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=400,
            error_code="INVALID_INPUT"
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
    """The video exists but has no usable captions."""

    def __init__(self, detail: str = "No captions found for this video. It may not have subtitles available."):
        super().__init__(detail)
        self.error_code = "NO_CAPTIONS"


class RateLimitError(APIError):
    """Rate limit exceeded exception."""

    def __init__(self, detail: str = "Too many requests. Please wait a moment and try again."):
        super().__init__(
            detail=detail,
            status_code=429,
            error_code="RATE_LIMITED"
        )


class VideoUnavailableError(APIError):
    """YouTube reports the video as private, removed or otherwise unplayable."""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            status_code=422,
            error_code="VIDEO_UNPLAYABLE"
        )


class ExternalServiceError(APIError):
    """External service error exception."""

    def __init__(self, detail: str, service_name: str = "youtube"):
        super().__init__(
            detail=f"{service_name}: {detail}",
            status_code=502,
            error_code="UPSTREAM_UNAVAILABLE"
        )


class InternalServerError(APIError):
    """Internal server error exception."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            detail=detail,
            status_code=500,
            error_code="INTERNAL_ERROR"
        )


def to_api_error(exc: TranscriptError) -> APIError:
    """Map an engine error to the API error carrying its HTTP status."""
    if isinstance(exc, InvalidInputError):
        return ValidationError(exc.message)
    if isinstance(exc, RateLimitedError):
        return RateLimitError(exc.message)
    if isinstance(exc, VideoUnplayableError):
        return VideoUnavailableError(exc.reason)
    if isinstance(exc, UpstreamUnavailableError):
        return ExternalServiceError(exc.message)
    return InternalServerError(exc.message)
