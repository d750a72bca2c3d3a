"""Error kinds surfaced by the transcript engine."""


class TranscriptError(Exception):
    """Base class for transcript-related errors."""

    code = "TRANSCRIPT_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(TranscriptError):
    """Unparsable URL or out-of-bounds parameter. Raised before any network call."""

    code = "INVALID_INPUT"


class RateLimitedError(TranscriptError):
    """The rate limiter window ceiling was exceeded."""

    code = "RATE_LIMITED"

    def __init__(self, message: str = "Too many requests. Please wait a moment and try again."):
        super().__init__(message)


class UpstreamUnavailableError(TranscriptError):
    """Every fetch strategy was exhausted without a usable response."""

    code = "UPSTREAM_UNAVAILABLE"

    def __init__(self, message: str = "Could not retrieve video data."):
        super().__init__(message)


class VideoUnplayableError(TranscriptError):
    """YouTube reported a non-OK playability status (private, removed, ...)."""

    code = "VIDEO_UNPLAYABLE"

    def __init__(self, reason: str, status: str = "UNPLAYABLE"):
        self.reason = reason
        self.status = status
        super().__init__(reason)
