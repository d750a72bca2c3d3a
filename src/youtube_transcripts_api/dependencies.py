"""FastAPI dependencies for service injection."""

from functools import lru_cache

from youtube_transcripts.core.rate_limiter import RateLimiter
from youtube_transcripts.services.transcript_service import TranscriptService

from .config import get_api_config


@lru_cache()
def get_transcript_service() -> TranscriptService:
    """
    Get the process-wide TranscriptService.

    Per-client limits are enforced by the middleware; the service keeps a
    higher ceiling shared by every client.
    """
    config = get_api_config()
    return TranscriptService(rate_limiter=RateLimiter(
        max_requests=config.service_rate_limit_requests,
        window_seconds=config.rate_limit_window
    ))
