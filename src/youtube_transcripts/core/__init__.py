"""Core modules for transcript retrieval and rendering."""

from .config import config
from .exceptions import (
    InvalidInputError,
    RateLimitedError,
    TranscriptError,
    UpstreamUnavailableError,
    VideoUnplayableError,
)
from .formatter import OutputFormat, format_transcript
from .rate_limiter import KeyedRateLimiter, RateLimiter
from .transcript_fetcher import DEFAULT_STRATEGIES, FetchStrategy, RobustTranscriptFetcher
from .youtube_client import YouTubeClient

__all__ = [
    'config',
    'InvalidInputError',
    'RateLimitedError',
    'TranscriptError',
    'UpstreamUnavailableError',
    'VideoUnplayableError',
    'OutputFormat',
    'format_transcript',
    'KeyedRateLimiter',
    'RateLimiter',
    'DEFAULT_STRATEGIES',
    'FetchStrategy',
    'RobustTranscriptFetcher',
    'YouTubeClient',
]
