"""Service for the consumer-facing transcript operations."""

import asyncio
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from ..core.comments import CommentFetcher, format_comments
from ..core.config import config
from ..core.exceptions import InvalidInputError
from ..core.formatter import OutputFormat, format_no_captions, format_transcript, format_video_info
from ..core.playlist import PlaylistFetcher
from ..core.rate_limiter import RateLimiter
from ..core.search import search_transcript
from ..core.transcript_fetcher import RobustTranscriptFetcher
from ..models import TranscriptResult
from ..utils.logging import get_logger
from ..utils.youtube_utils import extract_playlist_id, extract_video_id
from .batch_service import BatchProcessor

logger = get_logger("transcript_service")

LANGUAGE_CODE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$")

INVALID_URL_MESSAGE = (
    "Invalid YouTube URL. Supported formats: youtube.com/watch?v=, youtu.be/, "
    "youtube.com/shorts/, youtube.com/embed/, youtube.com/live/"
)
INVALID_PLAYLIST_MESSAGE = "Invalid YouTube playlist URL. Expected a URL containing list=<playlist id>."


class ResultStatus(str, Enum):
    OK = "ok"
    EMPTY_TRANSCRIPT = "empty_transcript"
    NO_MATCHES = "no_matches"
    PARTIAL_FAILURE = "partial_failure"


@dataclass
class ServiceResult:
    """Rendered output of an operation plus the outcome it describes."""
    content: str
    status: ResultStatus = ResultStatus.OK
    video_id: Optional[str] = None
    available_languages: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK


# =============================================================================
# VALIDATION
# =============================================================================

def _validate_url(url: str) -> str:
    if not isinstance(url, str) or not url.strip():
        raise InvalidInputError("A YouTube URL is required.")
    if len(url) > config.limits.max_url_length:
        raise InvalidInputError(f"URL is too long (max {config.limits.max_url_length} characters).")
    return url.strip()


def _require_video_id(url: str) -> str:
    video_id = extract_video_id(_validate_url(url))
    if not video_id:
        raise InvalidInputError(INVALID_URL_MESSAGE)
    return video_id


def _validate_lang(lang: str) -> str:
    if not isinstance(lang, str) or not LANGUAGE_CODE_PATTERN.match(lang):
        raise InvalidInputError(f"Invalid language code: {lang!r}.")
    return lang


def _validate_format(fmt: str) -> OutputFormat:
    try:
        return OutputFormat(fmt)
    except ValueError:
        choices = ", ".join(f.value for f in OutputFormat)
        raise InvalidInputError(f"Unknown format {fmt!r}. Expected one of: {choices}.")


def _validate_range(name: str, value: Optional[int], low: int, high: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise InvalidInputError(f"{name} must be an integer between {low} and {high}.")


class TranscriptService:
    """
    Entry point for every public operation.

    Each operation validates its inputs, then consults the rate limiter, and
    only then touches the network. Blocking fetches run in worker threads.
    """

    def __init__(
        self,
        fetcher: Optional[RobustTranscriptFetcher] = None,
        rate_limiter: Optional[RateLimiter] = None,
        batch_processor: Optional[BatchProcessor] = None,
        comment_fetcher: Optional[CommentFetcher] = None
    ):
        self.fetcher = fetcher or RobustTranscriptFetcher()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.batch_processor = batch_processor or BatchProcessor(
            fetcher=self.fetcher,
            playlist_fetcher=PlaylistFetcher(client=self.fetcher.client),
        )
        self.comment_fetcher = comment_fetcher or CommentFetcher(client=self.fetcher.client)
        logger.info("Initialized TranscriptService")

    async def _fetch(self, video_id: str, lang: str = "en") -> TranscriptResult:
        return await asyncio.to_thread(self.fetcher.fetch_transcript, video_id, lang)

    async def get_transcript(
        self,
        url: str,
        lang: str = "en",
        format: str = OutputFormat.CLEAN.value,
        max_tokens: Optional[int] = None
    ) -> ServiceResult:
        """
        Get the transcript of one video rendered in ``format``.

        Raises:
            InvalidInputError: Bad URL or parameter
            RateLimitedError: Too many calls in the current window
            UpstreamUnavailableError: Every fetch strategy failed
            VideoUnplayableError: The video is private, removed or otherwise unplayable
        """
        video_id = _require_video_id(url)
        lang = _validate_lang(lang)
        fmt = _validate_format(format)
        _validate_range("max_tokens", max_tokens, 1, config.limits.max_tokens_limit)
        self.rate_limiter.check()

        result = await self._fetch(video_id, lang)
        if result.is_empty:
            return ServiceResult(
                content=format_no_captions(result),
                status=ResultStatus.EMPTY_TRANSCRIPT,
                video_id=video_id,
                available_languages=result.available_languages,
            )
        return ServiceResult(
            content=format_transcript(result, video_id, lang, fmt, max_tokens),
            video_id=video_id,
            available_languages=result.available_languages,
        )

    async def get_video_info(self, url: str) -> ServiceResult:
        """Get metadata for a video without the transcript body."""
        video_id = _require_video_id(url)
        self.rate_limiter.check()

        result = await self._fetch(video_id)
        return ServiceResult(
            content=format_video_info(result),
            video_id=video_id,
            available_languages=result.available_languages,
        )

    async def get_transcripts(
        self,
        urls: Sequence[str],
        lang: str = "en",
        format: str = OutputFormat.CLEAN.value,
        max_tokens: Optional[int] = None
    ) -> ServiceResult:
        """Get transcripts for several videos; per-video failures are reported inline."""
        if isinstance(urls, str) or not urls:
            raise InvalidInputError("At least one URL is required.")
        if len(urls) > config.limits.max_batch_urls:
            raise InvalidInputError(f"Too many URLs (max {config.limits.max_batch_urls} per batch).")
        # Blank or malformed entries are reported per item by the batch run
        for url in urls:
            if isinstance(url, str) and len(url) > config.limits.max_url_length:
                raise InvalidInputError(f"URL is too long (max {config.limits.max_url_length} characters).")
        urls = [url.strip() if isinstance(url, str) else url for url in urls]
        lang = _validate_lang(lang)
        fmt = _validate_format(format)
        _validate_range("max_tokens", max_tokens, 1, config.limits.max_tokens_limit)
        self.rate_limiter.check()

        report = await self.batch_processor.run(urls, lang, fmt, max_tokens)
        status = ResultStatus.PARTIAL_FAILURE if report.failed else ResultStatus.OK
        return ServiceResult(content=report.render(), status=status)

    async def get_playlist(
        self,
        url: str,
        lang: str = "en",
        format: str = OutputFormat.CLEAN.value,
        max_tokens: Optional[int] = None
    ) -> ServiceResult:
        """Get transcripts for the first videos of a playlist."""
        playlist_id = extract_playlist_id(_validate_url(url))
        if not playlist_id:
            raise InvalidInputError(INVALID_PLAYLIST_MESSAGE)
        lang = _validate_lang(lang)
        fmt = _validate_format(format)
        _validate_range("max_tokens", max_tokens, 1, config.limits.max_tokens_limit)
        self.rate_limiter.check()

        report = await self.batch_processor.run_playlist(playlist_id, lang, fmt, max_tokens)
        if not report.items:
            return ServiceResult(content=f"Playlist {playlist_id} has no videos.", status=ResultStatus.EMPTY_TRANSCRIPT)
        status = ResultStatus.PARTIAL_FAILURE if report.failed else ResultStatus.OK
        return ServiceResult(content=report.render(), status=status)

    async def search_transcript(
        self,
        url: str,
        query: str,
        lang: str = "en",
        context_lines: int = 1
    ) -> ServiceResult:
        """Search a video's transcript for ``query`` and show matches with context."""
        video_id = _require_video_id(url)
        query = query.strip() if isinstance(query, str) else ""
        if not query or len(query) > config.limits.max_query_length:
            raise InvalidInputError(f"Query must be 1 to {config.limits.max_query_length} characters.")
        lang = _validate_lang(lang)
        _validate_range("context_lines", context_lines, 0, config.limits.max_context_lines)
        self.rate_limiter.check()

        result = await self._fetch(video_id, lang)
        if result.is_empty:
            return ServiceResult(
                content=format_no_captions(result),
                status=ResultStatus.EMPTY_TRANSCRIPT,
                video_id=video_id,
                available_languages=result.available_languages,
            )

        found = search_transcript(result, query, context_lines)
        return ServiceResult(
            content=found.render(),
            status=ResultStatus.OK if found.has_matches else ResultStatus.NO_MATCHES,
            video_id=video_id,
            available_languages=result.available_languages,
        )

    async def get_comments(self, url: str, count: int = 20) -> ServiceResult:
        """Get up to ``count`` top-level comments of a video."""
        video_id = _require_video_id(url)
        _validate_range("count", count, 1, config.limits.max_comments)
        self.rate_limiter.check()

        comments = await asyncio.to_thread(self.comment_fetcher.fetch, video_id, count)
        return ServiceResult(content=format_comments(video_id, comments), video_id=video_id)

    async def extract(self, url: str, lang: str = "en") -> TranscriptResult:
        """Structured transcript data for one video."""
        video_id = _require_video_id(url)
        lang = _validate_lang(lang)
        self.rate_limiter.check()
        return await self._fetch(video_id, lang)
