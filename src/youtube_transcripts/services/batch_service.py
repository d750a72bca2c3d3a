"""Service for transcript operations over several videos at once."""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from ..core.config import config
from ..core.exceptions import TranscriptError
from ..core.formatter import OutputFormat, format_transcript
from ..core.playlist import PlaylistFetcher
from ..core.transcript_fetcher import RobustTranscriptFetcher
from ..utils.logging import get_logger
from ..utils.youtube_utils import build_watch_url, extract_video_id

logger = get_logger("batch_service")

ITEM_SEPARATOR = "\n\n---\n\n"
EMPTY_URL_LABEL = "(empty URL)"


@dataclass
class BatchItem:
    """Outcome of one video in a batch."""
    url: str
    video_id: Optional[str] = None
    title: str = ""
    content: str = ""
    error: Optional[str] = None
    no_captions: bool = False
    available_languages: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.error is None and not self.no_captions

    @property
    def label(self) -> str:
        return str(self.url).strip() or EMPTY_URL_LABEL

    def render(self, index: int, total: int) -> str:
        heading = f"### [{index}/{total}] {self.title or self.video_id or self.label}"
        if self.error is not None:
            body = f"[ERROR] {self.label}: {self.error}"
        elif self.no_captions:
            hint = f" Available languages: {', '.join(self.available_languages)}" if self.available_languages else ""
            body = f"[NO CAPTIONS] {self.label}{hint}"
        else:
            body = self.content
        return f"{heading}\n\n{body}"


@dataclass
class BatchReport:
    """Ordered batch outcomes plus the rendered summary."""
    items: List[BatchItem]
    title: Optional[str] = None

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.items if item.succeeded)

    @property
    def failed(self) -> int:
        return len(self.items) - self.succeeded

    def render(self) -> str:
        total = len(self.items)
        header = f"Batch results: {total} videos ({self.succeeded} succeeded, {self.failed} failed)"
        if self.title:
            header = f"Playlist: {self.title}\n{header}"
        sections = [item.render(i, total) for i, item in enumerate(self.items, 1)]
        return ITEM_SEPARATOR.join([header] + sections)


class BatchProcessor:
    """
    Runs the single-video pipeline for many inputs concurrently.

    Items run in worker threads, at most ``concurrency`` at a time. A failure
    in one item is reported inline and never affects the others.
    """

    def __init__(
        self,
        fetcher: Optional[RobustTranscriptFetcher] = None,
        playlist_fetcher: Optional[PlaylistFetcher] = None,
        concurrency: Optional[int] = None
    ):
        self.fetcher = fetcher or RobustTranscriptFetcher()
        self.playlist_fetcher = playlist_fetcher or PlaylistFetcher(client=self.fetcher.client)
        self.concurrency = concurrency or config.limits.batch_concurrency

    def _process_one(
        self,
        url: str,
        lang: str,
        fmt: OutputFormat,
        max_tokens: Optional[int]
    ) -> BatchItem:
        video_id = extract_video_id(url)
        if not video_id:
            return BatchItem(url=url, error="Invalid YouTube URL")

        try:
            result = self.fetcher.fetch_transcript(video_id, lang)
        except TranscriptError as e:
            logger.warning(f"Batch item {video_id} failed: {e.message}")
            return BatchItem(url=url, video_id=video_id, error=e.message)

        title = result.video_info.title
        if result.is_empty:
            return BatchItem(
                url=url,
                video_id=video_id,
                title=title,
                no_captions=True,
                available_languages=result.available_languages,
            )
        content = format_transcript(result, video_id, lang, fmt, max_tokens)
        return BatchItem(url=url, video_id=video_id, title=title, content=content)

    async def _gather(
        self,
        urls: Sequence[str],
        lang: str,
        fmt: OutputFormat,
        max_tokens: Optional[int]
    ) -> List[BatchItem]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def run_item(url: str) -> BatchItem:
            async with semaphore:
                return await asyncio.to_thread(self._process_one, url, lang, fmt, max_tokens)

        outcomes: List[Union[BatchItem, BaseException]] = await asyncio.gather(
            *(run_item(url) for url in urls), return_exceptions=True
        )

        items = []
        for url, outcome in zip(urls, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Unexpected failure for {url}: {outcome}", exc_info=outcome)
                items.append(BatchItem(url=url, error=str(outcome) or type(outcome).__name__))
            else:
                items.append(outcome)
        return items

    async def run(
        self,
        urls: Sequence[str],
        lang: str = "en",
        fmt: OutputFormat = OutputFormat.CLEAN,
        max_tokens: Optional[int] = None
    ) -> BatchReport:
        """Fetch and format every URL, keeping input order."""
        logger.info(f"Processing batch of {len(urls)} videos (concurrency={self.concurrency})")
        items = await self._gather(urls, lang, OutputFormat(fmt), max_tokens)
        report = BatchReport(items=items)
        logger.info(f"Batch finished: {report.succeeded} succeeded, {report.failed} failed")
        return report

    async def run_playlist(
        self,
        playlist_id: str,
        lang: str = "en",
        fmt: OutputFormat = OutputFormat.CLEAN,
        max_tokens: Optional[int] = None
    ) -> BatchReport:
        """
        List a playlist and run the batch pipeline over its videos.

        Raises:
            UpstreamUnavailableError: If the playlist cannot be listed
        """
        listing = await asyncio.to_thread(self.playlist_fetcher.fetch, playlist_id)
        urls = [build_watch_url(entry.video_id) for entry in listing.entries]
        report = await self.run(urls, lang, fmt, max_tokens)
        report.title = listing.title or playlist_id
        return report
