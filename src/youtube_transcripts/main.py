#!/usr/bin/env python3
"""
YouTube Transcripts CLI
Command-line interface for transcript, metadata, search and comment retrieval.
"""

import sys
import asyncio
import argparse
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .core.config import APP_VERSION, config, setup_logging
from .core.exceptions import TranscriptError
from .core.formatter import OutputFormat
from .services.transcript_service import ResultStatus, ServiceResult, TranscriptService
from .utils.logging import get_logger, set_log_level

logger = get_logger("cli")

console = Console()
error_console = Console(stderr=True)

FORMAT_CHOICES = [fmt.value for fmt in OutputFormat]


def _add_render_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lang", default="en", help="Preferred caption language code (default: en)")
    parser.add_argument("--format", default=OutputFormat.CLEAN.value, choices=FORMAT_CHOICES, help="Output format")
    parser.add_argument("--max-tokens", type=int, default=None, help="Approximate token budget for the output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="youtube-transcripts",
        description="Fetch YouTube transcripts and metadata for people and language models."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    transcript = subparsers.add_parser("transcript", help="Get the transcript of a video")
    transcript.add_argument("url", help="YouTube video URL")
    _add_render_options(transcript)

    info = subparsers.add_parser("info", help="Get video metadata without the transcript")
    info.add_argument("url", help="YouTube video URL")

    batch = subparsers.add_parser("batch", help="Get transcripts for several videos")
    batch.add_argument("urls", nargs="+", help=f"Up to {config.limits.max_batch_urls} YouTube video URLs")
    _add_render_options(batch)

    playlist = subparsers.add_parser("playlist", help="Get transcripts for the videos of a playlist")
    playlist.add_argument("url", help="YouTube playlist URL")
    _add_render_options(playlist)

    search = subparsers.add_parser("search", help="Search a transcript for a keyword")
    search.add_argument("url", help="YouTube video URL")
    search.add_argument("query", help="Text to search for (case-insensitive)")
    search.add_argument("--lang", default="en", help="Preferred caption language code (default: en)")
    search.add_argument("--context", type=int, default=1, dest="context_lines",
                        help="Segments shown before and after each match (default: 1)")

    comments = subparsers.add_parser("comments", help="Get top-level comments of a video")
    comments.add_argument("url", help="YouTube video URL")
    comments.add_argument("--count", type=int, default=20, help="Number of comments (default: 20)")

    return parser


async def run_command(args: argparse.Namespace, service: TranscriptService) -> ServiceResult:
    """Dispatch parsed arguments to the matching service operation."""
    if args.command == "transcript":
        return await service.get_transcript(args.url, args.lang, args.format, args.max_tokens)
    if args.command == "info":
        return await service.get_video_info(args.url)
    if args.command == "batch":
        return await service.get_transcripts(args.urls, args.lang, args.format, args.max_tokens)
    if args.command == "playlist":
        return await service.get_playlist(args.url, args.lang, args.format, args.max_tokens)
    if args.command == "search":
        return await service.search_transcript(args.url, args.query, args.lang, args.context_lines)
    if args.command == "comments":
        return await service.get_comments(args.url, args.count)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None, service: Optional[TranscriptService] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        config.logging.level = "DEBUG"
        set_log_level("DEBUG")
    setup_logging()

    service = service or TranscriptService()
    try:
        result = asyncio.run(run_command(args, service))
    except TranscriptError as e:
        logger.debug(f"{args.command} failed with {e.code}")
        error_console.print(Panel(Text(e.message), title=f"[bold red]Error: {e.code}[/bold red]", border_style="red"))
        return 1

    # Printed literally and unwrapped so SRT and timestamped output stay intact
    console.print(result.content, markup=False, highlight=False, soft_wrap=True)
    if result.status is ResultStatus.EMPTY_TRANSCRIPT:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
