"""
Rendering of transcripts into text.

Four output formats are supported (clean prose, timestamped lines, SRT and a
chapter-chunked summary). Any of them can be bounded by an approximate token
budget, using the usual four-characters-per-token estimate.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..models import Chapter, TranscriptResult, TranscriptSegment
from ..utils.youtube_utils import build_watch_url

CHARS_PER_TOKEN = 4
SUMMARY_WINDOW_SECONDS = 120
TRUNCATION_BACKOFF_RATIO = 0.8


class OutputFormat(str, Enum):
    """Supported transcript renderings."""
    CLEAN = "clean"
    TIMESTAMPED = "timestamped"
    SRT = "srt"
    SUMMARY = "summary"


@dataclass(frozen=True)
class Section:
    """A span of the transcript rendered under one heading in summary mode."""
    start: float
    end: Optional[float]
    label: str
    text: str


# =============================================================================
# SMALL FORMATTERS
# =============================================================================

def estimate_tokens(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def format_timestamp(seconds: float) -> str:
    """Format seconds as ``H:MM:SS`` or ``M:SS``."""
    if seconds is None or seconds < 0:
        return "0:00"
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_srt_time(seconds: float) -> str:
    """
    Format seconds to SRT time format (HH:MM:SS,mmm).

    Args:
        seconds: Time in seconds

    Returns:
        Formatted time string
    """
    total_ms = int(round(max(seconds, 0) * 1000))
    hours, remainder = divmod(total_ms, 3600000)
    minutes, remainder = divmod(remainder, 60000)
    secs, milliseconds = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{milliseconds:03d}"


def format_duration(total_seconds: Optional[int]) -> str:
    """Human duration such as ``1h 2m 3s``."""
    if total_seconds is None:
        return "unknown"
    hours, remainder = divmod(int(total_seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def flatten_text(segments: Sequence[TranscriptSegment]) -> str:
    """Join segment texts with single spaces, collapsing inner whitespace."""
    return " ".join(" ".join(seg.text for seg in segments).split())


def _title_header(title: str) -> str:
    return f"{title}\n{'=' * len(title)}\n\n" if title else ""


# =============================================================================
# FORMAT MODES
# =============================================================================

def render_clean(result: TranscriptResult, video_id: str, lang: Optional[str] = None) -> str:
    """Flowing text prefixed by a metadata block, meant for LLM input."""
    info = result.video_info
    text = flatten_text(result.segments)

    lines = []
    if info.title:
        lines.append(f'Video: "{info.title}"')
    if info.channel_name:
        lines.append(f"Channel: {info.channel_name}")
    lines.append(f"Source: {build_watch_url(video_id)}")
    if info.duration_seconds is not None:
        lines.append(f"Duration: {format_duration(info.duration_seconds)}")
    if info.view_count is not None:
        lines.append(f"Views: {info.view_count:,}")
    caption_language = result.language or lang
    if caption_language:
        lines.append(f"Caption language: {caption_language}")
    lines.append(f"Segments: {len(result.segments)}")
    lines.append(f"Approximate tokens: ~{estimate_tokens(text)}")
    lines.append("")
    lines.append(text)
    return "\n".join(lines)


def render_timestamped(result: TranscriptResult, video_id: str) -> str:
    """One line per segment with a deep link to its start second."""
    lines = [
        f"[{format_timestamp(seg.start)}]({build_watch_url(video_id, seg.start)}) {seg.text}"
        for seg in result.segments
    ]
    return _title_header(result.video_info.title) + "\n".join(lines)


def render_srt(result: TranscriptResult) -> str:
    """Convert segments to SubRip format."""
    blocks = []
    for index, seg in enumerate(result.segments, 1):
        blocks.append(
            f"{index}\n{format_srt_time(seg.start)} --> {format_srt_time(seg.end)}\n{seg.text}"
        )
    return "\n\n".join(blocks)


def _chapter_sections(segments: Sequence[TranscriptSegment], chapters: Sequence[Chapter]) -> List[Section]:
    sections = []
    for index, chapter in enumerate(chapters):
        start = chapter.offset_seconds
        end = chapters[index + 1].offset_seconds if index + 1 < len(chapters) else None
        members = [
            seg for seg in segments
            if seg.start >= start and (end is None or seg.start < end)
        ]
        sections.append(Section(start=start, end=end, label=chapter.label, text=flatten_text(members)))
    return sections


def _window_sections(segments: Sequence[TranscriptSegment], window: float) -> List[Section]:
    sections = []
    group: List[TranscriptSegment] = []
    window_start = 0.0
    for seg in segments:
        if group and seg.start >= window_start + window:
            sections.append(Section(window_start, window_start + window, "", flatten_text(group)))
            group = []
        if not group:
            window_start = seg.start
        group.append(seg)
    if group:
        sections.append(Section(window_start, window_start + window, "", flatten_text(group)))
    return sections


def build_sections(result: TranscriptResult, window: float = SUMMARY_WINDOW_SECONDS) -> List[Section]:
    """Split a transcript by chapters when present, else into fixed time windows."""
    chapters = result.video_info.chapters
    if chapters:
        return _chapter_sections(result.segments, chapters)
    return _window_sections(result.segments, window)


def render_summary(result: TranscriptResult) -> str:
    """Render the transcript as headed sections."""
    sections = build_sections(result)
    source = "chapters from the video description" if result.video_info.chapters else \
        f"{SUMMARY_WINDOW_SECONDS}-second windows"

    parts = [f"Sections: {len(sections)} ({source})"]
    for section in sections:
        if section.label:
            heading = f"## [{format_timestamp(section.start)}] {section.label}"
        else:
            heading = f"## [{format_timestamp(section.start)} - {format_timestamp(section.end)}]"
        parts.append(f"{heading}\n{section.text or '(no captions in this section)'}")
    return _title_header(result.video_info.title) + "\n\n".join(parts)


# =============================================================================
# TRUNCATION AND DISPATCH
# =============================================================================

def truncate_to_budget(text: str, max_tokens: Optional[int]) -> str:
    """
    Bound ``text`` to roughly ``max_tokens`` tokens.

    The cut backs off to the last whitespace when that keeps at least 80% of
    the character budget, and a notice naming the budget is appended.
    """
    if not max_tokens:
        return text
    limit = max_tokens * CHARS_PER_TOKEN
    if len(text) <= limit:
        return text

    cut = text[:limit]
    boundary = max(cut.rfind(" "), cut.rfind("\n"))
    if boundary > limit * TRUNCATION_BACKOFF_RATIO:
        cut = cut[:boundary]
    return (
        f"{cut.rstrip()}\n\n"
        f"[Truncated to ~{max_tokens} tokens. Full output was ~{estimate_tokens(text)} tokens.]"
    )


def format_transcript(
    result: TranscriptResult,
    video_id: str,
    lang: Optional[str] = None,
    fmt: OutputFormat = OutputFormat.CLEAN,
    max_tokens: Optional[int] = None
) -> str:
    """Render a transcript in the requested format and apply the token budget."""
    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.TIMESTAMPED:
        output = render_timestamped(result, video_id)
    elif fmt is OutputFormat.SRT:
        output = render_srt(result)
    elif fmt is OutputFormat.SUMMARY:
        output = render_summary(result)
    else:
        output = render_clean(result, video_id, lang)
    return truncate_to_budget(output, max_tokens)


def format_no_captions(result: TranscriptResult) -> str:
    """Message for a valid video without usable captions."""
    languages = result.available_languages
    hint = f". Available languages: {', '.join(languages)}" if languages else ""
    return f"No captions found for this video{hint}"


def format_video_info(result: TranscriptResult) -> str:
    """Metadata-only rendering of a video."""
    info = result.video_info
    lines = [f"Title: {info.title or 'Unknown'}"]
    if info.channel_name:
        lines.append(f"Channel: {info.channel_name}")
    lines.append(f"URL: {info.youtube_url}")
    if info.duration_seconds is not None:
        lines.append(f"Duration: {format_duration(info.duration_seconds)}")
    if info.view_count is not None:
        lines.append(f"Views: {info.view_count:,}")
    if info.description:
        lines.extend(["", "Description:", info.description])
    if info.chapters:
        lines.extend(["", "Chapters:"])
        lines.extend(f"  {format_timestamp(ch.offset_seconds)} {ch.label}" for ch in info.chapters)
    if info.available_tracks:
        captions = ", ".join(
            f"{t.display_name} ({t.language_code}{', auto' if t.is_auto else ''})"
            for t in info.available_tracks
        )
        lines.extend(["", f"Available captions: {captions}"])
    lines.append("")
    count = len(result.segments)
    lines.append(f"Has transcript: {'Yes' if count else 'No'} ({count} segments)")
    return "\n".join(lines)
