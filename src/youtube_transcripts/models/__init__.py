"""Data models for YouTube transcripts."""

from .video_data import (
    CaptionTrack,
    Chapter,
    Comment,
    PlaylistEntry,
    PlaylistListing,
    TrackKind,
    TranscriptResult,
    TranscriptSegment,
    VideoInfo,
)

__all__ = [
    "CaptionTrack",
    "Chapter",
    "Comment",
    "PlaylistEntry",
    "PlaylistListing",
    "TrackKind",
    "TranscriptResult",
    "TranscriptSegment",
    "VideoInfo",
]
