"""Data models for video-related information."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..utils.youtube_utils import build_watch_url, get_thumbnail_url


class TrackKind(Enum):
    """How a caption track was produced."""
    MANUAL = "manual"
    AUTO = "auto"


@dataclass(frozen=True)
class CaptionTrack:
    """A language-tagged caption stream exposed by a video."""
    language_code: str
    display_name: str
    kind: TrackKind
    source_url: str

    @property
    def is_auto(self) -> bool:
        return self.kind is TrackKind.AUTO

    @classmethod
    def from_innertube(cls, data: Dict[str, Any]) -> "CaptionTrack":
        """Build a track from a ``captionTracks`` entry of a player response."""
        code = data.get("languageCode") or ""
        name = data.get("name") or {}
        display_name = name.get("simpleText") or "".join(
            run.get("text", "") for run in name.get("runs") or []
        )
        return cls(
            language_code=code,
            display_name=display_name or code,
            kind=TrackKind.AUTO if data.get("kind") == "asr" else TrackKind.MANUAL,
            source_url=data.get("baseUrl") or "",
        )


@dataclass(frozen=True)
class TranscriptSegment:
    """Represents a single transcript segment with timing."""
    start: float
    duration: float
    text: str

    @property
    def end(self) -> float:
        """Calculate end time."""
        return self.start + self.duration

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "duration": self.duration, "text": self.text}


@dataclass(frozen=True)
class Chapter:
    """A timestamped chapter marker taken from a video description."""
    offset_seconds: int
    label: str


@dataclass(frozen=True)
class VideoInfo:
    """Represents YouTube video metadata."""
    video_id: str
    title: str = ""
    description: str = ""
    channel_name: str = ""
    duration_seconds: Optional[int] = None
    view_count: Optional[int] = None
    available_tracks: Tuple[CaptionTrack, ...] = ()
    chapters: Tuple[Chapter, ...] = ()

    @property
    def youtube_url(self) -> str:
        """Get the canonical watch URL."""
        return build_watch_url(self.video_id)

    @property
    def thumbnail_url(self) -> str:
        return get_thumbnail_url(self.video_id)


@dataclass(frozen=True)
class TranscriptResult:
    """Video metadata plus the ordered segments of the selected caption track."""
    video_info: VideoInfo
    segments: Tuple[TranscriptSegment, ...] = ()
    language: Optional[str] = None
    track: Optional[CaptionTrack] = None
    strategy: Optional[str] = None

    @property
    def video_id(self) -> str:
        return self.video_info.video_id

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def available_languages(self) -> List[str]:
        """Language codes of every track, without duplicates, in upstream order."""
        codes: List[str] = []
        for track in self.video_info.available_tracks:
            if track.language_code not in codes:
                codes.append(track.language_code)
        return codes

    @property
    def text(self) -> str:
        """All segment texts joined with single spaces."""
        return " ".join(" ".join(seg.text for seg in self.segments).split())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        info = self.video_info
        return {
            "video_id": info.video_id,
            "title": info.title,
            "description": info.description,
            "channel_name": info.channel_name,
            "duration_seconds": info.duration_seconds,
            "view_count": info.view_count,
            "thumbnail": info.thumbnail_url,
            "language": self.language,
            "available_languages": self.available_languages,
            "chapters": [
                {"offset_seconds": ch.offset_seconds, "label": ch.label}
                for ch in info.chapters
            ],
            "segments": [seg.to_dict() for seg in self.segments],
        }


@dataclass(frozen=True)
class PlaylistEntry:
    """One member of a playlist listing."""
    video_id: str
    title: str = ""


@dataclass(frozen=True)
class PlaylistListing:
    """A bounded playlist member list."""
    playlist_id: str
    title: str = ""
    entries: Tuple[PlaylistEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Comment:
    """A top-level video comment."""
    author: str
    text: str
    like_count: str = "0"
    published_time: str = ""
