"""Request and response models for the transcript routes."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from youtube_transcripts.core.formatter import OutputFormat
from youtube_transcripts.models import TranscriptResult
from youtube_transcripts.services.transcript_service import ServiceResult

from .base import SuccessResponse


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class VideoRequest(BaseModel):
    """A single video URL."""

    url: str = Field(..., description="YouTube video URL (watch, shorts, embed, youtu.be, live)")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _require_text(v)


class ExtractRequest(VideoRequest):
    """Structured transcript extraction request."""

    lang: str = Field(default="en", description="Preferred caption language code")


class TranscriptRequest(ExtractRequest):
    """Rendered transcript request."""

    format: OutputFormat = Field(default=OutputFormat.CLEAN, description="Output format")
    max_tokens: Optional[int] = Field(default=None, description="Approximate output token budget")


class BatchRequest(BaseModel):
    """Several videos rendered in one call."""

    urls: List[str] = Field(..., description="YouTube video URLs")
    lang: str = Field(default="en", description="Preferred caption language code")
    format: OutputFormat = Field(default=OutputFormat.CLEAN, description="Output format")
    max_tokens: Optional[int] = Field(default=None, description="Approximate token budget per video")


class PlaylistRequest(TranscriptRequest):
    """Playlist URL; ``url`` must carry a ``list=`` parameter."""


class SearchRequest(ExtractRequest):
    """Keyword search inside one transcript."""

    query: str = Field(..., description="Case-insensitive text to find")
    context_lines: int = Field(default=1, description="Segments shown around each match")


class CommentsRequest(VideoRequest):
    """Top-level comments request."""

    count: int = Field(default=20, description="Number of comments to return")


class ServiceResultData(BaseModel):
    """Rendered text output of an operation."""

    content: str
    status: str
    video_id: Optional[str] = None
    available_languages: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ServiceResult) -> "ServiceResultData":
        return cls(
            content=result.content,
            status=result.status.value,
            video_id=result.video_id,
            available_languages=result.available_languages,
        )


class TextResponse(SuccessResponse[ServiceResultData]):
    """Response wrapping rendered text output."""
    pass


class SegmentData(BaseModel):
    """One caption segment in seconds."""

    start: float
    duration: float
    text: str


class ExtractData(BaseModel):
    """Structured transcript of one video."""

    video_id: str
    title: str
    description: str
    channel_name: str
    thumbnail: str
    lang: str
    language: Optional[str] = None
    duration_seconds: Optional[int] = None
    view_count: Optional[int] = None
    available_languages: List[str] = Field(default_factory=list)
    chapters: List[Dict[str, Any]] = Field(default_factory=list)
    subtitles: List[SegmentData]

    @classmethod
    def from_result(cls, result: TranscriptResult, lang: str) -> "ExtractData":
        data = result.to_dict()
        segments = data.pop("segments")
        return cls(lang=lang, subtitles=[SegmentData(**seg) for seg in segments], **data)


class ExtractResponse(SuccessResponse[ExtractData]):
    """Response of the structured extraction route."""
    pass
