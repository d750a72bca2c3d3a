"""Transcript router."""

import logging
from typing import Awaitable
from fastapi import APIRouter, Depends

from youtube_transcripts.core.exceptions import TranscriptError
from youtube_transcripts.services.transcript_service import ServiceResult, TranscriptService

from ...api.models.transcript import (
    BatchRequest,
    CommentsRequest,
    ExtractData,
    ExtractRequest,
    ExtractResponse,
    PlaylistRequest,
    SearchRequest,
    ServiceResultData,
    TextResponse,
    TranscriptRequest,
    VideoRequest,
)
from ...dependencies import get_transcript_service
from ...exceptions import TranscriptNotFoundError, to_api_error

router = APIRouter()
logger = logging.getLogger(__name__)


async def _text_response(operation: Awaitable[ServiceResult]) -> TextResponse:
    try:
        result = await operation
    except TranscriptError as e:
        raise to_api_error(e) from e
    return TextResponse(data=ServiceResultData.from_result(result))


@router.post("/extract", response_model=ExtractResponse)
async def extract_transcript(
    request: ExtractRequest,
    service: TranscriptService = Depends(get_transcript_service)
):
    """
    Extract the structured transcript of a video.

    Returns 404 when the video has no usable captions.
    """
    try:
        result = await service.extract(request.url, request.lang)
    except TranscriptError as e:
        raise to_api_error(e) from e

    if result.is_empty:
        logger.info(f"No captions for {result.video_id}")
        raise TranscriptNotFoundError()
    return ExtractResponse(data=ExtractData.from_result(result, request.lang))


@router.post("", response_model=TextResponse)
async def get_transcript(
    request: TranscriptRequest,
    service: TranscriptService = Depends(get_transcript_service)
):
    """Get a video transcript rendered as clean text, timestamped lines, SRT or summary."""
    return await _text_response(
        service.get_transcript(request.url, request.lang, request.format.value, request.max_tokens)
    )


@router.post("/info", response_model=TextResponse)
async def get_video_info(
    request: VideoRequest,
    service: TranscriptService = Depends(get_transcript_service)
):
    """Get video metadata and available caption languages."""
    return await _text_response(service.get_video_info(request.url))


@router.post("/batch", response_model=TextResponse)
async def get_transcripts(
    request: BatchRequest,
    service: TranscriptService = Depends(get_transcript_service)
):
    """Get transcripts for several videos; failures are reported per video."""
    return await _text_response(
        service.get_transcripts(request.urls, request.lang, request.format.value, request.max_tokens)
    )


@router.post("/playlist", response_model=TextResponse)
async def get_playlist(
    request: PlaylistRequest,
    service: TranscriptService = Depends(get_transcript_service)
):
    """Get transcripts for the first videos of a playlist."""
    return await _text_response(
        service.get_playlist(request.url, request.lang, request.format.value, request.max_tokens)
    )


@router.post("/search", response_model=TextResponse)
async def search_transcript(
    request: SearchRequest,
    service: TranscriptService = Depends(get_transcript_service)
):
    """Search a transcript and show matches with surrounding context."""
    return await _text_response(
        service.search_transcript(request.url, request.query, request.lang, request.context_lines)
    )


@router.post("/comments", response_model=TextResponse)
async def get_comments(
    request: CommentsRequest,
    service: TranscriptService = Depends(get_transcript_service)
):
    """Get top-level comments of a video."""
    return await _text_response(service.get_comments(request.url, request.count))
