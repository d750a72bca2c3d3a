"""Pytest configuration and shared fixtures for the transcript engine tests."""

import os
import sys
import pytest
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

# Add the src directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

# Set test environment variables before importing the packages
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["API_DEBUG"] = "true"
os.environ["ENVIRONMENT"] = "test"

from youtube_transcripts.core.rate_limiter import RateLimiter
from youtube_transcripts.models import (
    CaptionTrack,
    Chapter,
    TrackKind,
    TranscriptResult,
    TranscriptSegment,
    VideoInfo,
)


VIDEO_ID = "dQw4w9WgXcQ"
VIDEO_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"

SRV3_PAYLOAD = (
    '<?xml version="1.0" encoding="utf-8" ?><timedtext format="3"><body>'
    '<p t="0" d="1500">Hello &amp; welcome</p>'
    '<p t="1500" d="2250">to the <s ac="0">show</s></p>'
    '<p t="3750" d="1000">   </p>'
    '</body></timedtext>'
)

TIMEDTEXT_PAYLOAD = (
    '<?xml version="1.0" encoding="utf-8" ?><transcript>'
    '<text start="0.5" dur="2">first line</text>'
    '<text start="2.5" dur="1.25">second\nline</text>'
    '</transcript>'
)


def make_caption_track_data(
    language_code: str = "en",
    kind: Optional[str] = None,
    name: str = "English"
) -> Dict[str, Any]:
    """A ``captionTracks`` entry as the player endpoint returns it."""
    data = {
        "baseUrl": f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang={language_code}",
        "languageCode": language_code,
        "name": {"simpleText": name},
    }
    if kind:
        data["kind"] = kind
    return data


def make_player_response(
    status: str = "OK",
    tracks: Optional[List[Dict[str, Any]]] = None,
    title: str = "Test Video",
    description: str = "",
    reason: Optional[str] = None
) -> Dict[str, Any]:
    """A minimal player response."""
    playability: Dict[str, Any] = {"status": status}
    if reason:
        playability["reason"] = reason
    response: Dict[str, Any] = {
        "playabilityStatus": playability,
        "videoDetails": {
            "videoId": VIDEO_ID,
            "title": title,
            "shortDescription": description,
            "author": "Test Channel",
            "lengthSeconds": "3723",
            "viewCount": "1234",
        },
    }
    if tracks is not None:
        response["captions"] = {"playerCaptionsTracklistRenderer": {"captionTracks": tracks}}
    return response


def make_result(
    segments: Optional[List[TranscriptSegment]] = None,
    title: str = "Test Video",
    chapters: tuple = (),
    tracks: Optional[tuple] = None,
    video_id: str = VIDEO_ID
) -> TranscriptResult:
    """A TranscriptResult with sensible metadata."""
    if tracks is None:
        tracks = (CaptionTrack("en", "English", TrackKind.MANUAL, "https://www.youtube.com/api/timedtext"),)
    if segments is None:
        segments = [
            TranscriptSegment(start=0.0, duration=1.5, text="Hello & welcome"),
            TranscriptSegment(start=1.5, duration=2.25, text="to the show"),
        ]
    info = VideoInfo(
        video_id=video_id,
        title=title,
        description="",
        channel_name="Test Channel",
        duration_seconds=3723,
        view_count=1234,
        available_tracks=tracks,
        chapters=tuple(chapters),
    )
    return TranscriptResult(
        video_info=info,
        segments=tuple(segments),
        language="en" if segments else None,
        track=tracks[0] if (tracks and segments) else None,
        strategy="android_player" if segments else None,
    )


@pytest.fixture
def transcript_result() -> TranscriptResult:
    """Two-segment transcript of the test video."""
    return make_result()


@pytest.fixture
def empty_result() -> TranscriptResult:
    """A playable video whose caption tracks yielded nothing."""
    return make_result(segments=[])


@pytest.fixture
def chapters() -> List[Chapter]:
    return [Chapter(0, "Intro"), Chapter(60, "Main topic"), Chapter(300, "Outro")]


@pytest.fixture
def mock_client():
    """YouTubeClient double; every endpoint fails unless a test says otherwise."""
    client = Mock()
    client.player.return_value = None
    client.watch_page.return_value = None
    client.browse.return_value = None
    client.next.return_value = None
    client.caption_payload.return_value = SRV3_PAYLOAD
    return client


@pytest.fixture
def mock_fetcher(mock_client, transcript_result):
    """RobustTranscriptFetcher double returning the two-segment transcript."""
    fetcher = Mock()
    fetcher.client = mock_client
    fetcher.fetch_transcript.return_value = transcript_result
    return fetcher


@pytest.fixture
def generous_rate_limiter() -> RateLimiter:
    return RateLimiter(max_requests=10000, window_seconds=60)


@pytest.fixture
def service(mock_fetcher, generous_rate_limiter):
    """TranscriptService backed by the mocked fetcher."""
    from youtube_transcripts.services.transcript_service import TranscriptService

    return TranscriptService(fetcher=mock_fetcher, rate_limiter=generous_rate_limiter)


def build_app(service, max_requests: int = 1000):
    """FastAPI application with the transcript service dependency overridden."""
    from youtube_transcripts.core.rate_limiter import KeyedRateLimiter
    from youtube_transcripts_api.app import create_app
    from youtube_transcripts_api.dependencies import get_transcript_service

    app = create_app(rate_limiter=KeyedRateLimiter(max_requests=max_requests, window_seconds=60))
    app.dependency_overrides[get_transcript_service] = lambda: service
    return app


@pytest.fixture
def client(service):
    """Create test client."""
    from fastapi.testclient import TestClient

    return TestClient(build_app(service))
