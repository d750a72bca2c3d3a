"""Unit tests for the batch and playlist orchestrator."""

import pytest
from unittest.mock import Mock

from youtube_transcripts.core.exceptions import VideoUnplayableError
from youtube_transcripts.core.formatter import OutputFormat
from youtube_transcripts.models import PlaylistEntry, PlaylistListing
from youtube_transcripts.services.batch_service import BatchProcessor

from conftest import make_result

FIRST = "https://www.youtube.com/watch?v=aaaaaaaaaaa"
THIRD = "https://youtu.be/ccccccccccc"


def fetch_by_id(results):
    def fetch(video_id, lang="en"):
        outcome = results[video_id]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
    return fetch


@pytest.fixture
def fetcher(mock_client):
    fetcher = Mock()
    fetcher.client = mock_client
    fetcher.fetch_transcript.side_effect = fetch_by_id({
        "aaaaaaaaaaa": make_result(title="First Video", video_id="aaaaaaaaaaa"),
        "bbbbbbbbbbb": make_result(segments=[], title="Silent Video", video_id="bbbbbbbbbbb"),
        "ccccccccccc": make_result(title="Third Video", video_id="ccccccccccc"),
        "ddddddddddd": VideoUnplayableError("Private video", "LOGIN_REQUIRED"),
        "eeeeeeeeeee": RuntimeError("boom"),
    })
    return fetcher


class TestBatchProcessor:
    """Tests for concurrent batch runs."""

    @pytest.mark.asyncio
    async def test_malformed_url_is_reported_inline(self, fetcher):
        # Arrange
        processor = BatchProcessor(fetcher=fetcher, playlist_fetcher=Mock(), concurrency=2)

        # Act
        report = await processor.run([FIRST, "not-a-url", THIRD], "en", OutputFormat.CLEAN)

        # Assert
        output = report.render()
        assert report.succeeded == 2
        assert report.failed == 1
        assert output.startswith("Batch results: 3 videos (2 succeeded, 1 failed)")
        assert "[ERROR] not-a-url: Invalid YouTube URL" in output
        assert output.index("### [1/3] First Video") < output.index("### [2/3]") < output.index("### [3/3] Third Video")
        assert output.count("\n\n---\n\n") == 3

    @pytest.mark.asyncio
    async def test_blank_url_is_reported_inline(self, fetcher):
        processor = BatchProcessor(fetcher=fetcher, playlist_fetcher=Mock(), concurrency=2)

        report = await processor.run([FIRST, "   ", THIRD], "en", OutputFormat.CLEAN)

        output = report.render()
        assert report.succeeded == 2
        assert "### [2/3] (empty URL)\n\n[ERROR] (empty URL): Invalid YouTube URL" in output
        assert fetcher.fetch_transcript.call_count == 2

    @pytest.mark.asyncio
    async def test_item_errors_are_isolated(self, fetcher):
        processor = BatchProcessor(fetcher=fetcher, playlist_fetcher=Mock(), concurrency=4)
        urls = [
            "https://youtu.be/ddddddddddd",
            "https://youtu.be/eeeeeeeeeee",
            "https://youtu.be/bbbbbbbbbbb",
            FIRST,
        ]

        report = await processor.run(urls)

        output = report.render()
        assert "[ERROR] https://youtu.be/ddddddddddd: Private video" in output
        assert "[ERROR] https://youtu.be/eeeeeeeeeee: boom" in output
        assert "[NO CAPTIONS] https://youtu.be/bbbbbbbbbbb Available languages: en" in output
        assert [item.url for item in report.items] == urls
        assert report.succeeded == 1

    @pytest.mark.asyncio
    async def test_format_and_budget_are_applied_per_item(self, fetcher):
        processor = BatchProcessor(fetcher=fetcher, playlist_fetcher=Mock())

        report = await processor.run([FIRST], "en", OutputFormat.SRT, None)

        assert "1\n00:00:00,000 --> 00:00:01,500\nHello & welcome" in report.items[0].content
        fetcher.fetch_transcript.assert_called_once_with("aaaaaaaaaaa", "en")

    @pytest.mark.asyncio
    async def test_run_playlist(self, fetcher):
        playlist_fetcher = Mock()
        playlist_fetcher.fetch.return_value = PlaylistListing(
            playlist_id="PL123",
            title="My Playlist",
            entries=(PlaylistEntry("aaaaaaaaaaa", "First"), PlaylistEntry("ccccccccccc", "Third")),
        )
        processor = BatchProcessor(fetcher=fetcher, playlist_fetcher=playlist_fetcher)

        report = await processor.run_playlist("PL123")

        playlist_fetcher.fetch.assert_called_once_with("PL123")
        output = report.render()
        assert output.startswith("Playlist: My Playlist\nBatch results: 2 videos (2 succeeded, 0 failed)")
