"""Unit tests for the InnerTube HTTP client."""

import json

import pytest
import requests
from unittest.mock import Mock

from youtube_transcripts.core.config import NetworkConfig
from youtube_transcripts.core.youtube_client import ANDROID, WEB, YouTubeClient


def response(ok=True, status_code=200, json_data=None, text="", json_error=False, chunks=None):
    """A streamed response double whose body arrives through ``iter_content``."""
    r = Mock()
    r.ok = ok
    r.status_code = status_code
    r.encoding = "utf-8"
    if chunks is None:
        if json_error:
            body = b"<html>not json</html>"
        elif json_data is not None:
            body = json.dumps(json_data).encode("utf-8")
        else:
            body = text.encode("utf-8")
        chunks = [body]
    r.iter_content.return_value = iter(chunks)
    return r


class SteppingClock:
    """Advances by ``step`` seconds every time it is read."""

    def __init__(self, step: float):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        self.now += self.step
        return self.now


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def client(session):
    return YouTubeClient(network=NetworkConfig(), session=session)


class TestPlayerRequests:
    """Tests for JSON endpoint calls."""

    def test_android_player_request(self, client, session):
        # Arrange
        session.post.return_value = response(json_data={"playabilityStatus": {"status": "OK"}})

        # Act
        data = client.player("dQw4w9WgXcQ", ANDROID)

        # Assert
        assert data == {"playabilityStatus": {"status": "OK"}}
        args, kwargs = session.post.call_args
        assert args[0] == "https://www.youtube.com/youtubei/v1/player"
        assert kwargs["json"]["videoId"] == "dQw4w9WgXcQ"
        assert kwargs["json"]["context"]["client"]["clientName"] == "ANDROID"
        assert kwargs["json"]["context"]["client"]["clientVersion"] == "19.09.37"
        assert kwargs["json"]["context"]["client"]["androidSdkVersion"] == 30
        assert kwargs["headers"]["User-Agent"] == "com.google.android.youtube/19.09.37 (Linux; U; Android 11) gzip"
        assert kwargs["timeout"] == 15
        assert kwargs["stream"] is True
        assert kwargs["params"]["key"]

    def test_web_player_request_uses_desktop_identity(self, client, session):
        session.post.return_value = response(json_data={})

        client.player("dQw4w9WgXcQ", WEB)

        kwargs = session.post.call_args[1]
        assert kwargs["json"]["context"]["client"]["clientName"] == "WEB"
        assert kwargs["headers"]["User-Agent"].startswith("Mozilla/5.0")

    @pytest.mark.parametrize("outcome", [
        requests.Timeout("timed out"),
        requests.ConnectionError("refused"),
    ])
    def test_network_errors_are_soft_failures(self, client, session, outcome):
        session.post.side_effect = outcome

        assert client.player("dQw4w9WgXcQ") is None

    def test_http_error_is_soft_failure(self, client, session):
        session.post.return_value = response(ok=False, status_code=429)

        assert client.player("dQw4w9WgXcQ") is None

    def test_non_json_body_is_soft_failure(self, client, session):
        session.post.return_value = response(json_error=True)

        assert client.player("dQw4w9WgXcQ") is None

    def test_next_with_continuation(self, client, session):
        session.post.return_value = response(json_data={"ok": True})

        client.next(continuation="token-1")

        kwargs = session.post.call_args[1]
        assert kwargs["json"]["continuation"] == "token-1"
        assert "videoId" not in kwargs["json"]

    def test_browse_posts_browse_id(self, client, session):
        session.post.return_value = response(json_data={})

        client.browse("VLPL123")

        assert session.post.call_args[0][0].endswith("/youtubei/v1/browse")
        assert session.post.call_args[1]["json"]["browseId"] == "VLPL123"


class TestTextRequests:
    """Tests for watch page and caption downloads."""

    def test_watch_page(self, client, session):
        session.get.return_value = response(text="<html></html>")

        html = client.watch_page("dQw4w9WgXcQ")

        assert html == "<html></html>"
        args, kwargs = session.get.call_args
        assert args[0] == "https://www.youtube.com/watch"
        assert kwargs["params"] == {"v": "dQw4w9WgXcQ", "hl": "en"}

    def test_watch_page_http_error(self, client, session):
        session.get.return_value = response(ok=False, status_code=500)

        assert client.watch_page("dQw4w9WgXcQ") is None

    @pytest.mark.parametrize("url,expected", [
        ("https://www.youtube.com/api/timedtext?v=x", "https://www.youtube.com/api/timedtext?v=x"),
        ("/api/timedtext?v=x", "https://www.youtube.com/api/timedtext?v=x"),
        ("https://m.youtube.com/api/timedtext", "https://m.youtube.com/api/timedtext"),
        ("https://evil.example.com/api/timedtext", None),
        ("http://www.youtube.com/api/timedtext", None),
        ("https://www.youtube.com.evil.example/api", None),
        ("", None),
    ])
    def test_resolve_caption_url(self, client, url, expected):
        assert client.resolve_caption_url(url) == expected

    def test_caption_payload_refuses_foreign_host(self, client, session):
        assert client.caption_payload("https://evil.example.com/captions") is None
        session.get.assert_not_called()

    def test_caption_payload(self, client, session):
        session.get.return_value = response(text="<p t=\"0\" d=\"1\">hi</p>")

        payload = client.caption_payload("/api/timedtext?v=x", ANDROID)

        assert payload == "<p t=\"0\" d=\"1\">hi</p>"
        assert session.get.call_args[1]["headers"]["User-Agent"].startswith("com.google.android.youtube/")

    def test_body_is_decoded_across_chunks(self, client, session):
        session.get.return_value = response(chunks=["café ".encode("utf-8")[:4], "café ".encode("utf-8")[4:], b"ok"])

        assert client.watch_page("dQw4w9WgXcQ") == "café ok"


class TestTotalDeadline:
    """A slow body is abandoned once the overall time budget is spent."""

    def test_trickling_body_is_aborted(self, session):
        # Arrange: every clock read advances 4s against a 15s budget
        client = YouTubeClient(network=NetworkConfig(), session=session, clock=SteppingClock(4.0))
        slow = response(chunks=[b"<p>"] * 10)
        session.get.return_value = slow

        # Act
        html = client.watch_page("dQw4w9WgXcQ")

        # Assert
        assert html is None
        slow.close.assert_called_once()

    def test_slow_json_endpoint_is_aborted(self, session):
        client = YouTubeClient(network=NetworkConfig(), session=session, clock=SteppingClock(4.0))
        session.post.return_value = response(chunks=[b"{", b'"a"', b":", b"1", b"}"])

        assert client.player("dQw4w9WgXcQ") is None

    def test_fast_body_within_budget(self, session):
        client = YouTubeClient(network=NetworkConfig(), session=session, clock=SteppingClock(0.001))
        session.post.return_value = response(chunks=[b'{"a"', b": 1}"])

        assert client.player("dQw4w9WgXcQ") == {"a": 1}

    def test_connection_dropped_mid_body(self, client, session):
        broken = response()
        broken.iter_content.side_effect = requests.ConnectionError("reset")
        session.get.return_value = broken

        assert client.watch_page("dQw4w9WgXcQ") is None
        broken.close.assert_called_once()
