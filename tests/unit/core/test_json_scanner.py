"""Unit tests for balanced-object extraction."""

from youtube_transcripts.core.json_scanner import (
    extract_json_after_marker,
    extract_player_response,
    find_balanced_object,
)


class TestFindBalancedObject:
    """Tests for the brace scanner."""

    def test_nested_object(self):
        text = 'x = {"a": {"b": {"c": 1}}}; y = {"d": 2};'

        assert find_balanced_object(text, 0) == '{"a": {"b": {"c": 1}}}'

    def test_braces_inside_strings_are_ignored(self):
        text = r'{"a": "x}{\"y", "b": "}"} trailing }'

        assert find_balanced_object(text, 0) == r'{"a": "x}{\"y", "b": "}"}'

    def test_escaped_backslash_before_quote(self):
        text = r'{"path": "C:\\", "n": {"m": 1}} rest'

        assert find_balanced_object(text, 0) == r'{"path": "C:\\", "n": {"m": 1}}'

    def test_unclosed_object_returns_none(self):
        assert find_balanced_object('{"a": {"b": 1}', 0) is None

    def test_no_object_returns_none(self):
        assert find_balanced_object("no braces here", 0) is None


class TestExtractPlayerResponse:
    """Tests for pulling the player response out of a watch page."""

    def test_extracts_embedded_player_response(self):
        html = (
            '<html><script>var ytInitialPlayerResponse = '
            '{"playabilityStatus": {"status": "OK"}, "videoDetails": {"title": "A {weird} \\"title\\""}};'
            'var meta = {"other": true};</script></html>'
        )

        data = extract_player_response(html)

        assert data["playabilityStatus"]["status"] == "OK"
        assert data["videoDetails"]["title"] == 'A {weird} "title"'

    def test_window_assignment_marker(self):
        html = '<script>window["ytInitialPlayerResponse"] = {"videoDetails": {"videoId": "dQw4w9WgXcQ"}};</script>'

        assert extract_player_response(html)["videoDetails"]["videoId"] == "dQw4w9WgXcQ"

    def test_invalid_json_returns_none(self):
        assert extract_json_after_marker("ytInitialPlayerResponse = {not: json};", "ytInitialPlayerResponse = ") is None

    def test_missing_marker_returns_none(self):
        assert extract_player_response("<html>consent page</html>") is None
        assert extract_player_response("") is None
