"""Unit tests for caption payload parsing."""

import pytest

from youtube_transcripts.core.caption_parser import clean_caption_text, decode_entities, parse_captions

from conftest import SRV3_PAYLOAD, TIMEDTEXT_PAYLOAD


class TestParseCaptions:
    """Tests for the dual-encoding caption parser."""

    def test_srv3_times_are_converted_from_milliseconds(self):
        # Act
        segments = parse_captions(SRV3_PAYLOAD)

        # Assert
        assert len(segments) == 2
        assert segments[0].start == 0.0
        assert segments[0].duration == 1.5
        assert segments[1].start == 1.5
        assert segments[1].duration == 2.25
        assert segments[1].end == 3.75

    def test_srv3_text_is_cleaned(self):
        segments = parse_captions(SRV3_PAYLOAD)

        assert segments[0].text == "Hello & welcome"
        assert segments[1].text == "to the show"

    def test_timedtext_fallback_uses_seconds(self):
        segments = parse_captions(TIMEDTEXT_PAYLOAD)

        assert [(s.start, s.duration) for s in segments] == [(0.5, 2.0), (2.5, 1.25)]
        assert segments[1].text == "second line"

    def test_srv3_wins_when_both_encodings_present(self):
        payload = SRV3_PAYLOAD + TIMEDTEXT_PAYLOAD

        segments = parse_captions(payload)

        assert [s.text for s in segments] == ["Hello & welcome", "to the show"]

    def test_missing_duration_defaults_to_zero(self):
        segments = parse_captions('<p t="2000">no duration</p>')

        assert segments[0].start == 2.0
        assert segments[0].duration == 0.0

    def test_unparsable_attribute_drops_element(self):
        payload = '<text start="abc" dur="1">bad</text><text start="1" dur="2">good</text>'

        segments = parse_captions(payload)

        assert [s.text for s in segments] == ["good"]

    @pytest.mark.parametrize("payload", [
        "",
        None,
        "<html><body>Not captions</body></html>",
        '{"events": []}',
    ])
    def test_neither_encoding_yields_empty_list(self, payload):
        assert parse_captions(payload) == []


class TestTextCleaning:
    """Tests for entity decoding and tag stripping."""

    def test_decode_entities(self):
        assert decode_entities("&lt;b&gt; &quot;hi&quot; it&#39;s &#x27;x&#x27; a&#x2F;b &apos;") == \
            "<b> \"hi\" it's 'x' a/b '"

    def test_double_escaped_ampersand_decodes_once(self):
        assert decode_entities("&amp;lt;") == "&lt;"

    def test_clean_caption_text(self):
        assert clean_caption_text("  <font color=\"#fff\">line one</font>\nline two \r ") == "line one line two"
