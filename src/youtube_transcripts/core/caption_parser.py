"""
Caption payload parsing.

YouTube serves timed text in two element encodings:

- srv3 (what the Android client receives): ``<p t="1360" d="1680">text</p>``, times in ms
- legacy timedtext (web): ``<text start="1.36" dur="1.68">text</text>``, times in seconds

A payload is parsed with exactly one of them; the srv3 form wins whenever it
yields at least one element.
"""

import re
from typing import List, Optional

from ..models import TranscriptSegment

SRV3_PATTERN = re.compile(r'<p\s+t="(\d+)"(?:\s+d="(\d+)")?[^>]*>(.*?)</p>', re.S)
TIMEDTEXT_PATTERN = re.compile(r'<text\s+start="([^"]*)"(?:\s+dur="([^"]*)")?[^>]*>(.*?)</text>', re.S)
TAG_PATTERN = re.compile(r'<[^>]+>')

# Order matters: &amp; first so that "&amp;lt;" decodes to "&lt;" and not "<"
HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&apos;", "'"),
)


def decode_entities(text: str) -> str:
    """Decode the fixed set of HTML entities used in caption payloads."""
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def clean_caption_text(raw: str) -> str:
    """Strip nested markup, decode entities, fold newlines and trim."""
    text = decode_entities(TAG_PATTERN.sub("", raw or ""))
    return text.replace("\r", " ").replace("\n", " ").strip()


def _to_float(value: Optional[str], scale: float = 1.0) -> Optional[float]:
    if not value:
        return 0.0
    try:
        number = float(value) / scale
    except ValueError:
        return None
    return number if number >= 0 else None


def _parse_elements(payload: str, pattern, scale: float) -> List[TranscriptSegment]:
    segments = []
    for match in pattern.finditer(payload):
        start = _to_float(match.group(1), scale)
        duration = _to_float(match.group(2), scale)
        if start is None or duration is None:
            continue
        text = clean_caption_text(match.group(3))
        if text:
            segments.append(TranscriptSegment(start=start, duration=duration, text=text))
    return segments


def parse_captions(payload: str) -> List[TranscriptSegment]:
    """
    Parse a raw caption payload into ordered segments.

    Args:
        payload: The caption document as text

    Returns:
        Segments in document order; empty when neither encoding matches
    """
    if not payload:
        return []

    if SRV3_PATTERN.search(payload):
        return _parse_elements(payload, SRV3_PATTERN, 1000.0)

    return _parse_elements(payload, TIMEDTEXT_PATTERN, 1.0)
