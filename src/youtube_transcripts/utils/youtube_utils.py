"""YouTube URL utility functions."""

import re
from typing import List, Optional, Pattern

_HOST = r'(?:https?://)?(?:www\.|m\.)?youtube\.com'
_ID = r'([A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])'

# Ordered: the first pattern that matches wins
VIDEO_URL_PATTERNS: List[Pattern] = [
    re.compile(_HOST + r'/watch\?(?:.*&)?v=' + _ID),
    re.compile(_HOST + r'/embed/' + _ID),
    re.compile(_HOST + r'/shorts/' + _ID),
    re.compile(_HOST + r'/v/' + _ID),
    re.compile(r'(?:https?://)?youtu\.be/' + _ID),
    re.compile(_HOST + r'/live/' + _ID),
]

PLAYLIST_URL_PATTERNS: List[Pattern] = [
    re.compile(_HOST + r'/playlist\?(?:.*&)?list=([A-Za-z0-9_-]+)'),
    re.compile(_HOST + r'/watch\?(?:.*&)?list=([A-Za-z0-9_-]+)'),
]

VIDEO_ID_LENGTH = 11


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL.

    Args:
        url: Any YouTube URL (watch, embed, shorts, v, youtu.be, live)

    Returns:
        The 11-character video ID, or None if no pattern matches
    """
    if not url or not isinstance(url, str):
        return None

    trimmed = url.strip()
    for pattern in VIDEO_URL_PATTERNS:
        match = pattern.search(trimmed)
        if match and len(match.group(1)) == VIDEO_ID_LENGTH:
            return match.group(1)
    return None


def extract_playlist_id(url: str) -> Optional[str]:
    """
    Extract the playlist ID from a playlist or watch URL carrying ``list=``.

    Args:
        url: YouTube playlist URL

    Returns:
        Playlist ID if found, None otherwise
    """
    if not url or not isinstance(url, str):
        return None

    trimmed = url.strip()
    for pattern in PLAYLIST_URL_PATTERNS:
        match = pattern.search(trimmed)
        if match:
            return match.group(1)
    return None


def build_watch_url(video_id: str, start_seconds: Optional[float] = None) -> str:
    """Canonical watch URL, optionally deep-linking to a start second."""
    url = f"https://www.youtube.com/watch?v={video_id}"
    if start_seconds is not None:
        url += f"&t={int(start_seconds)}s"
    return url


def get_thumbnail_url(video_id: str, quality: str = "hqdefault") -> str:
    """Get the thumbnail URL for a YouTube video."""
    return f"https://i.ytimg.com/vi/{video_id}/{quality}.jpg"
