"""
Utility modules for the YouTube transcript engine.
"""

from .logging import setup_logger, get_logger
from .youtube_utils import (
    build_watch_url,
    extract_playlist_id,
    extract_video_id,
    get_thumbnail_url,
)

__all__ = [
    'setup_logger',
    'get_logger',
    'build_watch_url',
    'extract_playlist_id',
    'extract_video_id',
    'get_thumbnail_url',
]
