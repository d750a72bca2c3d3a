"""
Chapter detection from video descriptions.

Best effort only: uploaders list chapters as lines like ``0:00 Intro`` or
``1:02:30 - Q&A``. A single timestamp-looking line is treated as incidental,
so at least two matching lines are required before any chapter is reported.
"""

import re
from typing import List

from ..models import Chapter

CHAPTER_LINE = re.compile(
    r'^\s*[(\[]?((?:\d{1,2}:)?\d{1,2}:\d{2})[)\]]?'
    r'\s*(?:[-–—:|]\s*)?(.*?)\s*$'
)
MIN_CHAPTERS = 2


def timestamp_to_seconds(timestamp: str) -> int:
    """Convert ``M:SS`` or ``H:MM:SS`` to whole seconds."""
    seconds = 0
    for part in timestamp.split(":"):
        seconds = seconds * 60 + int(part)
    return seconds


def parse_chapters(description: str) -> List[Chapter]:
    """
    Extract chapter markers from a free-text description.

    Returns:
        Chapters in input order, or an empty list when fewer than two are found
    """
    if not description:
        return []

    chapters = []
    for line in description.splitlines():
        match = CHAPTER_LINE.match(line)
        if not match or not match.group(2):
            continue
        chapters.append(Chapter(
            offset_seconds=timestamp_to_seconds(match.group(1)),
            label=match.group(2),
        ))

    return chapters if len(chapters) >= MIN_CHAPTERS else []
