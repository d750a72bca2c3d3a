"""
Balanced-structure extraction from uncontrolled text.

The watch page embeds the player response as ``var ytInitialPlayerResponse = {...};``
inside a script tag. The object is not delimited by anything self-describing and
its strings may contain literal braces, so the closing brace is located by a
small scanner that tracks brace depth, string state and escapes.
"""

import json
from typing import Any, Dict, Optional

PLAYER_RESPONSE_MARKERS = (
    "var ytInitialPlayerResponse = ",
    "ytInitialPlayerResponse = ",
    'window["ytInitialPlayerResponse"] = ',
)


def find_balanced_object(text: str, start: int) -> Optional[str]:
    """
    Return the ``{...}`` substring that opens at or after ``start``.

    Args:
        text: Text to scan
        start: Index from which to look for the opening brace

    Returns:
        The balanced object text, or None if it never closes
    """
    open_at = text.find("{", start)
    if open_at < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(open_at, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[open_at:index + 1]
    return None


def extract_json_after_marker(text: str, marker: str) -> Optional[Dict[str, Any]]:
    """Decode the JSON object assigned right after ``marker``, if any."""
    position = text.find(marker)
    if position < 0:
        return None

    blob = find_balanced_object(text, position + len(marker))
    if blob is None:
        return None

    try:
        data = json.loads(blob)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def extract_player_response(html: str) -> Optional[Dict[str, Any]]:
    """Find the embedded player response in a watch page."""
    if not html:
        return None
    for marker in PLAYER_RESPONSE_MARKERS:
        data = extract_json_after_marker(html, marker)
        if data is not None:
            return data
    return None
