"""Helpers for walking InnerTube JSON, whose nesting varies by client and over time."""

from typing import Any, Dict, Iterator, Optional


def iter_renderers(obj: Any, key: str) -> Iterator[Dict[str, Any]]:
    """Yield every dict stored under ``key`` anywhere in ``obj``, depth first, in document order."""
    if isinstance(obj, dict):
        for k, value in obj.items():
            if k == key and isinstance(value, dict):
                yield value
            else:
                yield from iter_renderers(value, key)
    elif isinstance(obj, list):
        for item in obj:
            yield from iter_renderers(item, key)


def text_of(node: Any) -> str:
    """Read an InnerTube text node (``simpleText``, ``runs`` or ``content``)."""
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return ""
    if node.get("simpleText"):
        return node["simpleText"]
    if node.get("runs"):
        return "".join(run.get("text", "") for run in node["runs"] if isinstance(run, dict))
    return node.get("content") or ""


def dig(obj: Any, *path: Any) -> Optional[Any]:
    """Follow ``path`` through nested dicts/lists, returning None on any miss."""
    for step in path:
        if isinstance(obj, dict):
            obj = obj.get(step)
        elif isinstance(obj, list) and isinstance(step, int) and -len(obj) <= step < len(obj):
            obj = obj[step]
        else:
            return None
        if obj is None:
            return None
    return obj
