"""Keyword search over transcript segments."""

from dataclasses import dataclass, field
from typing import List

from .formatter import format_timestamp
from ..models import TranscriptResult

MATCH_MARKER = ">>"
CONTEXT_MARKER = "  "
RUN_SEPARATOR = "..."


@dataclass
class SearchResult:
    """Matched segment indices and the merged context runs around them."""
    result: TranscriptResult
    query: str
    matches: List[int] = field(default_factory=list)
    runs: List[List[int]] = field(default_factory=list)

    @property
    def has_matches(self) -> bool:
        return bool(self.matches)

    def render(self) -> str:
        title = self.result.video_info.title or self.result.video_id
        if not self.matches:
            return f'No matches for "{self.query}" in "{title}".'

        matched = set(self.matches)
        segments = self.result.segments
        noun = "match" if len(self.matches) == 1 else "matches"
        blocks = []
        for run in self.runs:
            lines = []
            for index in run:
                marker = MATCH_MARKER if index in matched else CONTEXT_MARKER
                seg = segments[index]
                lines.append(f"{marker} [{format_timestamp(seg.start)}] {seg.text}")
            blocks.append("\n".join(lines))

        header = f'Search results for "{self.query}" in "{title}": {len(self.matches)} {noun}'
        return header + "\n\n" + f"\n{RUN_SEPARATOR}\n".join(blocks)


def merge_windows(matches: List[int], context_lines: int, total: int) -> List[List[int]]:
    """Expand each match by ``context_lines`` and merge overlapping or adjacent windows."""
    runs: List[List[int]] = []
    for index in matches:
        low = max(0, index - context_lines)
        high = min(total - 1, index + context_lines)
        if runs and low <= runs[-1][-1] + 1:
            last = runs[-1]
            last.extend(range(last[-1] + 1, high + 1))
        else:
            runs.append(list(range(low, high + 1)))
    return runs


def search_transcript(result: TranscriptResult, query: str, context_lines: int = 1) -> SearchResult:
    """
    Find segments containing ``query`` (case-insensitive) with surrounding context.

    Args:
        result: Transcript to search
        query: Substring to look for
        context_lines: Segments to include before and after each match
    """
    needle = query.lower()
    matches = [i for i, seg in enumerate(result.segments) if needle in seg.text.lower()]
    return SearchResult(
        result=result,
        query=query,
        matches=matches,
        runs=merge_windows(matches, max(context_lines, 0), len(result.segments)),
    )
