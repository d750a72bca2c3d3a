"""
Top-level comment fetching.

Comments are not part of the player response. The ``next`` endpoint returns a
continuation token for the comment section; following it yields pages of
comments, either as ``commentEntityPayload`` mutations (current shape) or as
``commentRenderer`` nodes (older shape).
"""

from typing import Any, Dict, List, Optional

from .config import config
from .exceptions import UpstreamUnavailableError
from .innertube_parsing import dig, iter_renderers, text_of
from .youtube_client import YouTubeClient
from ..models import Comment
from ..utils.logging import get_logger
from ..utils.youtube_utils import build_watch_url

logger = get_logger("comments")

COMMENT_SECTION_ID = "comment-item-section"


def find_comment_section_token(data: Dict[str, Any]) -> Optional[str]:
    """Continuation token that loads the first page of comments."""
    for section in iter_renderers(data, "itemSectionRenderer"):
        if section.get("sectionIdentifier") != COMMENT_SECTION_ID:
            continue
        for item in iter_renderers(section, "continuationItemRenderer"):
            token = dig(item, "continuationEndpoint", "continuationCommand", "token")
            if token:
                return token
    return None


def find_next_page_token(data: Dict[str, Any]) -> Optional[str]:
    """Continuation token of the next page of top-level comments, if any."""
    token = None
    for endpoint in data.get("onResponseReceivedEndpoints") or []:
        command = endpoint.get("reloadContinuationItemsCommand") or endpoint.get("appendContinuationItemsAction") or {}
        for item in command.get("continuationItems") or []:
            renderer = item.get("continuationItemRenderer") if isinstance(item, dict) else None
            if renderer:
                token = dig(renderer, "continuationEndpoint", "continuationCommand", "token") or token
    return token


def parse_comments(data: Dict[str, Any]) -> List[Comment]:
    """Extract comments from one continuation page, in page order."""
    comments = []
    for mutation in dig(data, "frameworkUpdates", "entityBatchUpdate", "mutations") or []:
        payload = dig(mutation, "payload", "commentEntityPayload")
        if not payload:
            continue
        comments.append(Comment(
            author=dig(payload, "author", "displayName") or "",
            text=text_of(dig(payload, "properties", "content")),
            like_count=dig(payload, "toolbar", "likeCountNotliked") or "0",
            published_time=dig(payload, "properties", "publishedTime") or "",
        ))
    if comments:
        return comments

    for renderer in iter_renderers(data, "commentRenderer"):
        comments.append(Comment(
            author=text_of(renderer.get("authorText")),
            text=text_of(renderer.get("contentText")),
            like_count=text_of(renderer.get("voteCount")) or "0",
            published_time=text_of(renderer.get("publishedTimeText")),
        ))
    return comments


def format_comments(video_id: str, comments: List[Comment]) -> str:
    if not comments:
        return f"No comments found for video {video_id}."
    lines = [f"Top {len(comments)} comments for {build_watch_url(video_id)}", ""]
    for index, comment in enumerate(comments, 1):
        meta = f"{comment.like_count} likes"
        if comment.published_time:
            meta += f", {comment.published_time}"
        lines.append(f"{index}. {comment.author or 'Unknown'} ({meta})")
        lines.append(f"   {' '.join(comment.text.split())}")
    return "\n".join(lines)


class CommentFetcher:
    """Pages through a video's top-level comments."""

    def __init__(self, client: Optional[YouTubeClient] = None, max_pages: Optional[int] = None):
        self.client = client or YouTubeClient()
        self.max_pages = max_pages or config.limits.max_comment_pages

    def fetch(self, video_id: str, count: int) -> List[Comment]:
        """
        Fetch up to ``count`` comments.

        Raises:
            UpstreamUnavailableError: If the initial ``next`` call fails
        """
        data = self.client.next(video_id=video_id)
        if data is None:
            raise UpstreamUnavailableError(f"Could not retrieve comments for {video_id}.")

        token = find_comment_section_token(data)
        comments: List[Comment] = []
        pages = 0
        while token and len(comments) < count and pages < self.max_pages:
            page = self.client.next(continuation=token)
            pages += 1
            if page is None:
                logger.warning(f"Comment page {pages} for {video_id} failed; returning what was collected")
                break
            comments.extend(parse_comments(page))
            token = find_next_page_token(page)

        logger.info(f"Collected {min(len(comments), count)} comments for {video_id} over {pages} pages")
        return comments[:count]
