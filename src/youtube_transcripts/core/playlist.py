"""Playlist member listing through the InnerTube browse endpoint."""

from typing import Optional

from .config import config
from .exceptions import UpstreamUnavailableError
from .innertube_parsing import dig, iter_renderers, text_of
from .youtube_client import YouTubeClient
from ..models import PlaylistEntry, PlaylistListing
from ..utils.logging import get_logger

logger = get_logger("playlist")


def parse_playlist(playlist_id: str, data: dict, max_videos: int) -> PlaylistListing:
    """Collect up to ``max_videos`` unique entries from a browse response."""
    entries = []
    seen = set()
    for renderer in iter_renderers(data, "playlistVideoRenderer"):
        video_id = renderer.get("videoId")
        if not video_id or video_id in seen:
            continue
        seen.add(video_id)
        entries.append(PlaylistEntry(video_id=video_id, title=text_of(renderer.get("title"))))
        if len(entries) >= max_videos:
            break

    title = (
        dig(data, "metadata", "playlistMetadataRenderer", "title")
        or text_of(dig(data, "header", "playlistHeaderRenderer", "title"))
    )
    return PlaylistListing(playlist_id=playlist_id, title=title or "", entries=tuple(entries))


class PlaylistFetcher:
    """Lists the first videos of a playlist."""

    def __init__(self, client: Optional[YouTubeClient] = None, max_videos: Optional[int] = None):
        self.client = client or YouTubeClient()
        self.max_videos = max_videos or config.limits.max_playlist_videos

    def fetch(self, playlist_id: str) -> PlaylistListing:
        """
        Fetch the bounded member list of a playlist.

        Raises:
            UpstreamUnavailableError: If the browse call fails
        """
        data = self.client.browse(f"VL{playlist_id}")
        if data is None:
            raise UpstreamUnavailableError(f"Could not retrieve playlist {playlist_id}.")

        listing = parse_playlist(playlist_id, data, self.max_videos)
        logger.info(f"Playlist {playlist_id}: {len(listing.entries)} videos listed")
        return listing
