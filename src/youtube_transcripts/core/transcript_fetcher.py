"""
Multi-strategy transcript fetching.

YouTube's internal player API answers differently depending on the client
identity and changes without notice. Three strategies are tried in order until
one yields parsable captions:

1. the player endpoint as the Android app
2. the public watch page, reading the embedded ``ytInitialPlayerResponse``
3. the player endpoint as the desktop web client

Every strategy can fail softly. The most informative response seen so far is
kept so that, when no strategy produces captions, the caller still learns why
(private or removed video) or gets the metadata with an empty transcript.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .caption_parser import parse_captions
from .chapters import parse_chapters
from .exceptions import UpstreamUnavailableError, VideoUnplayableError
from .json_scanner import extract_player_response
from .track_selector import select_track
from .youtube_client import ANDROID, WEB, YouTubeClient
from ..models import CaptionTrack, TranscriptResult, TranscriptSegment, VideoInfo
from ..utils.logging import get_logger

logger = get_logger("transcript_fetcher")

PlayerLoader = Callable[[YouTubeClient, str], Optional[Dict[str, Any]]]


@dataclass(frozen=True)
class FetchStrategy:
    """A named way of obtaining a player response."""
    name: str
    caption_client: str
    load: PlayerLoader


def _android_player(client: YouTubeClient, video_id: str) -> Optional[Dict[str, Any]]:
    return client.player(video_id, ANDROID)


def _watch_page(client: YouTubeClient, video_id: str) -> Optional[Dict[str, Any]]:
    html = client.watch_page(video_id)
    if html is None:
        return None
    player = extract_player_response(html)
    if player is None:
        logger.warning(f"No player response found in watch page for {video_id}")
    return player


def _web_player(client: YouTubeClient, video_id: str) -> Optional[Dict[str, Any]]:
    return client.player(video_id, WEB)


DEFAULT_STRATEGIES: Tuple[FetchStrategy, ...] = (
    FetchStrategy("android_player", ANDROID, _android_player),
    FetchStrategy("watch_page", WEB, _watch_page),
    FetchStrategy("web_player", WEB, _web_player),
)


@dataclass(frozen=True)
class StrategyAttempt:
    """What a single strategy returned, reduced to the parts the chain needs."""
    strategy: str
    player: Dict[str, Any]
    status: str
    reason: str
    tracks: Tuple[CaptionTrack, ...]

    @property
    def playable(self) -> bool:
        return self.status == "OK"


def inspect_player(strategy: str, player: Dict[str, Any]) -> StrategyAttempt:
    """Read playability and caption tracks out of a player response."""
    playability = player.get("playabilityStatus") or {}
    status = playability.get("status") or "UNKNOWN"
    reason = playability.get("reason") or ""
    if not reason:
        messages = playability.get("messages") or []
        reason = messages[0] if messages else "Video unavailable"

    renderer = (player.get("captions") or {}).get("playerCaptionsTracklistRenderer") or {}
    tracks = tuple(
        CaptionTrack.from_innertube(t)
        for t in renderer.get("captionTracks") or []
        if isinstance(t, dict) and t.get("baseUrl")
    )
    return StrategyAttempt(strategy=strategy, player=player, status=status, reason=reason, tracks=tracks)


def prefer_attempt(best: Optional[StrategyAttempt], attempt: StrategyAttempt) -> StrategyAttempt:
    """
    Pick the attempt worth reporting from.

    A playable response beats an unplayable one; among playable responses the
    first one that lists tracks is kept; among unplayable ones the latest wins.
    """
    if best is None:
        return attempt
    if best.playable:
        if attempt.playable and attempt.tracks and not best.tracks:
            return attempt
        return best
    return attempt


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def build_video_info(video_id: str, player: Dict[str, Any], tracks: Sequence[CaptionTrack]) -> VideoInfo:
    """Assemble metadata from ``videoDetails`` with the microformat as fallback."""
    details = player.get("videoDetails") or {}
    micro = (player.get("microformat") or {}).get("playerMicroformatRenderer") or {}

    title = details.get("title") or (micro.get("title") or {}).get("simpleText") or ""
    description = details.get("shortDescription") or (micro.get("description") or {}).get("simpleText") or ""
    length = details.get("lengthSeconds") or micro.get("lengthSeconds")
    views = details.get("viewCount") or micro.get("viewCount")

    return VideoInfo(
        video_id=video_id,
        title=title,
        description=description,
        channel_name=details.get("author") or micro.get("ownerChannelName") or "",
        duration_seconds=_to_int(length),
        view_count=_to_int(views),
        available_tracks=tuple(tracks),
        chapters=tuple(parse_chapters(description)),
    )


class RobustTranscriptFetcher:
    """Runs the strategy chain for one video at a time."""

    def __init__(
        self,
        client: Optional[YouTubeClient] = None,
        strategies: Sequence[FetchStrategy] = DEFAULT_STRATEGIES
    ):
        self.client = client or YouTubeClient()
        self.strategies = tuple(strategies)

    def _captions_for(
        self,
        attempt: StrategyAttempt,
        strategy: FetchStrategy,
        lang: str
    ) -> Tuple[CaptionTrack, List[TranscriptSegment]]:
        track = select_track(attempt.tracks, lang)
        logger.debug(
            f"{strategy.name}: selected track {track.language_code} "
            f"({'auto' if track.is_auto else 'manual'}) of {len(attempt.tracks)}"
        )
        payload = self.client.caption_payload(track.source_url, strategy.caption_client)
        return track, parse_captions(payload or "")

    def fetch_transcript(self, video_id: str, lang: str = "en") -> TranscriptResult:
        """
        Fetch metadata and captions for a video.

        Args:
            video_id: 11-character video ID
            lang: Preferred caption language code

        Returns:
            TranscriptResult; its segments are empty when no usable captions exist

        Raises:
            UpstreamUnavailableError: No strategy produced a response at all
            VideoUnplayableError: YouTube reported the video as not playable
        """
        start_time = time.time()
        best: Optional[StrategyAttempt] = None

        for strategy in self.strategies:
            player = strategy.load(self.client, video_id)
            if player is None:
                logger.warning(f"Strategy {strategy.name} failed for {video_id}")
                continue

            attempt = inspect_player(strategy.name, player)
            best = prefer_attempt(best, attempt)

            if not attempt.playable:
                logger.warning(f"Strategy {strategy.name}: {video_id} not playable ({attempt.status}: {attempt.reason})")
                continue
            if not attempt.tracks:
                logger.info(f"Strategy {strategy.name}: no caption tracks listed for {video_id}")
                continue

            track, segments = self._captions_for(attempt, strategy, lang)
            if not segments:
                logger.warning(f"Strategy {strategy.name}: caption track for {video_id} yielded no segments")
                continue

            logger.info(
                f"Fetched {len(segments)} segments for {video_id} via {strategy.name} "
                f"in {int((time.time() - start_time) * 1000)}ms"
            )
            return TranscriptResult(
                video_info=build_video_info(video_id, attempt.player, attempt.tracks),
                segments=tuple(segments),
                language=track.language_code,
                track=track,
                strategy=strategy.name,
            )

        if best is None:
            logger.error(f"All strategies failed for {video_id}")
            raise UpstreamUnavailableError()
        if not best.playable:
            raise VideoUnplayableError(best.reason, best.status)

        logger.info(f"No usable captions for {video_id}; returning metadata only")
        return TranscriptResult(
            video_info=build_video_info(video_id, best.player, best.tracks),
            strategy=best.strategy,
        )
