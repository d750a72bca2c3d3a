"""Caption track selection."""

from typing import Callable, List, Sequence

from ..models import CaptionTrack

TrackPredicate = Callable[[CaptionTrack], bool]


def _precedence(lang: str) -> List[TrackPredicate]:
    wanted = (lang or "").lower()

    def exact(track: CaptionTrack) -> bool:
        return track.language_code.lower() == wanted

    def prefix(track: CaptionTrack) -> bool:
        return bool(wanted) and track.language_code.lower().startswith(wanted)

    return [
        lambda t: exact(t) and not t.is_auto,
        exact,
        lambda t: prefix(t) and not t.is_auto,
        prefix,
    ]


def select_track(tracks: Sequence[CaptionTrack], lang: str) -> CaptionTrack:
    """
    Choose the best caption track for a requested language.

    Manual tracks are preferred over auto-generated ones, exact language
    matches over prefix matches ("en" matches "en-US"); the first track is the
    fallback when nothing matches.

    Raises:
        ValueError: If ``tracks`` is empty
    """
    if not tracks:
        raise ValueError("select_track requires at least one caption track")

    for predicate in _precedence(lang):
        for track in tracks:
            if predicate(track):
                return track
    return tracks[0]
