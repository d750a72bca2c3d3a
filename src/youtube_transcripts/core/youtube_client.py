"""
Thin InnerTube HTTP client.

Every call is attempted once and bounded by the configured timeout twice over:
``requests`` applies it to connecting and to each read, and the body is
streamed against a deadline so a slow trickle cannot outlast it either.
Network errors, timeouts, non-OK statuses and undecodable bodies are soft
failures: they are logged and reported as ``None`` so callers can fall back.
"""

import json
import time
from typing import Any, Callable, Dict, Optional
from urllib.parse import urljoin, urlparse

import requests
from requests.adapters import HTTPAdapter

from .config import NetworkConfig, config
from ..utils.logging import get_logger

logger = get_logger("youtube_client")

ANDROID = "ANDROID"
WEB = "WEB"

READ_CHUNK_SIZE = 16384

Clock = Callable[[], float]


def new_session(network: NetworkConfig) -> requests.Session:
    """Create a session without retries; fallback is handled by the strategy chain."""
    s = requests.Session()
    s.mount("https://", HTTPAdapter(max_retries=0))
    s.mount("http://", HTTPAdapter(max_retries=0))
    s.headers.update({
        "Accept": "*/*",
        "Accept-Language": f"{network.hl}-{network.gl},{network.hl};q=0.8",
    })
    s.cookies.set("CONSENT", "YES+1", domain=".youtube.com")
    s.cookies.set("PREF", f"hl={network.hl}", domain=".youtube.com")
    return s


class YouTubeClient:
    """Issues player, watch-page, browse, next and caption requests."""

    def __init__(
        self,
        network: Optional[NetworkConfig] = None,
        session: Optional[requests.Session] = None,
        clock: Clock = time.monotonic
    ):
        self.network = network or config.network
        self.session = session or new_session(self.network)
        self._clock = clock

    # ------------------------------------------------------------------
    # client identities
    # ------------------------------------------------------------------

    def client_context(self, client: str) -> Dict[str, Any]:
        if client == ANDROID:
            return {"client": {
                "clientName": ANDROID,
                "clientVersion": self.network.android_client_version,
                "androidSdkVersion": self.network.android_sdk_version,
                "hl": self.network.hl,
                "gl": self.network.gl,
            }}
        return {"client": {
            "clientName": WEB,
            "clientVersion": self.network.web_client_version,
            "hl": self.network.hl,
            "gl": self.network.gl,
        }}

    def user_agent(self, client: str) -> str:
        if client == ANDROID:
            return self.network.android_user_agent
        return self.network.desktop_user_agent

    # ------------------------------------------------------------------
    # transport
    # ------------------------------------------------------------------

    def _endpoint(self, name: str) -> str:
        return f"{self.network.base_url}/youtubei/v1/{name}"

    def _read_body(self, r: requests.Response, deadline: float, what: str) -> Optional[bytes]:
        """Read a streamed body, giving up once ``deadline`` has passed."""
        chunks = []
        try:
            for chunk in r.iter_content(chunk_size=READ_CHUNK_SIZE):
                if self._clock() > deadline:
                    logger.warning(f"{what} exceeded {self.network.http_timeout:g}s; aborting")
                    return None
                chunks.append(chunk)
        except requests.RequestException as e:
            logger.warning(f"{what} failed while reading the body: {e}")
            return None
        finally:
            r.close()
        return b"".join(chunks)

    def _post_json(self, name: str, client: str, body: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        what = f"InnerTube {name} ({client})"
        payload = dict(body, context=self.client_context(client))
        headers = {"Content-Type": "application/json", "User-Agent": self.user_agent(client)}
        if client == WEB:
            headers.update({
                "X-YouTube-Client-Name": "1",
                "X-YouTube-Client-Version": self.network.web_client_version,
                "Origin": self.network.base_url,
            })
        deadline = self._clock() + self.network.http_timeout
        try:
            r = self.session.post(
                self._endpoint(name),
                params={"key": self.network.innertube_api_key, "prettyPrint": "false"},
                json=payload,
                headers=headers,
                timeout=self.network.http_timeout,
                stream=True,
            )
        except requests.RequestException as e:
            logger.warning(f"{what} request failed: {e}")
            return None

        if not r.ok:
            logger.warning(f"{what} returned HTTP {r.status_code}")
            r.close()
            return None
        raw = self._read_body(r, deadline, what)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning(f"{what} returned a non-JSON body")
            return None
        return data if isinstance(data, dict) else None

    def _get_text(self, url: str, client: str, params: Optional[Dict[str, str]] = None) -> Optional[str]:
        what = f"GET {url}"
        deadline = self._clock() + self.network.http_timeout
        try:
            r = self.session.get(
                url,
                params=params,
                headers={"User-Agent": self.user_agent(client)},
                timeout=self.network.http_timeout,
                stream=True,
            )
        except requests.RequestException as e:
            logger.warning(f"{what} failed: {e}")
            return None

        if not r.ok:
            logger.warning(f"{what} returned HTTP {r.status_code}")
            r.close()
            return None
        raw = self._read_body(r, deadline, what)
        if raw is None:
            return None
        return raw.decode(r.encoding or "utf-8", errors="replace")

    # ------------------------------------------------------------------
    # endpoints
    # ------------------------------------------------------------------

    def player(self, video_id: str, client: str = ANDROID) -> Optional[Dict[str, Any]]:
        """Query the player endpoint impersonating ``client``."""
        return self._post_json("player", client, {"videoId": video_id})

    def watch_page(self, video_id: str) -> Optional[str]:
        """Fetch the public watch page HTML."""
        return self._get_text(
            f"{self.network.base_url}/watch",
            WEB,
            params={"v": video_id, "hl": self.network.hl},
        )

    def browse(self, browse_id: str) -> Optional[Dict[str, Any]]:
        return self._post_json("browse", WEB, {"browseId": browse_id})

    def next(self, video_id: Optional[str] = None, continuation: Optional[str] = None) -> Optional[Dict[str, Any]]:
        body: Dict[str, Any] = {}
        if video_id:
            body["videoId"] = video_id
        if continuation:
            body["continuation"] = continuation
        return self._post_json("next", WEB, body)

    def resolve_caption_url(self, url: str) -> Optional[str]:
        """
        Resolve a track-supplied caption URL and check it points at YouTube.

        Returns:
            The absolute https URL, or None when the host is not allowed
        """
        if not url:
            return None
        absolute = urljoin(self.network.base_url + "/", url)
        parsed = urlparse(absolute)
        host = (parsed.hostname or "").lower()
        if parsed.scheme != "https" or host not in self.network.allowed_caption_hosts:
            logger.warning(f"Refusing caption URL on unexpected host: {host or url}")
            return None
        return absolute

    def caption_payload(self, url: str, client: str = ANDROID) -> Optional[str]:
        """Download a caption document from a track ``baseUrl``."""
        resolved = self.resolve_caption_url(url)
        if resolved is None:
            return None
        return self._get_text(resolved, client)
