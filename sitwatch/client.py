# sitwatch/client.py
# SitWatch API client: HTTP session + bearer token, the latest-videos feed,
# and the new-video watches built on top of it.

from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, List, Optional

import requests

from . import config
from .errors import FeedError, SitWatchError, UnknownEventError
from .net import make_session
from .watchers.base import Callback
from .watchers.registry import WatchHandle, WatchRegistry

LOG = logging.getLogger("sitwatch.client")

NEW_VIDEO = "newVideo"
# snake_case alias accepted for Python callers
EVENT_ALIASES = {NEW_VIDEO: NEW_VIDEO, "new_video": NEW_VIDEO}


class SitWatch:
    """Client for the SitWatch API.

    Usage:
        client = SitWatch(token="...")
        listener = client.on("newVideo", lambda v: print(v["title"]), interval_ms=10000)
        ...
        listener.stop()

    Watches need an asyncio event loop: the running one, or ``loop`` if given.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        on_token_change: Optional[Callable[[Optional[str]], Any]] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        interval_ms: Optional[int] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self._base_url = (base_url or config.BASE_URL).rstrip("/")
        self.on_token_change = on_token_change
        self.timeout = config.HTTP_TIMEOUT if timeout is None else timeout
        self.session = session or make_session()
        self.watches = WatchRegistry(
            self.fetch_latest_videos,
            default_interval_ms=interval_ms or config.WATCH_INTERVAL_MS,
            loop=loop,
        )

        self._token: Optional[str] = None
        initial = token if token is not None else config.TOKEN
        if initial:
            self.set_token(initial)

    def __enter__(self) -> "SitWatch":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.watches.stop_all()
        self.session.close()

    # ---------------------------- base URL ----------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_base_url(self, url: str) -> None:
        self._base_url = url.rstrip("/")

    def get_base_url(self) -> str:
        return self._base_url

    # ----------------------------- token ------------------------------

    def set_token(self, token: str) -> None:
        self._token = token
        self.session.headers["Authorization"] = f"Bearer {token}"
        self._notify_token_change(token)

    def get_token(self) -> Optional[str]:
        return self._token

    def has_valid_token(self) -> bool:
        return bool(self._token)

    def clear_token(self) -> None:
        self._token = None
        self.session.headers.pop("Authorization", None)
        self._notify_token_change(None)

    def _notify_token_change(self, token: Optional[str]) -> None:
        if self.on_token_change is None:
            return
        try:
            self.on_token_change(token)
        except Exception:
            LOG.exception("on_token_change callback raised")

    # ------------------------------ HTTP ------------------------------

    def _get(self, path: str, **kw) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            r = self.session.get(url, timeout=self.timeout, **kw)
            r.raise_for_status()
            return r.json()
        except requests.JSONDecodeError as e:
            raise SitWatchError(f"Invalid JSON from {url}: {e}", status=r.status_code) from e
        except requests.RequestException as e:
            raise SitWatchError.from_request_error(e) from e

    # ------------------------------ feed ------------------------------

    def get_latest_videos(self) -> List[dict]:
        """Return the most recently published videos, newest first."""
        data = self._get("/videos/latest")
        if not isinstance(data, list):
            raise FeedError(f"Expected a list of videos, got {type(data).__name__}", data=data)
        return data

    async def fetch_latest_videos(self) -> List[dict]:
        # requests is blocking; keep it off the event loop thread
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.get_latest_videos)

    # ----------------------------- watches ----------------------------

    def on(self, event: str, callback: Callback, interval_ms: Optional[int] = None) -> WatchHandle:
        """Call ``callback(video)`` for every newly published video.

        The first check runs immediately and only records where the feed
        currently is; videos published after that are delivered oldest first.
        """
        if not isinstance(event, str) or EVENT_ALIASES.get(event) != NEW_VIDEO:
            raise UnknownEventError(event, EVENT_ALIASES)
        return self.watches.start(callback, interval_ms)

    def observe_new_videos(self, callback: Callback, interval_ms: Optional[int] = None) -> int:
        """Deprecated: use ``on("newVideo", callback)``. Returns a timer id."""
        return self.watches.start_legacy(
            callback, interval_ms, notice=("observe_new_videos()", 'on("newVideo", callback)')
        )

    def stop_observing(self, observer_id: int) -> None:
        """Deprecated: use ``WatchHandle.stop()``."""
        self.watches.stop_legacy(observer_id, notice=("stop_observing()", "WatchHandle.stop()"))

    def stop_all_observing(self) -> None:
        """Deprecated: use ``WatchHandle.stop()``."""
        self.watches.stop_all_legacy(notice=("stop_all_observing()", "WatchHandle.stop()"))
