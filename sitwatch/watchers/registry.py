# sitwatch/watchers/registry.py
# Owns the watches of one client: creation, lookup, stop.
# Two surfaces over the same engine: handle objects (start/stop/stop_all)
# and the deprecated integer timer ids (start_legacy/stop_legacy/stop_all_legacy).

from __future__ import annotations
import asyncio
import inspect
import itertools
import logging
import warnings
from typing import Dict, List, Optional, Tuple, Union

from ..errors import InvalidCallbackError, WatchValidationError
from .base import Callback, FeedSource
from .scheduler import RepeatingTask
from .watch import Watch, WatchState

LOG = logging.getLogger("sitwatch.registry")

DEFAULT_INTERVAL_MS = 5000


class WatchHandle:
    """Caller-facing reference to a running watch."""

    __slots__ = ("_registry", "_watch")

    def __init__(self, registry: "WatchRegistry", watch: Watch):
        self._registry = registry
        self._watch = watch

    @property
    def id(self) -> int:
        return self._watch.id

    def stop(self) -> None:
        self._registry.stop(self)

    def is_active(self) -> bool:
        return self._watch.active and self._watch.id in self._registry

    def get_interval(self) -> int:
        return self._watch.interval_ms

    def __repr__(self) -> str:
        return f"WatchHandle(id={self.id}, interval_ms={self.get_interval()}, active={self.is_active()})"


Notice = Tuple[str, str]


def _check_interval(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise WatchValidationError(f"{name} must be a positive integer, got {value!r}")
    return value


def _is_async(callback: object) -> bool:
    return inspect.iscoroutinefunction(callback) or inspect.iscoroutinefunction(
        getattr(callback, "__call__", None)
    )


def _deprecated(old: str, new: str, wrapped: bool = False) -> None:
    LOG.warning("%s is deprecated; use %s instead.", old, new)
    # point the warning at user code, past the registry (and client) frames
    warnings.warn(
        f"{old} is deprecated; use {new} instead.",
        DeprecationWarning,
        stacklevel=4 if wrapped else 3,
    )


class WatchRegistry:
    def __init__(
        self,
        feed: FeedSource,
        default_interval_ms: int = DEFAULT_INTERVAL_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self._feed = feed
        self._default_interval_ms = _check_interval(default_interval_ms, "default_interval_ms")
        self._loop = loop
        self._watches: Dict[int, Watch] = {}
        self._tasks: Dict[int, RepeatingTask] = {}
        self._ids = itertools.count(1)

    # ----------------------- handle API -----------------------

    def start(self, callback: Callback, interval_ms: Optional[int] = None) -> WatchHandle:
        watch = self._create(callback, interval_ms, legacy=False)
        return WatchHandle(self, watch)

    def stop(self, handle: Union[WatchHandle, int]) -> None:
        watch_id = handle.id if isinstance(handle, WatchHandle) else handle
        watch = self._watches.pop(watch_id, None)
        if watch is None:
            return
        watch.state = WatchState.STOPPED
        task = self._tasks.pop(watch_id, None)
        if task is not None:
            task.cancel()
        LOG.info(
            "Stopped watch %s after %d ticks, %d delivered (last_seen_id=%s).",
            watch_id, watch.ticks, watch.delivered, watch.cursor.last_seen_id,
        )

    def stop_all(self) -> None:
        for watch_id in list(self._watches):
            self.stop(watch_id)

    # ----------------------- legacy API -----------------------
    # ``notice`` lets a wrapping API name itself in the deprecation message.

    def start_legacy(
        self, callback: Callback, interval_ms: Optional[int] = None, *, notice: Optional[Notice] = None
    ) -> int:
        _deprecated(*(notice or ("start_legacy()", "start()")), wrapped=notice is not None)
        return self._create(callback, interval_ms, legacy=True).id

    def stop_legacy(self, timer_id: int, *, notice: Optional[Notice] = None) -> None:
        _deprecated(*(notice or ("stop_legacy()", "WatchHandle.stop()")), wrapped=notice is not None)
        watch = self._watches.get(timer_id)
        if watch is not None and watch.legacy:
            self.stop(timer_id)

    def stop_all_legacy(self, *, notice: Optional[Notice] = None) -> None:
        _deprecated(*(notice or ("stop_all_legacy()", "WatchHandle.stop()")), wrapped=notice is not None)
        for watch_id, watch in list(self._watches.items()):
            if watch.legacy:
                self.stop(watch_id)

    # ----------------------- inspection -----------------------

    def get(self, watch_id: int) -> Optional[Watch]:
        return self._watches.get(watch_id)

    def active_ids(self) -> List[int]:
        return list(self._watches)

    def __contains__(self, watch_id: object) -> bool:
        return watch_id in self._watches

    def __len__(self) -> int:
        return len(self._watches)

    # ----------------------- internal -----------------------

    def _validate_interval(self, interval_ms: Optional[int]) -> int:
        if not interval_ms:
            return self._default_interval_ms
        return _check_interval(interval_ms, "interval_ms")

    def _create(self, callback: Callback, interval_ms: Optional[int], *, legacy: bool) -> Watch:
        if callback is None:
            raise InvalidCallbackError("A callback function is required.")
        if not callable(callback):
            raise InvalidCallbackError(f"Callback must be callable, got {type(callback).__name__}.")
        if _is_async(callback):
            raise InvalidCallbackError("Callback must be a plain function; coroutine functions are not awaited.")
        interval = self._validate_interval(interval_ms)

        watch = Watch(next(self._ids), self._feed, callback, interval, legacy=legacy)
        task = RepeatingTask(
            watch.tick, interval / 1000.0, name=f"sitwatch-watch-{watch.id}", loop=self._loop
        )
        # start() fails without an event loop; register only once it is scheduled
        task.start()
        self._watches[watch.id] = watch
        self._tasks[watch.id] = task
        LOG.info("Started %swatch %s (every %d ms).", "legacy " if legacy else "", watch.id, interval)
        return watch
