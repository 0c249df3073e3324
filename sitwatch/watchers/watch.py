# sitwatch/watchers/watch.py
# One polling subscription: fetch the feed, diff against the cursor,
# hand new items to the callback oldest-first, advance the cursor.

from __future__ import annotations
import enum
import logging
from typing import List, Optional, Sequence

from .base import Callback, FeedSource, Item, item_id
from .cursor import Cursor

LOG = logging.getLogger("sitwatch.watch")


class WatchState(enum.Enum):
    ACTIVE = "active"
    STOPPED = "stopped"


class Watch:
    """Polling subscription with its own cursor.

    The owning registry schedules ``tick()`` and is the only one that changes
    ``state``; the watch itself only touches its cursor and ``in_flight``.
    """

    def __init__(
        self,
        watch_id: int,
        feed: FeedSource,
        callback: Callback,
        interval_ms: int,
        *,
        legacy: bool = False,
    ):
        self.id = watch_id
        self.feed = feed
        self.callback = callback
        self.interval_ms = interval_ms
        self.legacy = legacy
        self.cursor = Cursor()
        self.state = WatchState.ACTIVE
        self.in_flight = False
        self.ticks = 0
        self.delivered = 0

    @property
    def active(self) -> bool:
        return self.state is WatchState.ACTIVE

    def __repr__(self) -> str:
        return (
            f"Watch(id={self.id}, interval_ms={self.interval_ms}, state={self.state.value}, "
            f"last_seen_id={self.cursor.last_seen_id!r})"
        )

    async def tick(self) -> None:
        if not self.active:
            return
        if self.in_flight:
            LOG.debug("Watch %s: previous fetch still running; skipping tick.", self.id)
            return

        self.in_flight = True
        try:
            self.ticks += 1
            try:
                items = await self.feed()
            except Exception:
                LOG.exception("Watch %s: feed fetch failed; will retry next tick.", self.id)
                return

            if not self.active:
                LOG.debug("Watch %s stopped during fetch; discarding result.", self.id)
                return
            self._process(items)
        finally:
            self.in_flight = False

    # ----------------------- internal -----------------------

    def _process(self, items: Optional[Sequence[Item]]) -> None:
        if not items:
            return

        try:
            ids = [item_id(it) for it in items]
        except ValueError:
            LOG.exception("Watch %s: malformed feed payload; skipping.", self.id)
            return

        if any(a <= b for a, b in zip(ids, ids[1:])):
            LOG.warning(
                "Watch %s: feed ids not strictly newest-first (%s); skipping.",
                self.id, ids,
            )
            return

        latest_id = ids[0]
        last = self.cursor.last_seen_id

        if last is None:
            self.cursor.advance(latest_id)
            LOG.debug("Watch %s: baseline set at id %s.", self.id, latest_id)
            return
        if latest_id == last:
            return
        if latest_id < last:
            LOG.warning(
                "Watch %s: feed went back from id %s to %s; keeping cursor.",
                self.id, last, latest_id,
            )
            return

        fresh: List[Item] = [it for it, i in zip(items, ids) if i > last]
        fresh.reverse()
        self._deliver(fresh)
        self.cursor.advance(latest_id)

    def _deliver(self, fresh: List[Item]) -> None:
        for it in fresh:
            # the callback may stop this watch mid-batch
            if not self.active:
                return
            try:
                self.callback(it)
                self.delivered += 1
            except Exception:
                LOG.exception("Watch %s: callback failed for item %s.", self.id, item_id(it))
