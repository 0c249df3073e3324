from .base import Item, FeedSource, item_id
from .cursor import Cursor
from .registry import DEFAULT_INTERVAL_MS, WatchHandle, WatchRegistry
from .scheduler import RepeatingTask
from .watch import Watch, WatchState

__all__ = [
    "Item",
    "FeedSource",
    "item_id",
    "Cursor",
    "DEFAULT_INTERVAL_MS",
    "WatchHandle",
    "WatchRegistry",
    "RepeatingTask",
    "Watch",
    "WatchState",
]
