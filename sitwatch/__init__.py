"""SitWatch API client with polling watches for newly published videos."""

from .client import NEW_VIDEO, SitWatch
from .errors import (
    FeedError,
    InvalidCallbackError,
    SitWatchError,
    UnknownEventError,
    WatchValidationError,
)
from .watchers import WatchHandle, WatchRegistry

__version__ = "1.0.0"

__all__ = [
    "NEW_VIDEO",
    "SitWatch",
    "FeedError",
    "InvalidCallbackError",
    "SitWatchError",
    "UnknownEventError",
    "WatchValidationError",
    "WatchHandle",
    "WatchRegistry",
]
