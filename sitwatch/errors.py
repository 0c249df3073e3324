# sitwatch/errors.py
# Exception types raised by the client and the watch engine.

from __future__ import annotations
from typing import Any, Optional

import requests


class SitWatchError(Exception):
    """API or transport failure, normalised from a requests exception.

    ``status`` is the HTTP status code, or 0 when the server could not be
    reached at all. ``data`` carries the decoded error body when there was one.
    """

    def __init__(self, message: str, status: int = 0, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    def __str__(self) -> str:
        if self.status:
            return f"[{self.status}] {self.message}"
        return self.message

    @classmethod
    def from_request_error(cls, exc: requests.RequestException) -> "SitWatchError":
        resp = exc.response
        if resp is not None:
            try:
                data = resp.json()
            except ValueError:
                data = resp.text or None
            message = None
            if isinstance(data, dict):
                message = data.get("message")
            return cls(message or "An error occurred", status=resp.status_code, data=data)
        if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
            return cls(f"Server unreachable: {exc}")
        return cls(str(exc) or "Network error occurred")


class FeedError(SitWatchError):
    """The latest-items endpoint answered with something that is not a feed."""


class WatchValidationError(ValueError):
    """Invalid arguments when creating a watch."""


class InvalidCallbackError(WatchValidationError, TypeError):
    """No callback given, or the callback is not callable."""


class UnknownEventError(WatchValidationError):
    def __init__(self, event: Optional[str], supported):
        self.event = event
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported event {event!r}; supported events: {', '.join(self.supported)}"
        )
