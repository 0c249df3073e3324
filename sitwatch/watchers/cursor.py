from __future__ import annotations
from typing import Optional


class Cursor:
    """High-water mark of the newest item id already handled by one watch.

    ``last_seen_id`` is ``None`` until the first successful sample sets the
    baseline. It only ever moves forward.
    """

    __slots__ = ("_last_seen_id",)

    def __init__(self, last_seen_id: Optional[int] = None):
        self._last_seen_id = last_seen_id

    @property
    def last_seen_id(self) -> Optional[int]:
        return self._last_seen_id

    @property
    def is_set(self) -> bool:
        return self._last_seen_id is not None

    def is_newer(self, item_id: int) -> bool:
        return self._last_seen_id is None or item_id > self._last_seen_id

    def advance(self, item_id: int) -> bool:
        """Move to *item_id* if it is ahead of the current position."""
        if not self.is_newer(item_id):
            return False
        self._last_seen_id = item_id
        return True

    def __repr__(self) -> str:
        return f"Cursor(last_seen_id={self._last_seen_id!r})"
