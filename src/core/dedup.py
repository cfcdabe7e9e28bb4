"""Deduplication helpers (core domain)."""

from __future__ import annotations

from collections import OrderedDict
from typing import Optional

DEFAULT_CAPACITY = 1000


class DedupGuard:
    """Bounded record of processed message ids.

    Ids are evicted oldest-inserted first once the capacity is exceeded, which
    keeps memory flat over long uptimes. A re-delivered id does not refresh
    its position.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Dedup capacity must be positive: {capacity}")
        self._capacity = capacity
        self._seen: OrderedDict[str, None] = OrderedDict()

    def admit(self, message_id: Optional[str]) -> bool:
        """Return True if the message should be processed.

        Messages without an id cannot be tracked and are always admitted.
        """

        if message_id is None:
            return True
        if message_id in self._seen:
            return False

        self._seen[message_id] = None
        if len(self._seen) > self._capacity:
            self._seen.popitem(last=False)
        return True

    def __contains__(self, message_id: str) -> bool:
        return message_id in self._seen

    def __len__(self) -> int:
        return len(self._seen)
