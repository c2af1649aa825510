"""
Content-addressed memoisation for derived statistics.

Results are keyed by a SHA-256 of the canonical JSON form of the input
snapshot, so an unchanged snapshot is a cache hit and any change to it
is a miss. There is no explicit invalidation.
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def snapshot_key(snapshot: Any) -> str:
    """Stable hash of a JSON-serialisable snapshot (enums/datetimes via str)."""
    payload = json.dumps(snapshot, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class StatsCache:
    """Bounded LRU cache keyed by snapshot content.

    ``max_entries <= 0`` disables storage; every lookup then computes.
    Computation runs outside the lock, so a compute callback may itself
    use the cache.
    """

    def __init__(self, max_entries: int = 128):
        self._max_entries = max_entries
        self._entries: OrderedDict[str, Any] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_compute(self, snapshot: Any, compute: Callable[[], T]) -> T:
        key = snapshot_key(snapshot)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                logger.debug("Stats cache hit %s", key[:12])
                return self._entries[key]
            self.misses += 1

        logger.debug("Stats cache miss %s", key[:12])
        value = compute()

        if self._max_entries > 0:
            with self._lock:
                self._entries[key] = value
                self._entries.move_to_end(key)
                while len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
