"""
In-memory TTL cache for rendered badges.

Entries expire lazily: an expired entry is evicted the next time it is looked
up, and every put sweeps out whatever else has expired. Nothing survives a
process restart.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class TTLCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, str]] = {}
        self._lock = threading.Lock()

    def _expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at > self.ttl_seconds

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, payload = entry
            if self._expired(stored_at, self._clock()):
                del self._entries[key]
                logger.debug(f"Cache EXPIRED: {key}")
                return None
            return payload

    def put(self, key: str, payload: str) -> None:
        with self._lock:
            now = self._clock()
            # Keys that are never looked up again would otherwise live forever
            stale = [k for k, (stored_at, _) in self._entries.items() if self._expired(stored_at, now)]
            for k in stale:
                del self._entries[k]
            if stale:
                logger.debug(f"Cache swept {len(stale)} expired entries")
            self._entries[key] = (now, payload)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
