"""Bounded, expiring cache for ranked recommendation lists."""
from __future__ import annotations

import copy
import hashlib
import json
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Iterable, Optional, Tuple


def cache_key(
    item_ids: Iterable[str],
    profile_signature: Dict[str, Any],
    context_signature: Dict[str, Any],
    options: Dict[str, Any],
) -> str:
    """Hash of sorted item ids, profile, context and options."""

    payload = {
        "items": sorted(item_ids),
        "profile": profile_signature,
        "context": context_signature,
        "options": options,
    }
    encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


class RecommendationCache:
    """LRU cache whose entries expire ``ttl_seconds`` after insertion.

    Expiry is checked on read; there is no background sweeper. Values are
    deep-copied on the way in and out, so callers never share cached objects.
    """

    def __init__(
        self,
        ttl_seconds: float = 600,
        max_entries: int = 128,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        if self.max_entries <= 0 or self.ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl_seconds, copy.deepcopy(value))
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["RecommendationCache", "cache_key"]
