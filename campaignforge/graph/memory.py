"""
memory.py
---------
Per-conversation system-context cache.

Building the system context for a brand conversation means serializing a
large analysis payload; the cache lets later turns for the same conversation
key reuse it instead of rebuilding it. Entries expire on a sliding window
(one hour after their last access by default) and are swept lazily: callers
invoke `maybe_sweep()` at the start of a turn, which sweeps with a fixed
probability instead of running a background task. A late sweep only costs
memory; an early eviction only costs a rebuild.

All operations take a single lock, so concurrent requests for different keys
never corrupt the map. Racing writes to the same key are last-writer-wins.
"""
from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_SECONDS = 60 * 60
DEFAULT_SWEEP_PROBABILITY = 0.1


@dataclass
class ContextEntry:
    key: str
    system_context: str
    created_at: float
    last_accessed_at: float


class ContextCache:
    def __init__(
        self,
        retention_seconds: float = DEFAULT_RETENTION_SECONDS,
        sweep_probability: float = DEFAULT_SWEEP_PROBABILITY,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.retention_seconds = retention_seconds
        self.sweep_probability = sweep_probability
        self._clock = clock
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._items: Dict[str, ContextEntry] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, key: str) -> Optional[ContextEntry]:
        """Return a copy of the entry, or None. Does not refresh the entry."""
        with self._lock:
            entry = self._items.get(key)
            return replace(entry) if entry is not None else None

    def put(self, key: str, system_context: str) -> ContextEntry:
        now = self._clock()
        entry = ContextEntry(key=key, system_context=system_context, created_at=now, last_accessed_at=now)
        with self._lock:
            self._items[key] = entry
        return replace(entry)

    def touch(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            entry = self._items.get(key)
            if entry is None:
                return False
            entry.last_accessed_at = now
            return True

    def sweep(self, now: Optional[float] = None) -> int:
        """
        Remove every entry idle for longer than the retention window.
        Returns how many entries were removed.
        """
        cutoff = (self._clock() if now is None else now) - self.retention_seconds
        with self._lock:
            snapshot = list(self._items.items())

        removed = 0
        for key, entry in snapshot:
            if entry.last_accessed_at >= cutoff:
                continue
            with self._lock:
                # Re-check: the key may have been rewritten or touched since the snapshot.
                current = self._items.get(key)
                if current is not None and current.last_accessed_at < cutoff:
                    del self._items[key]
                    removed += 1
        if removed:
            logger.debug("Swept %d stale conversation context(s)", removed)
        return removed

    def maybe_sweep(self) -> int:
        if self._rng.random() < self.sweep_probability:
            return self.sweep()
        return 0
