"""Request cache for generated presentations.

Entries are keyed by a request fingerprint built from the fields that shape
the generated output. Staleness is checked inline on every ``get`` so a
result older than the TTL is never served, whether or not the periodic
sweep has run yet. The sweep only reclaims memory.
"""

import asyncio
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from deckpilot.models.api import PresentationRequest

logger = logging.getLogger(__name__)

ENHANCED_SUFFIX = "_enhanced"


def fingerprint(request: PresentationRequest, enhanced: bool = False) -> str:
    """Canonical cache key for a generation request.

    Only topic, audience, slide count, duration and additional info take
    part; an absent ``additional_info`` normalizes to ``""``.
    """
    key = json.dumps(
        {
            "topic": request.topic,
            "audience": request.audience,
            "slideCount": request.slide_count,
            "duration": request.duration,
            "additionalInfo": request.additional_info or "",
        },
        separators=(",", ":"),
    )
    return key + ENHANCED_SUFFIX if enhanced else key


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    stored_at: float


class CacheStore:
    """In-process TTL cache with an injectable clock."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the live entry for ``key``, or None if absent or stale."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at >= self.ttl:
                return None
            return entry

    def put(self, key: str, value: Any) -> CacheEntry:
        entry = CacheEntry(key=key, value=value, stored_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def sweep(self) -> int:
        """Evict entries older than the TTL. Returns the number evicted."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if now - e.stored_at > self.ttl]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"Cache sweep evicted {len(expired)} entries")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


async def run_sweeper(cache: CacheStore, interval: float) -> None:
    """Sweep ``cache`` every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        cache.sweep()
