"""In-memory TTL cache for church search results."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable, List, Optional

from ...models.domain import Coordinate, PlaceOfWorship, SearchCacheEntry

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30 * 60


def cache_key(coordinate: Coordinate, radius_m: float) -> str:
    return f"{coordinate.latitude:.4f},{coordinate.longitude:.4f},{radius_m:g}"


def copy_places(places: List[PlaceOfWorship]) -> List[PlaceOfWorship]:
    return [replace(place) for place in places]


class SearchCache:
    """Entries expire lazily: stale ones are ignored on read and overwritten on the next store."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[str, SearchCacheEntry] = {}

    def get(self, key: str) -> Optional[SearchCacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() - entry.timestamp >= self.ttl_seconds:
            logger.debug("Cache entry %s expired", key)
            return None
        return entry

    def put(self, key: str, results: List[PlaceOfWorship], tier: Optional[str] = None) -> SearchCacheEntry:
        entry = SearchCacheEntry(key=key, results=copy_places(results), timestamp=self.clock(), tier=tier)
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
