# src/bot_core/nav/path_cache.py
"""
Bounded, TTL-based memo of previously traveled routes.

Keys are the floor-rounded endpoints of a (from, to) pair, so requests
whose endpoints land in the same block share an entry. Eviction is by
first insertion order (oldest new key first), not by recency of use;
overwriting a key refreshes its timestamp but not its slot. Expiry is
lazy: get() ignores stale entries but leaves them in place until they
are overwritten, evicted, or swept by purge_expired().
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from env.loader import CacheConfig
from spec.types import Vec3


log = logging.getLogger(__name__)

BlockCoord = Tuple[int, int, int]
CacheKey = Tuple[BlockCoord, BlockCoord]


def cache_key(origin: Vec3, target: Vec3) -> CacheKey:
    """Quantize a (from, to) pair to whole blocks."""
    return origin.floored(), target.floored()


@dataclass(frozen=True)
class PathCacheEntry:
    key: CacheKey
    route: Tuple[Vec3, ...]
    inserted_at: float


class PathCache:
    """Insertion-ordered route cache with TTL and a hard entry cap."""

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cfg = config if config is not None else CacheConfig()
        self._clock = clock
        self._entries: "OrderedDict[CacheKey, PathCacheEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, origin: Vec3, target: Vec3) -> Optional[List[Vec3]]:
        key = cache_key(origin, target)
        entry = self._entries.get(key)
        if entry is None:
            log.debug("path cache miss key=%s", key)
            return None
        if not self._is_fresh(entry):
            log.debug("path cache stale key=%s", key)
            return None
        log.debug("path cache hit key=%s hops=%d", key, len(entry.route))
        return list(entry.route)

    def put(self, origin: Vec3, target: Vec3, route: Sequence[Vec3]) -> None:
        key = cache_key(origin, target)

        # A full cache always gives up its oldest entry, even when `key` is
        # already present. An overwritten key keeps its insertion slot.
        if len(self._entries) >= self._cfg.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            log.debug("path cache full, evicted key=%s", evicted)

        self._entries[key] = PathCacheEntry(
            key=key,
            route=tuple(route),
            inserted_at=self._clock(),
        )

    def purge_expired(self) -> int:
        """Remove stale entries; returns how many were dropped."""
        stale = [k for k, e in self._entries.items() if not self._is_fresh(e)]
        for key in stale:
            del self._entries[key]
        if stale:
            log.info("Cleaned %d expired path cache entries", len(stale))
        return len(stale)

    def keys(self) -> List[CacheKey]:
        return list(self._entries)

    def _is_fresh(self, entry: PathCacheEntry) -> bool:
        return (self._clock() - entry.inserted_at) < self._cfg.ttl_s
