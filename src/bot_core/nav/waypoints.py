# src/bot_core/nav/waypoints.py
"""
Named locations and visited-chunk memory.

WaypointRegistry: upsert-only map of name -> position; entries never expire.
VisitedChunkSet: append-only set of (chunk_x, chunk_z) buckets the agent
has passed through. Informational only; nothing gates on it.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Set, Tuple

from spec.types import Vec3
from .errors import WaypointNotFound


log = logging.getLogger(__name__)

ChunkId = Tuple[int, int]


class WaypointRegistry:
    def __init__(self) -> None:
        self._waypoints: Dict[str, Vec3] = {}

    def __len__(self) -> int:
        return len(self._waypoints)

    def __contains__(self, name: object) -> bool:
        return name in self._waypoints

    def add(self, name: str, position: Vec3) -> None:
        """Register or overwrite a named waypoint."""
        if not name or not name.strip():
            raise ValueError("Waypoint name must be a non-empty string")
        self._waypoints[name] = position
        log.info("Waypoint added: %s at %s", name, position)

    def get(self, name: str) -> Optional[Vec3]:
        return self._waypoints.get(name)

    def require(self, name: str) -> Vec3:
        """Look up `name` or raise WaypointNotFound."""
        position = self._waypoints.get(name)
        if position is None:
            raise WaypointNotFound(details={"name": name})
        return position

    def names(self) -> List[str]:
        return sorted(self._waypoints)


class VisitedChunkSet:
    def __init__(self, chunk_size: int = 16) -> None:
        self._chunk_size = chunk_size
        self._chunks: Set[ChunkId] = set()

    def __len__(self) -> int:
        return len(self._chunks)

    def chunk_key(self, position: Vec3) -> ChunkId:
        return (
            math.floor(position.x / self._chunk_size),
            math.floor(position.z / self._chunk_size),
        )

    def mark(self, position: Vec3) -> ChunkId:
        key = self.chunk_key(position)
        self._chunks.add(key)
        return key

    def is_visited(self, position: Vec3) -> bool:
        return self.chunk_key(position) in self._chunks
