# src/bot_core/nav/__init__.py
"""
Navigation subsystem for bot_core.

Provides:
- NavDispatcher: adaptive goto() front end (prediction, cache, fallback)
- ChunkWaypointPlanner / plan_chunk_waypoints: long trips as short hops
- PathCache: TTL + capacity bounded route memo
- TimingTracker: rolling duration window and timeout predictor
- WaypointRegistry / VisitedChunkSet: named places and chunk memory
- BotCoreNavigator: Navigator implementation over BotCore move_to
- Error taxonomy: NavigationFailure and subclasses
"""

from __future__ import annotations

from .adapter import BotCoreNavigator
from .chunk_planner import (
    ChunkRouteReport,
    ChunkWaypointPlanner,
    HopRecord,
    HopResult,
    plan_chunk_waypoints,
)
from .dispatcher import DispatchMode, NavDispatcher, NavigationOutcome, NavStats
from .errors import (
    NavigationFailure,
    NavigationTimeout,
    UnreachableError,
    WaypointNotFound,
    is_timeout,
)
from .path_cache import PathCache, PathCacheEntry, cache_key
from .timing import TimingTracker
from .waypoints import VisitedChunkSet, WaypointRegistry

__all__ = [
    "BotCoreNavigator",
    "ChunkRouteReport",
    "ChunkWaypointPlanner",
    "HopRecord",
    "HopResult",
    "plan_chunk_waypoints",
    "DispatchMode",
    "NavDispatcher",
    "NavigationOutcome",
    "NavStats",
    "NavigationFailure",
    "NavigationTimeout",
    "UnreachableError",
    "WaypointNotFound",
    "is_timeout",
    "PathCache",
    "PathCacheEntry",
    "cache_key",
    "TimingTracker",
    "VisitedChunkSet",
    "WaypointRegistry",
]
