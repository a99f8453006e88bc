# src/bot_core/nav/dispatcher.py
"""
Navigation request dispatcher: the only navigation surface callers see.

For each goto() it picks one of:
  - CHUNKED:  timing history says a direct request would time out, so go
              straight to the chunk waypoint planner
  - CACHED:   a fresh cached route exists for this (from, to) block pair,
              replay it hop by hop
  - DIRECT:   hand the goal to the underlying navigator
  - FALLBACK: the attempt above timed out; one chunked retry

Only timeout-class failures are absorbed (and only once). Unreachable
targets and anything else propagate unchanged.

One dispatcher per agent. It owns its timing history, route cache,
visited-chunk memory and waypoint registry; none of that is shared or
locked, and callers must not overlap goto() calls on the same agent.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, TypedDict

from env.loader import NavigationConfig
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.navigation import Navigator
from spec.types import GotoOptions, NavigationGoal, Vec3
from .chunk_planner import ChunkRouteReport, ChunkWaypointPlanner
from .errors import NavigationFailure, is_timeout
from .path_cache import PathCache
from .timing import TimingTracker
from .waypoints import ChunkId, VisitedChunkSet, WaypointRegistry


log = logging.getLogger(__name__)


class DispatchMode(Enum):
    DIRECT = "direct"
    CACHED = "cached"
    CHUNKED = "chunked"
    FALLBACK = "fallback"


@dataclass
class NavigationOutcome:
    """Successful result of NavDispatcher.goto (failures raise)."""

    success: bool
    mode: DispatchMode
    report: Optional[ChunkRouteReport] = None  # set when the chunk planner ran


class NavStats(TypedDict):
    cached_paths: int
    waypoints: int
    visited_chunks: int
    average_time: float   # milliseconds
    timeouts: int


class NavDispatcher:
    """
    Adaptive front end over a point-to-point Navigator.

    Public surface:
        goto(goal, options) -> NavigationOutcome
        goto_waypoint(name, options) -> NavigationOutcome
        add_waypoint(name, position) -> None
        get_stats() -> NavStats
        is_chunk_visited(position) -> bool
        cleanup() -> int
    """

    def __init__(
        self,
        navigator: Navigator,
        config: Optional[NavigationConfig] = None,
        *,
        bus: Optional[EventBus] = None,
        clock: Callable[[], float] = time.monotonic,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        """
        Build a dispatcher bound to one agent's navigator.

        `clock` drives cache expiry (seconds); `timer` measures direct
        request durations (seconds). Both are injectable for tests.
        """
        self._navigator = navigator
        self._cfg = config if config is not None else NavigationConfig()
        self._bus = bus
        self._timer = timer

        self.timing = TimingTracker(self._cfg.timing)
        self.cache = PathCache(self._cfg.cache, clock=clock)
        self.visited = VisitedChunkSet(self._cfg.chunks.chunk_size)
        self.waypoints = WaypointRegistry()
        self.planner = ChunkWaypointPlanner(
            navigator,
            self.visited,
            self._cfg.chunks,
            bus=bus,
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def goto(
        self,
        goal: NavigationGoal,
        options: Optional[GotoOptions] = None,
    ) -> NavigationOutcome:
        """
        Navigate to `goal`.

        Raises:
            NavigationTimeout / TimeoutError if the request timed out and no
                fallback was allowed, or the fallback itself timed out.
            UnreachableError (or any other failure) unchanged.
        """
        opts = options if options is not None else GotoOptions()
        origin = self._navigator.current_position()
        target = goal.position
        distance = origin.distance_to(target)

        self._emit(
            EventType.NAV_REQUESTED,
            f"goto {target}",
            {"from": origin.as_dict(), "to": target.as_dict(), "distance": distance},
        )

        try:
            return self._attempt(goal, origin, distance, opts)
        except (NavigationFailure, TimeoutError) as exc:
            if not is_timeout(exc):
                self._emit_failure(target, exc)
                raise

            log.info("Pathfinding timeout on the way to %s", target)
            self.timing.record_timeout()
            self._emit(
                EventType.NAV_TIMEOUT,
                f"timeout on the way to {target}",
                {"to": target.as_dict(), "timeouts": self.timing.timeouts},
            )

            if not opts.retry_with_fallback:
                self._emit_failure(target, exc)
                raise

        return self._fallback(target)

    def goto_waypoint(
        self,
        name: str,
        options: Optional[GotoOptions] = None,
    ) -> NavigationOutcome:
        """Navigate to a registered waypoint; WaypointNotFound if unknown."""
        position = self.waypoints.require(name)
        log.info("Navigating to waypoint: %s", name)
        goal = NavigationGoal(position, self._cfg.goto.waypoint_tolerance)
        return self.goto(goal, options)

    def chunk_based_goto(self, target: Vec3) -> ChunkRouteReport:
        """Direct access to the chunk planner, bypassing prediction and cache."""
        return self.planner.chunk_based_goto(target)

    # ------------------------------------------------------------------
    # Waypoints / chunks / diagnostics
    # ------------------------------------------------------------------

    def add_waypoint(self, name: str, position: Vec3) -> None:
        self.waypoints.add(name, position)

    def is_chunk_visited(self, position: Vec3) -> bool:
        return self.visited.is_visited(position)

    def chunk_key(self, position: Vec3) -> ChunkId:
        return self.visited.chunk_key(position)

    def cleanup(self) -> int:
        """Sweep expired routes out of the cache; returns the number removed."""
        return self.cache.purge_expired()

    def get_stats(self) -> NavStats:
        return NavStats(
            cached_paths=len(self.cache),
            waypoints=len(self.waypoints),
            visited_chunks=len(self.visited),
            average_time=self.timing.average_time(),
            timeouts=self.timing.timeouts,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _timeout_for(self, opts: GotoOptions) -> float:
        if opts.timeout_s is not None:
            return opts.timeout_s
        return self._cfg.goto.default_timeout_s

    def _attempt(
        self,
        goal: NavigationGoal,
        origin: Vec3,
        distance: float,
        opts: GotoOptions,
    ) -> NavigationOutcome:
        target = goal.position

        if self.timing.predict_timeout(distance):
            log.info(
                "Path to %s likely to timeout (distance: %.1f), using chunk-based routing",
                target,
                distance,
            )
            self._emit(
                EventType.NAV_PREDICTED_TIMEOUT,
                f"predicted timeout to {target}",
                {"to": target.as_dict(), "distance": distance},
            )
            report = self.planner.chunk_based_goto(target)
            self._emit_success(target, DispatchMode.CHUNKED)
            return NavigationOutcome(True, DispatchMode.CHUNKED, report)

        if opts.use_cache:
            route = self.cache.get(origin, target)
            if route is not None:
                log.info("Using cached path to %s (%d hops)", target, len(route))
                self._emit(
                    EventType.NAV_CACHE_HIT,
                    f"replaying cached route to {target}",
                    {"to": target.as_dict(), "hops": len(route)},
                )
                self.planner.follow_route(
                    route,
                    tolerance=self._cfg.replay.hop_tolerance,
                    timeout_s=self._cfg.replay.hop_timeout_s,
                )
                self._emit_success(target, DispatchMode.CACHED)
                return NavigationOutcome(True, DispatchMode.CACHED)

        self._navigator.set_movements(self._cfg.movement)

        start = self._timer()
        traveled = self._navigator.goto(goal, timeout_s=self._timeout_for(opts))
        elapsed_ms = (self._timer() - start) * 1000.0

        self.timing.record_success(elapsed_ms)
        route = list(traveled) if traveled else [target]
        self.cache.put(origin, target, route)
        self.visited.mark(target)

        self._emit_success(target, DispatchMode.DIRECT, elapsed_ms=elapsed_ms)
        return NavigationOutcome(True, DispatchMode.DIRECT)

    def _fallback(self, target: Vec3) -> NavigationOutcome:
        """
        The single retry after a timeout.

        Goes to the chunk planner directly; the planner has no retry branch
        of its own, so a failure here propagates to the caller.
        """
        log.info("Retrying with chunk-based pathfinding to %s", target)
        self._emit(EventType.NAV_FALLBACK, f"chunked retry to {target}", {"to": target.as_dict()})
        try:
            report = self.planner.chunk_based_goto(target)
        except (NavigationFailure, TimeoutError) as exc:
            self._emit_failure(target, exc)
            raise
        self._emit_success(target, DispatchMode.FALLBACK)
        return NavigationOutcome(True, DispatchMode.FALLBACK, report)

    def _emit_success(self, target: Vec3, mode: DispatchMode, **extra: Any) -> None:
        payload: Dict[str, Any] = {"to": target.as_dict(), "mode": mode.value}
        payload.update(extra)
        self._emit(EventType.NAV_SUCCEEDED, f"reached {target} ({mode.value})", payload)

    def _emit_failure(self, target: Vec3, exc: BaseException) -> None:
        self._emit(
            EventType.NAV_FAILED,
            f"failed to reach {target}",
            {"to": target.as_dict(), "error": getattr(exc, "code", type(exc).__name__)},
        )

    def _emit(self, event_type: EventType, message: str, payload: Dict[str, Any]) -> None:
        if self._bus is None:
            return
        log_event(
            bus=self._bus,
            module="bot_core.nav.dispatcher",
            event_type=event_type,
            message=message,
            payload=payload,
        )
