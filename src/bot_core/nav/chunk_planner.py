# src/bot_core/nav/chunk_planner.py
"""
Chunk waypoint planner: long trips as a chain of short hops.

Long straight-line requests make block-level search blow up. Instead we
drop evenly spaced intermediate points along the segment from the current
position to the target, drive the navigator through them with a short
per-hop budget, and finish with a tighter final approach.

Failure policy:
  - an intermediate hop that fails is recorded as SKIPPED and we move on
  - the final approach is the success criterion; its failure propagates
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from env.loader import ChunkConfig
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event
from spec.navigation import Navigator
from spec.types import NavigationGoal, Vec3
from .errors import NavigationFailure
from .waypoints import VisitedChunkSet


log = logging.getLogger(__name__)


class HopResult(Enum):
    REACHED = "reached"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class HopRecord:
    index: int                    # 1-based position in the generated sequence
    position: Vec3
    result: HopResult
    error: Optional[str] = None   # failure code when SKIPPED


@dataclass
class ChunkRouteReport:
    """What happened on one chunked trip."""

    target: Vec3
    hops: List[HopRecord] = field(default_factory=list)
    success: bool = False

    @property
    def reached(self) -> List[HopRecord]:
        return [h for h in self.hops if h.result is HopResult.REACHED]

    @property
    def skipped(self) -> List[HopRecord]:
        return [h for h in self.hops if h.result is HopResult.SKIPPED]


def plan_chunk_waypoints(origin: Vec3, target: Vec3, spacing: float = 32.0) -> List[Vec3]:
    """
    Evenly spaced intermediate points strictly between origin and target.

    n = floor(distance / spacing); point i sits at t = i / (n + 1).
    Targets closer than `spacing` get no intermediate points.
    """
    distance = origin.distance_to(target)
    count = math.floor(distance / spacing)
    return [origin.lerp(target, i / (count + 1)) for i in range(1, count + 1)]


class ChunkWaypointPlanner:
    """
    Drives a Navigator through chunk-spaced waypoints toward a target.

    Owned by a NavDispatcher; shares its VisitedChunkSet.
    """

    def __init__(
        self,
        navigator: Navigator,
        visited: VisitedChunkSet,
        config: Optional[ChunkConfig] = None,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        self._navigator = navigator
        self._visited = visited
        self._cfg = config if config is not None else ChunkConfig()
        self._bus = bus

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def chunk_based_goto(self, target: Vec3) -> ChunkRouteReport:
        """
        Travel to `target` via intermediate hops.

        Returns a ChunkRouteReport on success. Raises whatever the final
        approach raised if the target itself could not be reached.
        """
        origin = self._navigator.current_position()
        waypoints = plan_chunk_waypoints(origin, target, self._cfg.waypoint_spacing)
        report = ChunkRouteReport(target=target)

        log.info(
            "Chunk-based routing to %s with %d waypoints (distance=%.1f)",
            target,
            len(waypoints),
            origin.distance_to(target),
        )

        for index, waypoint in enumerate(waypoints, start=1):
            report.hops.append(self._run_hop(index, len(waypoints), waypoint))

        final_goal = NavigationGoal(target, self._cfg.final_tolerance)
        self._navigator.goto(final_goal, timeout_s=self._cfg.final_timeout_s)
        self._visited.mark(target)

        report.success = True
        log.info(
            "Chunk-based routing reached %s (%d/%d hops reached)",
            target,
            len(report.reached),
            len(report.hops),
        )
        return report

    def follow_route(
        self,
        route: Sequence[Vec3],
        *,
        tolerance: float,
        timeout_s: float,
    ) -> None:
        """
        Replay a known route hop by hop, in order.

        Unlike chunk_based_goto, every hop must succeed; the first failure
        propagates.
        """
        for waypoint in route:
            self._navigator.goto(NavigationGoal(waypoint, tolerance), timeout_s=timeout_s)
            self._visited.mark(waypoint)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _run_hop(self, index: int, total: int, waypoint: Vec3) -> HopRecord:
        goal = NavigationGoal(waypoint, self._cfg.hop_tolerance)
        log.debug("Navigating to chunk waypoint %d/%d at %s", index, total, waypoint)

        try:
            self._navigator.goto(goal, timeout_s=self._cfg.hop_timeout_s)
        except (NavigationFailure, TimeoutError) as exc:
            code = getattr(exc, "code", "timeout")
            log.warning(
                "Failed to reach chunk waypoint %d/%d at %s (%s), trying next",
                index,
                total,
                waypoint,
                code,
            )
            if self._bus is not None:
                log_event(
                    bus=self._bus,
                    module="bot_core.nav.chunk_planner",
                    event_type=EventType.HOP_SKIPPED,
                    message=f"Skipped chunk waypoint {index}/{total}",
                    payload={"index": index, "position": waypoint.as_dict(), "error": code},
                )
            record = HopRecord(index, waypoint, HopResult.SKIPPED, code)
        else:
            record = HopRecord(index, waypoint, HopResult.REACHED)
        finally:
            self._visited.mark(waypoint)

        return record
