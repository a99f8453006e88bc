# path: src/monitoring/events.py
"""Navigation event types and the JSON-safe MonitoringEvent record."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


class EventType(Enum):
    """Typed monitoring events emitted by the navigation layer."""

    # A goto() call arrived at the dispatcher
    NAV_REQUESTED = auto()

    # Dispatch decisions
    NAV_PREDICTED_TIMEOUT = auto()   # timing history routed us straight to chunks
    NAV_CACHE_HIT = auto()           # replaying a cached route

    # Outcomes
    NAV_SUCCEEDED = auto()
    NAV_TIMEOUT = auto()             # timeout recorded against the timing tracker
    NAV_FALLBACK = auto()            # one chunked retry after a timeout
    NAV_FAILED = auto()              # failure surfaced to the caller

    # Chunk planner: an intermediate hop was missed
    HOP_SKIPPED = auto()

    # Generic log messages
    LOG = auto()


@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the dispatcher or chunk planner.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("bot_core.nav.dispatcher", etc.)
    event_type: EventType       # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (positions, mode, error code)
    correlation_id: Optional[str] = None  # Used for grouping events per request

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
