# src/bot_core/nav/errors.py
"""
Error taxonomy for the navigation orchestrator.

    NavigationFailure          base; any failed navigation request
      NavigationTimeout        navigator did not settle in budget (retryable once)
      UnreachableError         navigator found no route (never retried)
      WaypointNotFound         caller named an unregistered waypoint
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class NavigationFailure(RuntimeError):
    """
    Domain-level error for navigation requests.

    Mirrors BotCoreError: a stable machine-readable `code` plus free-form
    `details` for logs and monitoring.
    """

    code: str = "navigation_failed"
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, details={self.details!r})"


@dataclass
class NavigationTimeout(NavigationFailure):
    code: str = "timeout"


@dataclass
class UnreachableError(NavigationFailure):
    code: str = "unreachable"


@dataclass
class WaypointNotFound(NavigationFailure):
    code: str = "waypoint_not_found"


def is_timeout(exc: BaseException) -> bool:
    """True for failures the dispatcher may recover from via fallback."""
    return isinstance(exc, (NavigationTimeout, TimeoutError))
