# src/spec/__init__.py

from __future__ import annotations

"""
Public spec surface for navigation types.

This module re-exports *interfaces and data types* shared across packages:
  - Geometry and request types (Vec3, NavigationGoal, GotoOptions)
  - Protocols (Navigator, BotCore)
  - BotCore action primitives (Action, ActionResult, WorldState)

Deliberately does NOT export concrete implementations; those live in
src/bot_core/.
"""

from .bot_core import BotCore
from .movement import MovementProfile
from .navigation import Navigator
from .types import (
    Action,
    ActionResult,
    GotoOptions,
    NavigationGoal,
    Vec3,
    WorldState,
)

__all__ = [
    "BotCore",
    "MovementProfile",
    "Navigator",
    "Action",
    "ActionResult",
    "GotoOptions",
    "NavigationGoal",
    "Vec3",
    "WorldState",
]
