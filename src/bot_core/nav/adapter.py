# src/bot_core/nav/adapter.py
"""
Navigator adapter over the BotCore action surface.

BotCore reports movement failures as ActionResult error codes; the
dispatcher wants typed exceptions. This adapter turns one into the other:

    move_timeout, nav_too_long  -> NavigationTimeout
    nav_failure                 -> UnreachableError
    anything else               -> NavigationFailure
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from spec.bot_core import BotCore
from spec.movement import MovementProfile
from spec.types import Action, NavigationGoal, Vec3
from .errors import NavigationFailure, NavigationTimeout, UnreachableError


log = logging.getLogger(__name__)

TIMEOUT_CODES = frozenset({"move_timeout", "nav_too_long"})
UNREACHABLE_CODES = frozenset({"nav_failure"})


class BotCoreNavigator:
    """Implements spec.navigation.Navigator on top of BotCore.execute_action."""

    def __init__(self, bot: BotCore) -> None:
        self._bot = bot
        self._movements: MovementProfile = MovementProfile()

    @property
    def movements(self) -> MovementProfile:
        return self._movements

    def current_position(self) -> Vec3:
        return Vec3.from_mapping(self._bot.get_world_state().position)

    def set_movements(self, profile: MovementProfile) -> None:
        self._movements = profile

    def goto(self, goal: NavigationGoal, *, timeout_s: float) -> Optional[Sequence[Vec3]]:
        pos = goal.position
        action = Action(
            type="move_to",
            params={
                "x": pos.x,
                "y": pos.y,
                "z": pos.z,
                "radius": float(goal.tolerance),
                "timeout_s": float(timeout_s),
                "can_dig": self._movements.can_dig,
                "max_drop_down": self._movements.max_drop_down,
            },
        )

        result = self._bot.execute_action(action)
        if result.success:
            return None

        code = result.error or "navigation_failed"
        details = dict(result.details or {})
        details.setdefault("goal", pos.as_dict())
        log.debug("move_to %s failed: %s", pos, code)

        if code in TIMEOUT_CODES:
            raise NavigationTimeout(code=code, details=details)
        if code in UNREACHABLE_CODES:
            raise UnreachableError(code=code, details=details)
        raise NavigationFailure(code=code, details=details)
