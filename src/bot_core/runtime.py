# src/bot_core/runtime.py
"""
Runtime wiring for BotCore and navigation.

Provides a lightweight, in-process FakeBotCore that implements the BotCore
contract without talking to a real Minecraft server, plus factories that
hand callers a ready-to-use NavDispatcher.

One dispatcher per agent: create_nav_dispatcher() builds fresh timing,
cache and chunk state every time it is called.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from env.loader import NavigationConfig, load_navigation_config
from monitoring.bus import EventBus
from spec.bot_core import BotCore
from spec.types import Action, ActionResult, WorldState
from .nav import BotCoreNavigator, NavDispatcher


log = logging.getLogger(__name__)


class FakeBotCore(BotCore):
    """
    Fake bot core with an instant-teleport move_to.

      - `get_world_state()` reports the internal position.
      - `execute_action()` understands "move_to" with params {"x", "z"}
        and optional "y". Queued error codes (see `fail_next`) are returned
        instead of moving, one per call.

    Any other action type is treated as a no-op that still succeeds.
    """

    def __init__(self, x: float = 0.0, y: float = 64.0, z: float = 0.0) -> None:
        self._tick: int = 0
        self._pos: Dict[str, float] = {"x": x, "y": y, "z": z}
        self._dimension: str = "overworld"
        self._pending_errors: List[str] = []
        self.actions: List[Action] = []
        self.connected: bool = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False

    def tick(self) -> None:
        self._tick += 1

    # ------------------------------------------------------------------
    # Observation / action API
    # ------------------------------------------------------------------

    def get_world_state(self) -> WorldState:
        return WorldState(
            tick=self._tick,
            position=dict(self._pos),
            dimension=self._dimension,
            context={"profile": "fake_bot_core"},
        )

    def execute_action(self, action: Action) -> ActionResult:
        self.actions.append(action)

        if action.type != "move_to":
            return ActionResult(success=True, error=None, details={})

        if self._pending_errors:
            code = self._pending_errors.pop(0)
            return ActionResult(success=False, error=code, details={"params": dict(action.params)})

        params = action.params or {}
        self._pos["x"] = float(params["x"])
        self._pos["y"] = float(params.get("y", self._pos["y"]))
        self._pos["z"] = float(params["z"])
        return ActionResult(success=True, error=None, details={"position": dict(self._pos)})

    # ------------------------------------------------------------------
    # Test-only helpers
    # ------------------------------------------------------------------

    def fail_next(self, *codes: str) -> None:
        """Make the next len(codes) move_to actions fail with these error codes."""
        self._pending_errors.extend(codes)


def get_bot_core(env_profile_name: Optional[str] = None) -> BotCore:
    """
    Factory for obtaining a BotCore instance.

    Always returns a FakeBotCore; `env_profile_name` is accepted so call
    sites do not change when a networked implementation is plugged in.
    """
    return FakeBotCore()


def create_nav_dispatcher(
    bot: Optional[BotCore] = None,
    *,
    config: Optional[NavigationConfig] = None,
    bus: Optional[EventBus] = None,
) -> NavDispatcher:
    """
    Build a NavDispatcher for one agent.

    If `config` is None it is loaded from config/navigation.yaml.
    """
    body = bot if bot is not None else get_bot_core()
    cfg = config if config is not None else load_navigation_config()
    log.debug("Creating NavDispatcher for %s", type(body).__name__)
    return NavDispatcher(BotCoreNavigator(body), cfg, bus=bus)
