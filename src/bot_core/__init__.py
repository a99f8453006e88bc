# bot_core package
# src/bot_core/__init__.py
"""
bot_core package.

Exports:
    - NavDispatcher: adaptive navigation front end for one agent
    - FakeBotCore: in-process BotCore used offline and in tests
    - create_nav_dispatcher: wire a dispatcher onto a BotCore
"""

from __future__ import annotations

from .nav import NavDispatcher
from .runtime import FakeBotCore, create_nav_dispatcher, get_bot_core

__all__ = [
    "NavDispatcher",
    "FakeBotCore",
    "create_nav_dispatcher",
    "get_bot_core",
]
