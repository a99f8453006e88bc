#!/usr/bin/env python3
"""
tools/smoke_nav.py

Minimal harness to sanity-check NavDispatcher wiring.

Uses FakeBotCore (no Minecraft needed) and walks through every dispatch
mode:
    - direct trip, then the same trip again from the cache
    - named waypoint
    - a forced move_timeout that falls back to chunk routing
    - a long trip once timeouts have piled up (predicted chunk routing)

Prints the outcome of each step and the final stats. With --events-log,
monitoring events are also written as JSONL.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

# ---------------------------------------------------------------------------
# Ensure src/ is on sys.path when running as a script
# ---------------------------------------------------------------------------

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# ---------------------------------------------------------------------------
# Imports from the project
# ---------------------------------------------------------------------------

from agent.logging_config import configure_logging  # type: ignore[import]
from bot_core import FakeBotCore, create_nav_dispatcher  # type: ignore[import]
from bot_core.nav import NavigationOutcome, NavigationTimeout  # type: ignore[import]
from env.loader import load_navigation_config  # type: ignore[import]
from monitoring.bus import EventBus  # type: ignore[import]
from monitoring.logger import JsonFileLogger  # type: ignore[import]
from spec.types import GotoOptions, NavigationGoal, Vec3  # type: ignore[import]


def _print_header(title: str) -> None:
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)


def _print_outcome(outcome: NavigationOutcome) -> None:
    print(f"mode={outcome.mode.value} success={outcome.success}")
    if outcome.report is not None:
        for hop in outcome.report.hops:
            print(f"  hop {hop.index}: {hop.position} -> {hop.result.value}")


def run(config_path: Optional[Path], events_log: Optional[Path]) -> None:
    cfg = load_navigation_config(config_path)
    bus = EventBus()
    events = JsonFileLogger(events_log, bus) if events_log is not None else None

    bot = FakeBotCore()
    bot.connect()
    nav = create_nav_dispatcher(bot, config=cfg, bus=bus)

    try:
        _print_header("Direct trip to (20, 64, 20)")
        _print_outcome(nav.goto(NavigationGoal.near(20, 64, 20, 1)))

        _print_header("Same trip again from spawn (cache replay)")
        nav.goto(NavigationGoal.block(0, 64, 0))
        _print_outcome(nav.goto(NavigationGoal.near(20, 64, 20, 1)))

        _print_header("Named waypoint 'home'")
        nav.add_waypoint("home", Vec3(0, 64, 0))
        _print_outcome(nav.goto_waypoint("home"))

        _print_header("Forced timeout -> chunked fallback to (0, 64, 150)")
        bot.fail_next("move_timeout")
        _print_outcome(nav.goto(NavigationGoal.block(0, 64, 150)))

        _print_header("Long trip after repeated timeouts (predicted)")
        bot.fail_next(*["move_timeout"] * 4)
        for _ in range(4):
            try:
                nav.goto(NavigationGoal.block(400, 64, 150), GotoOptions(retry_with_fallback=False))
            except NavigationTimeout as exc:
                print("timed out as scripted:", exc)
        _print_outcome(nav.goto(NavigationGoal.block(400, 64, 150)))

        _print_header("Stats")
        for key, value in nav.get_stats().items():
            print(f"  {key}: {value}")
    finally:
        bot.disconnect()
        if events is not None:
            events.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="NavDispatcher smoke test")
    parser.add_argument("--config", type=Path, default=None, help="navigation.yaml path")
    parser.add_argument("--events-log", type=Path, default=None, help="JSONL event log path")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    run(args.config, args.events_log)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
