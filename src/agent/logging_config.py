# src/agent/logging_config.py
"""
Central logging configuration for navigation runtimes.

Call configure_logging() from your main entrypoint once, for example:

    from agent.logging_config import configure_logging
    configure_logging()

After that, dispatcher decisions (INFO), skipped chunk hops (WARNING) and,
at DEBUG, cache and timing details are visible on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union


def configure_logging(
    level: Union[int, str] = logging.INFO,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Configure `logger` (the root logger by default) if it has no handlers yet.

    Args:
        level: logging level as int or name (e.g. logging.DEBUG, "DEBUG")
        logger: logger to configure; None means the root logger
    """
    target = logger if logger is not None else logging.getLogger()

    # Don't duplicate handlers if someone already configured logging.
    if target.handlers:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level!r}")

    handler = logging.StreamHandler(stream=sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    handler.setFormatter(formatter)
    target.addHandler(handler)
    target.setLevel(level)
