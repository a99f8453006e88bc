# src/monitoring/logger.py
"""
JSONL sink for navigation events, plus the log_event() publish helper.

    bus = EventBus()
    events = JsonFileLogger(Path("logs/nav/events.log"), bus)
    nav = create_nav_dispatcher(bus=bus)
    ...
    events.close()
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent


log = logging.getLogger(__name__)


class JsonFileLogger:
    """Appends one JSON object per event; the parent directory is created on demand."""

    def __init__(self, path: Path, bus: EventBus) -> None:
        self._path = path
        self._bus = bus
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("a", encoding="utf-8")
        bus.subscribe(self._on_event)

    @property
    def path(self) -> Path:
        return self._path

    def _on_event(self, event: MonitoringEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        try:
            self._file.write(line + "\n")
            self._file.flush()
        except (OSError, ValueError):
            log.exception("Failed to write monitoring event to %s", self._path)

    def close(self) -> None:
        self._bus.unsubscribe(self._on_event)
        self._file.close()


def log_event(
    bus: EventBus,
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Stamp a MonitoringEvent with the current time and publish it on `bus`."""
    bus.publish(
        MonitoringEvent(
            ts=time.time(),
            module=module,
            event_type=event_type,
            message=message,
            payload=payload or {},
            correlation_id=correlation_id,
        )
    )
