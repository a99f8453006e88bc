# src/bot_core/nav/timing.py
"""
Rolling timing statistics for navigation requests.

Keeps the last N successful durations and a running timeout count, and
uses them to guess whether a direct request over a given distance is
going to blow its budget. Pure in-memory bookkeeping; never blocks.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional

from env.loader import TimingConfig


log = logging.getLogger(__name__)


class TimingTracker:
    """
    Rolling window of navigation durations (milliseconds) plus a timeout counter.

    Until the first success is recorded, average_time() reports the
    configured initial estimate.
    """

    def __init__(self, config: Optional[TimingConfig] = None) -> None:
        self._cfg = config if config is not None else TimingConfig()
        self._samples: Deque[float] = deque(maxlen=self._cfg.window)
        self._average_ms: float = float(self._cfg.initial_average_ms)
        self._timeouts: int = 0

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_success(self, duration_ms: float) -> None:
        self._samples.append(float(duration_ms))
        self._average_ms = sum(self._samples) / len(self._samples)
        log.debug(
            "nav timing sample=%.0fms avg=%.0fms window=%d",
            duration_ms,
            self._average_ms,
            len(self._samples),
        )

    def record_timeout(self) -> None:
        self._timeouts += 1
        log.debug("nav timeout recorded (total=%d)", self._timeouts)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def predict_timeout(self, distance: float) -> bool:
        """
        Heuristic: is a direct request over `distance` blocks likely to time out?

        True when the trip is long and timeouts keep piling up, or when the
        linear estimate (distance / unit * average) exceeds the ceiling.
        """
        if distance > self._cfg.long_distance and self._timeouts > self._cfg.max_timeouts:
            return True

        estimated_ms = (distance / self._cfg.distance_unit) * self._average_ms
        return estimated_ms > self._cfg.max_predicted_ms

    def average_time(self) -> float:
        return self._average_ms

    @property
    def timeouts(self) -> int:
        return self._timeouts

    def samples(self) -> List[float]:
        return list(self._samples)
