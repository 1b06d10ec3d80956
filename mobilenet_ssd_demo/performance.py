"""Frame and inference counters for the detection loop."""

from __future__ import annotations

import time
from collections import deque

from mobilenet_ssd_demo.types import SessionSummary


class FrameStats:
    """Count processed frames, detections and forward-pass time.

    Recent values are kept in a short window for the periodic log line; the
    session summary is computed from running totals.
    """

    def __init__(self, window: int = 30) -> None:
        self.recent_intervals: deque[float] = deque(maxlen=window)
        self.recent_inference_s: deque[float] = deque(maxlen=window)
        self.frames = 0
        self.detections = 0
        self.total_inference_s = 0.0
        self.started = time.perf_counter()
        self._last_frame: float | None = None

    def record(self, inference_s: float, detections: int) -> None:
        """Record one processed frame."""
        now = time.perf_counter()
        if self._last_frame is not None:
            self.recent_intervals.append(now - self._last_frame)
        self._last_frame = now

        self.recent_inference_s.append(inference_s)
        self.total_inference_s += inference_s
        self.detections += detections
        self.frames += 1

    def recent_fps(self) -> float:
        if not self.recent_intervals:
            return 0.0
        mean_interval = sum(self.recent_intervals) / len(self.recent_intervals)
        return 1.0 / mean_interval if mean_interval > 0 else 0.0

    def recent_inference_ms(self) -> float:
        if not self.recent_inference_s:
            return 0.0
        return 1000.0 * sum(self.recent_inference_s) / len(self.recent_inference_s)

    def summary(self) -> SessionSummary:
        """Totals for the whole run."""
        elapsed = time.perf_counter() - self.started
        return SessionSummary(
            frames=self.frames,
            detections=self.detections,
            elapsed_s=elapsed,
            throughput_fps=self.frames / elapsed if elapsed > 0 else 0.0,
            mean_inference_ms=(
                1000.0 * self.total_inference_s / self.frames if self.frames else 0.0
            ),
        )
