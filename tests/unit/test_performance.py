"""Unit tests for frame and inference counters."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from mobilenet_ssd_demo.performance import FrameStats


class TestFrameStats:
    """Tests for FrameStats."""

    def test_empty_session(self):
        stats = FrameStats()

        summary = stats.summary()

        assert stats.recent_fps() == 0.0
        assert stats.recent_inference_ms() == 0.0
        assert summary.frames == 0
        assert summary.mean_inference_ms == 0.0

    @patch("mobilenet_ssd_demo.performance.time")
    def test_rates_and_totals(self, mock_time):
        """Test FPS from frame spacing and inference means in milliseconds."""
        mock_time.perf_counter.side_effect = [0.0, 1.0, 1.1, 1.2, 2.0]
        stats = FrameStats()

        stats.record(0.020, detections=1)
        stats.record(0.030, detections=0)
        stats.record(0.040, detections=2)
        summary = stats.summary()

        assert stats.recent_fps() == pytest.approx(10.0)
        assert stats.recent_inference_ms() == pytest.approx(30.0)
        assert summary.frames == 3
        assert summary.detections == 3
        assert summary.elapsed_s == pytest.approx(2.0)
        assert summary.throughput_fps == pytest.approx(1.5)
        assert summary.mean_inference_ms == pytest.approx(30.0)

    def test_recent_window(self):
        """Test old inference samples leave the window but stay in totals."""
        stats = FrameStats(window=2)

        for inference_s in (0.100, 0.010, 0.020):
            stats.record(inference_s, detections=0)

        assert stats.recent_inference_ms() == pytest.approx(15.0)
        assert stats.summary().mean_inference_ms == pytest.approx(130.0 / 3)
