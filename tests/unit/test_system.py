"""Unit tests for host statistics."""

from __future__ import annotations

from unittest.mock import Mock, patch

from mobilenet_ssd_demo.system import SystemMonitor


class TestSystemMonitor:
    """Tests for SystemMonitor."""

    @patch("mobilenet_ssd_demo.system.psutil")
    def test_get_stats(self, mock_psutil):
        """Test CPU and RAM figures are converted to GB."""
        mock_psutil.cpu_percent.return_value = 42.0
        mock_psutil.cpu_count.side_effect = lambda logical=True: 8 if logical else 4
        mock_memory = Mock()
        mock_memory.percent = 50.0
        mock_memory.used = 8 * 1024**3
        mock_memory.total = 16 * 1024**3
        mock_psutil.virtual_memory.return_value = mock_memory

        stats = SystemMonitor().get_stats()

        assert stats.cpu_percent == 42.0
        assert stats.cpu_count_physical == 4
        assert stats.cpu_count_logical == 8
        assert stats.ram_used_gb == 8.0
        assert stats.ram_total_gb == 16.0

    @patch("mobilenet_ssd_demo.system.psutil")
    def test_process_stats(self, mock_psutil):
        process = mock_psutil.Process.return_value
        process.cpu_percent.return_value = 12.5
        process.memory_info.return_value.rss = 256 * 1024**2
        process.num_threads.return_value = 3

        proc_stats = SystemMonitor().get_process_stats()

        assert proc_stats == {"cpu_percent": 12.5, "memory_mb": 256.0, "threads": 3}

    def test_log_host_info_runs(self):
        SystemMonitor().log_host_info()
