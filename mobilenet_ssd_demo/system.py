from __future__ import annotations

import platform

import cv2
import psutil
from loguru import logger

from mobilenet_ssd_demo.types import SystemStats


class SystemMonitor:
    """Report host CPU and RAM usage for the startup banner and summary."""

    def __init__(self) -> None:
        psutil.cpu_percent(interval=None)
        self.process = psutil.Process()
        self.process.cpu_percent()

    def get_stats(self) -> SystemStats:
        stats = SystemStats()

        stats.cpu_percent = psutil.cpu_percent(interval=None)
        stats.cpu_count_physical = psutil.cpu_count(logical=False) or 0
        stats.cpu_count_logical = psutil.cpu_count() or 0

        ram = psutil.virtual_memory()
        stats.ram_percent = ram.percent
        stats.ram_used_gb = ram.used / (1024**3)
        stats.ram_total_gb = ram.total / (1024**3)

        return stats

    def get_process_stats(self) -> dict:
        try:
            return {
                "cpu_percent": self.process.cpu_percent(),
                "memory_mb": self.process.memory_info().rss / (1024**2),
                "threads": self.process.num_threads(),
            }
        except psutil.Error:
            return {"cpu_percent": 0.0, "memory_mb": 0.0, "threads": 0}

    def log_host_info(self) -> None:
        """Log platform, library versions and host resources."""
        stats = self.get_stats()
        logger.info("Platform: {} {}", platform.system(), platform.release())
        logger.info("Python: {}", platform.python_version())
        logger.info("OpenCV: {}", cv2.__version__)
        logger.info(
            "CPU cores: {} physical, {} logical",
            stats.cpu_count_physical,
            stats.cpu_count_logical,
        )
        logger.info(
            "System RAM: {:.1f}/{:.1f} GB", stats.ram_used_gb, stats.ram_total_gb
        )
