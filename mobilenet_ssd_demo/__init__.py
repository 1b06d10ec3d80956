"""MobileNet-SSD real-time object detection demo."""

from mobilenet_ssd_demo.demo import main, run_demo
from mobilenet_ssd_demo.types import DetectionParams, RunConfig


__all__ = [
    "DetectionParams",
    "RunConfig",
    "main",
    "run_demo",
]
