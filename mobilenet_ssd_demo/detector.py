"""MobileNet-SSD network wrapper around ``cv2.dnn``."""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import cv2
import numpy as np
from loguru import logger

from mobilenet_ssd_demo.errors import ModelLoadError
from mobilenet_ssd_demo.types import Acceleration, DetectionParams, InferenceResult


if TYPE_CHECKING:
    from collections.abc import Sequence


ROW_WIDTH = 7


class DetectorProtocol(Protocol):
    """Anything that turns a frame into SSD detection rows."""

    def detect(self, frame: np.ndarray) -> InferenceResult:
        """Run inference on a single frame."""
        ...


def as_detection_rows(output: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
    """Flatten an SSD ``(1, 1, N, 7)`` output into ``(N, 7)`` rows."""
    data = np.asarray(output, dtype=np.float32)
    if data.size == 0:
        return np.empty((0, ROW_WIDTH), dtype=np.float32)
    return data.reshape(-1, ROW_WIDTH)


class SSDDetector:
    """Caffe MobileNet-SSD loaded once and reused for every frame."""

    def __init__(
        self,
        prototxt_path: str | Path,
        weights_path: str | Path,
        params: DetectionParams,
        acceleration: Acceleration,
    ) -> None:
        """Load the network and apply the backend/target selection."""
        self.params = params
        self.acceleration = acceleration

        for path in (Path(prototxt_path), Path(weights_path)):
            if not path.is_file():
                message = f"Could not load Caffe net: {path} not found"
                raise ModelLoadError(message)

        logger.info("Loading model: {} / {}", prototxt_path, weights_path)
        try:
            self.net = cv2.dnn.readNetFromCaffe(str(prototxt_path), str(weights_path))
        except cv2.error as exc:
            message = f"Could not load Caffe net: {exc}"
            raise ModelLoadError(message) from exc

        if self.net.empty():
            message = "Could not load Caffe net: network is empty"
            raise ModelLoadError(message)

        self.net.setPreferableBackend(acceleration.backend)
        self.net.setPreferableTarget(acceleration.target)
        logger.success(
            "Model loaded ({})", "CUDA" if acceleration.enabled else "CPU"
        )

    def make_blob(self, frame: np.ndarray) -> np.ndarray:
        """Scale, mean-subtract and resize ``frame`` into a network blob."""
        return cv2.dnn.blobFromImage(
            frame,
            self.params.scale_factor,
            self.params.input_size,
            self.params.mean,
        )

    def detect(self, frame: np.ndarray) -> InferenceResult:
        """Forward one frame and return its detection rows."""
        start = time.perf_counter()
        blob = self.make_blob(frame)
        self.net.setInput(blob, self.params.input_layer)
        output = self.net.forward(self.params.output_layer)
        elapsed = time.perf_counter() - start

        return InferenceResult(rows=as_detection_rows(output), elapsed_s=elapsed)
