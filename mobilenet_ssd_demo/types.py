"""Shared data structures for the detection demo."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


DEFAULT_LABELS_FILE = "labelmap.txt"
DEFAULT_PROTOTXT_FILE = "MobileNetSSD_deploy.prototxt"
DEFAULT_WEIGHTS_FILE = "MobileNetSSD_deploy.caffemodel"
DEFAULT_OUTPUT_FILE = "output.mp4"


@dataclass(frozen=True)
class DetectionParams:
    """Tunable detection and display parameters.

    ``frame_width``/``frame_height`` is the size every frame is resized to
    before inference, drawing and writing. ``input_width``/``input_height``
    is the size the network was trained on. ``scale_factor`` and ``mean``
    are the MobileNet-SSD normalization (``(pixel - 127.5) * 0.007843``).
    """

    frame_width: int = 500
    frame_height: int = 500
    input_width: int = 300
    input_height: int = 300
    scale_factor: float = 0.007843
    mean: tuple[float, float, float] = (127.5, 127.5, 127.5)
    confidence_threshold: float = 0.3
    escape_key: int = 27
    delay_ms: int = 10
    fourcc: str = "mp4v"
    input_layer: str = "data"
    output_layer: str = "detection_out"
    window_title: str = "MobileNet-demo"

    @property
    def frame_size(self) -> tuple[int, int]:
        """Return the processing frame size as ``(width, height)``."""
        return (self.frame_width, self.frame_height)

    @property
    def input_size(self) -> tuple[int, int]:
        """Return the network input size as ``(width, height)``."""
        return (self.input_width, self.input_height)


@dataclass(frozen=True)
class RunConfig:
    """Immutable run configuration built from the command line."""

    input_path: str = ""
    output_path: str = DEFAULT_OUTPUT_FILE
    use_cuda: bool = True
    labels_path: str = DEFAULT_LABELS_FILE
    prototxt_path: str = DEFAULT_PROTOTXT_FILE
    weights_path: str = DEFAULT_WEIGHTS_FILE
    show_window: bool = True
    params: DetectionParams = field(default_factory=DetectionParams)

    @property
    def use_camera(self) -> bool:
        """Return True when frames come from the default capture device."""
        return not self.input_path


@dataclass(frozen=True)
class Acceleration:
    """Inference backend/target chosen once at startup."""

    enabled: bool
    backend: int
    target: int
    reason: str = ""


@dataclass
class InferenceResult:
    """Raw detector output for one frame.

    ``rows`` has shape ``(N, 7)``: image index, class id, confidence and
    normalized x1, y1, x2, y2.
    """

    rows: np.ndarray
    elapsed_s: float


@dataclass(frozen=True)
class Detection:
    """A detection above the confidence threshold, in pixel coordinates."""

    class_id: int
    confidence: float
    top_left: tuple[int, int]
    bottom_right: tuple[int, int]


@dataclass(frozen=True)
class StatusLine:
    """Texts shown along the bottom edge of every frame."""

    run_time: str
    build_mode: str
    device: str
    resolution: str


@dataclass(frozen=True)
class RectangleCommand:
    """Draw an outlined rectangle."""

    top_left: tuple[int, int]
    bottom_right: tuple[int, int]
    color: tuple[int, int, int]
    thickness: int = 1


@dataclass(frozen=True)
class TextCommand:
    """Draw a single line of text with its baseline origin at ``origin``."""

    text: str
    origin: tuple[int, int]
    font: int
    scale: float
    color: tuple[int, int, int]
    thickness: int = 1


DrawCommand = RectangleCommand | TextCommand


@dataclass
class SystemStats:
    """Container for system statistics."""

    cpu_percent: float = 0.0
    cpu_count_physical: int = 0
    cpu_count_logical: int = 0
    ram_percent: float = 0.0
    ram_used_gb: float = 0.0
    ram_total_gb: float = 0.0


@dataclass(frozen=True)
class SessionSummary:
    """Totals logged when the detection loop ends."""

    frames: int
    detections: int
    elapsed_s: float
    throughput_fps: float
    mean_inference_ms: float
