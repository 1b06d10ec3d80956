"""Overlay construction and rendering.

Overlays are built as plain draw commands from frame dimensions, detection
rows, labels and status texts, then applied to a frame by :func:`render`.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import cv2
import numpy as np
from loguru import logger

from mobilenet_ssd_demo.types import (
    Detection,
    DrawCommand,
    RectangleCommand,
    StatusLine,
    TextCommand,
)


if TYPE_CHECKING:
    from collections.abc import Sequence


BOX_COLOR = (0, 0, 255)
LABEL_COLOR = (255, 0, 0)
STATUS_COLOR = (0, 255, 0)

LABEL_FONT = cv2.FONT_HERSHEY_COMPLEX_SMALL
LABEL_SCALE = 1.0
STATUS_FONT = cv2.FONT_HERSHEY_PLAIN
STATUS_SCALE = 1.1

STATUS_MARGIN = 10
BUILD_MODE_X = 180
DEVICE_X = 300
RESOLUTION_OFFSET = 80


def parse_detections(
    rows: np.ndarray,
    width: int,
    height: int,
    confidence_threshold: float,
) -> list[Detection]:
    """Return rows above the threshold, in row order, in pixel coordinates."""
    # detector scores are float32; compare at that precision
    threshold = float(np.float32(confidence_threshold))
    detections: list[Detection] = []
    for row in np.asarray(rows).reshape(-1, 7):
        confidence = float(row[2])
        if confidence <= threshold:
            continue
        detections.append(
            Detection(
                class_id=int(row[1]),
                confidence=confidence,
                top_left=(int(row[3] * width), int(row[4] * height)),
                bottom_right=(int(row[5] * width), int(row[6] * height)),
            )
        )
    return detections


def format_run_time(seconds: float) -> str:
    """Format inference time as ``run time: 0.12s`` (truncated, not rounded)."""
    truncated = math.floor(max(seconds, 0.0) * 100) / 100
    return f"run time: {truncated:.2f}s"


def build_status_line(
    elapsed_s: float,
    accelerated: bool,
    width: int,
    height: int,
) -> StatusLine:
    """Collect the status texts for one frame."""
    return StatusLine(
        run_time=format_run_time(elapsed_s),
        build_mode="in debug" if __debug__ else "in release",
        device="using GPUs" if accelerated else "using CPUs",
        resolution=f"{width}x{height}",
    )


def _status_text(text: str, x: int, y: int) -> TextCommand:
    return TextCommand(
        text=text,
        origin=(x, y),
        font=STATUS_FONT,
        scale=STATUS_SCALE,
        color=STATUS_COLOR,
    )


def build_draw_commands(
    width: int,
    height: int,
    rows: np.ndarray,
    labels: Sequence[str],
    status: StatusLine,
    confidence_threshold: float = 0.3,
) -> list[DrawCommand]:
    """Build the overlay for one frame.

    Each accepted detection yields a rectangle followed by its label at the
    box's top-left corner. Detections whose class id has no label are
    skipped. The four status texts always close the list.
    """
    commands: list[DrawCommand] = []

    for det in parse_detections(rows, width, height, confidence_threshold):
        if not 0 <= det.class_id < len(labels):
            logger.warning(
                "Skipping detection with unknown class id {} ({} labels)",
                det.class_id,
                len(labels),
            )
            continue

        commands.append(RectangleCommand(det.top_left, det.bottom_right, BOX_COLOR))
        commands.append(
            TextCommand(
                text=labels[det.class_id],
                origin=det.top_left,
                font=LABEL_FONT,
                scale=LABEL_SCALE,
                color=LABEL_COLOR,
            )
        )

    y = height - STATUS_MARGIN
    commands.extend(
        [
            _status_text(status.run_time, STATUS_MARGIN, y),
            _status_text(status.build_mode, BUILD_MODE_X, y),
            _status_text(status.device, DEVICE_X, y),
            _status_text(status.resolution, width - RESOLUTION_OFFSET, y),
        ]
    )
    return commands


def render(frame: np.ndarray, commands: Sequence[DrawCommand]) -> np.ndarray:
    """Apply draw commands to ``frame`` in place and return it."""
    for command in commands:
        if isinstance(command, RectangleCommand):
            cv2.rectangle(
                frame,
                command.top_left,
                command.bottom_right,
                command.color,
                command.thickness,
                cv2.LINE_8,
            )
        else:
            cv2.putText(
                frame,
                command.text,
                command.origin,
                command.font,
                command.scale,
                command.color,
                command.thickness,
                cv2.LINE_8,
            )
    return frame
