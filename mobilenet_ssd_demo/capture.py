"""OpenCV video source and sink wrappers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import cv2
from loguru import logger

from mobilenet_ssd_demo.errors import VideoSinkError, VideoSourceError


if TYPE_CHECKING:
    import numpy as np


DEFAULT_SINK_FPS = 30.0


class VideoSource:
    """Camera or file capture handle."""

    def __init__(self, path: str = "", device_index: int = 0) -> None:
        """Create a source for ``path``, or the camera when ``path`` is empty."""
        self.path = path
        self.device_index = device_index
        self.cap: cv2.VideoCapture | None = None
        self.width = 0
        self.height = 0
        self.fps = 0.0
        self.frame_count = 0
        self.frames_read = 0

    @property
    def is_live(self) -> bool:
        """Return True when reading from a capture device."""
        return not self.path

    def open(self) -> None:
        """Open the source and record its reported geometry."""
        if self.is_live:
            logger.info("Opening camera {} with OpenCV...", self.device_index)
            self.cap = cv2.VideoCapture(self.device_index, cv2.CAP_ANY)
        else:
            logger.info("Opening video {}...", self.path)
            self.cap = cv2.VideoCapture(self.path)

        if not self.cap.isOpened():
            self.release()
            message = "Cannot open video!"
            raise VideoSourceError(message)

        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.fps = float(self.cap.get(cv2.CAP_PROP_FPS))
        if not self.is_live:
            self.frame_count = max(0, int(self.cap.get(cv2.CAP_PROP_FRAME_COUNT)))

        logger.success(
            "Resolution of video: {} x {}. Frames per second: {:.2f}.",
            self.width,
            self.height,
            self.fps,
        )

    def read(self) -> tuple[bool, np.ndarray | None]:
        """Read the next frame."""
        if self.cap is None:
            return False, None
        ok, frame = self.cap.read()
        if ok and frame is not None:
            self.frames_read += 1
        return ok, frame

    def reached_end(self) -> bool:
        """Return True when a failed read means the file is exhausted.

        Cameras never end. A file that delivered no frame has not ended, it
        failed. When the container reports a frame count, the read position
        must have reached it; otherwise any failure after the first frame is
        taken as the end.
        """
        if self.is_live or self.frames_read == 0:
            return False
        if self.frame_count <= 0:
            return True
        position = self.frames_read
        if self.cap is not None:
            position = max(position, int(self.cap.get(cv2.CAP_PROP_POS_FRAMES)))
        return position >= self.frame_count

    def release(self) -> None:
        """Release the capture handle. Safe to call more than once."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None

    def get_info(self) -> dict:
        """Return source metadata for diagnostics."""
        return {
            "source": f"camera {self.device_index}" if self.is_live else self.path,
            "width": self.width,
            "height": self.height,
            "fps": self.fps,
            "frames": self.frame_count,
        }


class VideoSink:
    """Fixed-size video writer."""

    def __init__(
        self,
        path: str,
        fps: float,
        frame_size: tuple[int, int],
        fourcc: str = "mp4v",
    ) -> None:
        """Create a sink writing ``frame_size`` frames to ``path``."""
        self.path = path
        self.fps = fps if fps > 0 else DEFAULT_SINK_FPS
        self.frame_size = frame_size
        self.fourcc = fourcc
        self.writer: cv2.VideoWriter | None = None
        self.frames_written = 0

        if fps <= 0:
            logger.warning(
                "Source reported no frame rate, writing at {:.0f} FPS", self.fps
            )

    def open(self) -> None:
        """Create the underlying writer."""
        self.writer = cv2.VideoWriter(
            self.path,
            cv2.VideoWriter_fourcc(*self.fourcc),
            self.fps,
            self.frame_size,
        )
        if not self.writer.isOpened():
            self.release()
            message = f"Cannot open output video {self.path}!"
            raise VideoSinkError(message)

        logger.info(
            "Writing {} ({}) at {}x{} @ {:.1f} FPS",
            self.path,
            self.fourcc,
            self.frame_size[0],
            self.frame_size[1],
            self.fps,
        )

    def write(self, frame: np.ndarray) -> None:
        """Append a frame, resizing it if it is not already the sink size."""
        if self.writer is None:
            return
        height, width = frame.shape[:2]
        if (width, height) != self.frame_size:
            frame = cv2.resize(frame, self.frame_size)
        self.writer.write(frame)
        self.frames_written += 1

    def release(self) -> None:
        """Flush and close the writer. Safe to call more than once."""
        if self.writer is not None:
            self.writer.release()
            self.writer = None
