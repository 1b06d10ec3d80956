"""OpenCV HighGUI preview window."""

from __future__ import annotations

from typing import TYPE_CHECKING

import cv2
from loguru import logger


if TYPE_CHECKING:
    import numpy as np


class OpenCVViewer:
    """Single titled window with an exit-key poll."""

    def __init__(
        self,
        title: str = "MobileNet-demo",
        delay_ms: int = 10,
        escape_key: int = 27,
        *,
        enabled: bool = True,
    ) -> None:
        self.title = title
        self.delay_ms = delay_ms
        self.escape_key = escape_key
        self.enabled = enabled
        self._window_open = False

    def stop_requested(self) -> bool:
        """Wait up to ``delay_ms`` for a key and report whether it was escape."""
        if not self.enabled:
            return False
        key = cv2.waitKey(self.delay_ms)
        if key != -1 and key & 0xFF == self.escape_key:
            logger.info("Quit requested by user")
            return True
        return False

    def show(self, frame: np.ndarray) -> None:
        if not self.enabled:
            return
        cv2.imshow(self.title, frame)
        self._window_open = True

    def close(self) -> None:
        """Destroy the window. Safe to call more than once."""
        if self._window_open:
            cv2.destroyWindow(self.title)
            self._window_open = False
