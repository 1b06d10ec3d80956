"""CUDA probing for the OpenCV DNN backend."""

from __future__ import annotations

import cv2
from loguru import logger

from mobilenet_ssd_demo.types import Acceleration


def cuda_device_count() -> int:
    """Return the number of CUDA devices OpenCV can use (0 without CUDA)."""
    cuda = getattr(cv2, "cuda", None)
    if cuda is None:
        return 0
    try:
        return int(cuda.getCudaEnabledDeviceCount())
    except cv2.error as exc:
        logger.debug("CUDA probe failed: {}", exc)
        return 0


def cpu_acceleration(reason: str) -> Acceleration:
    """Return the default CPU backend selection."""
    return Acceleration(
        enabled=False,
        backend=cv2.dnn.DNN_BACKEND_DEFAULT,
        target=cv2.dnn.DNN_TARGET_CPU,
        reason=reason,
    )


def select_acceleration(use_cuda: bool) -> Acceleration:
    """Pick CUDA when a compatible device exists and ``use_cuda`` is set."""
    device_count = cuda_device_count()
    if device_count == 0:
        selection = cpu_acceleration("no CUDA device available")
    elif not cv2.cuda.DeviceInfo().isCompatible():
        selection = cpu_acceleration("CUDA device is not compatible with this build")
    elif not use_cuda:
        selection = cpu_acceleration("CUDA disabled by --cuda")
    else:
        cv2.cuda.printShortCudaDeviceInfo(cv2.cuda.getDevice())
        selection = Acceleration(
            enabled=True,
            backend=cv2.dnn.DNN_BACKEND_CUDA,
            target=cv2.dnn.DNN_TARGET_CUDA,
            reason=f"{device_count} CUDA device(s) found",
        )

    if selection.enabled:
        logger.success("Inference on GPU: {}", selection.reason)
    else:
        logger.info("Inference on CPU: {}", selection.reason)
    return selection
