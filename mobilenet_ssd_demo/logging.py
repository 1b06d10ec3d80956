"""Logging helpers for the detection demo."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {process}:{thread} | "
    "{name}:{function}:{line} | {message}"
)


def configure_logging(log_level: str = "INFO", log_dir: str | None = "logs") -> None:
    """Configure loguru for console (stderr) and rotating file output.

    ``MOBILENET_SSD_LOG_LEVEL`` overrides ``log_level``. Passing ``None`` or an
    empty string for ``log_dir`` disables the file sink.
    """
    log_level = os.getenv("MOBILENET_SSD_LOG_LEVEL", log_level).upper()

    logger.remove()
    logger.add(sink=sys.stderr, format=CONSOLE_FORMAT, level=log_level)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / "demo_{time:YYYY-MM-DD}.log"
        logger.add(
            str(log_path),
            rotation="10 MB",
            retention="7 days",
            level=log_level,
            format=FILE_FORMAT,
        )
