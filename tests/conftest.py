"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks added by ``configure_logging`` so log files get closed."""
    yield
    logger.remove()
