"""Exceptions raised by the detection demo.

Every error is fatal for the run: ``run_demo`` logs the message and exits
with a nonzero status.
"""

from __future__ import annotations


class DemoError(Exception):
    """Base class for all demo failures."""


class VideoSourceError(DemoError):
    """The camera or input file could not be opened."""


class VideoSinkError(DemoError):
    """The output video could not be created."""


class LabelFileError(DemoError):
    """The label map is missing, unreadable, or empty."""


class ModelLoadError(DemoError):
    """The Caffe network could not be loaded."""


class FrameReadError(DemoError):
    """A frame could not be read from a live source."""
