"""Label map loading."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from mobilenet_ssd_demo.errors import LabelFileError


if TYPE_CHECKING:
    from collections.abc import Iterable


def parse_labels(lines: Iterable[str]) -> list[str]:
    """Keep the first whitespace-delimited token of every line.

    Blank lines produce ``""`` so that list indices keep matching line
    numbers (and therefore class ids). Trailing blank lines are dropped.
    """
    labels: list[str] = []
    for line in lines:
        tokens = line.split()
        labels.append(tokens[0] if tokens else "")

    while labels and not labels[-1]:
        labels.pop()
    return labels


def load_labels(path: str | Path) -> list[str]:
    """Read a label map file; raise :class:`LabelFileError` if none is found."""
    label_path = Path(path)
    try:
        data = label_path.read_bytes()
    except OSError as exc:
        message = f"Failed to read label file {label_path}: {exc}"
        raise LabelFileError(message) from exc

    # only "\n" ends a line; other separators stay inside the line
    text = data.decode("utf-8", errors="replace")
    labels = parse_labels(text.split("\n"))
    if not labels:
        message = f"Label file {label_path} contains no labels"
        raise LabelFileError(message)

    logger.info("Loaded {} labels from {}", len(labels), label_path)
    return labels
