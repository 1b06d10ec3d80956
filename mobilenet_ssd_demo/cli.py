from __future__ import annotations

import argparse

from mobilenet_ssd_demo.types import (
    DEFAULT_LABELS_FILE,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PROTOTXT_FILE,
    DEFAULT_WEIGHTS_FILE,
    DetectionParams,
    RunConfig,
)


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def str_to_bool(value: str) -> bool:
    """Parse a boolean flag value such as ``true``, ``0`` or ``off``."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    message = f"invalid boolean value: {value!r}"
    raise argparse.ArgumentTypeError(message)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    defaults = DetectionParams()
    parser = argparse.ArgumentParser(
        description="MobileNet-SSD Object Detection Demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mobilenet-ssd-demo
  mobilenet-ssd-demo --in street.mp4 --out annotated.mp4
  mobilenet-ssd-demo -i street.mp4 --cuda false --no-display
		""",
    )

    parser.add_argument(
        "-i",
        "--in",
        dest="input",
        type=str,
        default="",
        help="Path to input file (empty opens the default camera)",
    )
    parser.add_argument(
        "-o",
        "--out",
        dest="output",
        type=str,
        default=DEFAULT_OUTPUT_FILE,
        help="Path to output file",
    )
    parser.add_argument(
        "-c",
        "--cuda",
        type=str_to_bool,
        default=True,
        metavar="BOOL",
        help="Enable CUDA when a compatible device is present",
    )
    parser.add_argument("--labels", type=str, default=DEFAULT_LABELS_FILE)
    parser.add_argument("--prototxt", type=str, default=DEFAULT_PROTOTXT_FILE)
    parser.add_argument("--weights", type=str, default=DEFAULT_WEIGHTS_FILE)
    parser.add_argument(
        "--conf",
        type=float,
        default=defaults.confidence_threshold,
        help="Minimum confidence for a detection to be drawn",
    )
    parser.add_argument("--width", type=int, default=defaults.frame_width)
    parser.add_argument("--height", type=int, default=defaults.frame_height)
    parser.add_argument(
        "--no-display",
        action="store_true",
        help="Do not open a preview window (output video is still written)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    parser.add_argument("--log-dir", type=str, default="logs")

    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    return args


def build_run_config(args: argparse.Namespace) -> RunConfig:
    """Freeze parsed arguments into a :class:`RunConfig`."""
    params = DetectionParams(
        frame_width=args.width,
        frame_height=args.height,
        confidence_threshold=args.conf,
    )
    return RunConfig(
        input_path=args.input,
        output_path=args.output,
        use_cuda=args.cuda,
        labels_path=args.labels,
        prototxt_path=args.prototxt,
        weights_path=args.weights,
        show_window=not args.no_display,
        params=params,
    )
