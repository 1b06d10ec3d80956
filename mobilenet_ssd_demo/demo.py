"""Detection loop: capture, infer, overlay, display and record."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import cv2
from loguru import logger

from mobilenet_ssd_demo.acceleration import select_acceleration
from mobilenet_ssd_demo.capture import VideoSink, VideoSource
from mobilenet_ssd_demo.cli import build_run_config, parse_args
from mobilenet_ssd_demo.detector import SSDDetector
from mobilenet_ssd_demo.draw import build_draw_commands, build_status_line, render
from mobilenet_ssd_demo.errors import DemoError, FrameReadError
from mobilenet_ssd_demo.labels import load_labels
from mobilenet_ssd_demo.logging import configure_logging
from mobilenet_ssd_demo.performance import FrameStats
from mobilenet_ssd_demo.system import SystemMonitor
from mobilenet_ssd_demo.types import RectangleCommand
from mobilenet_ssd_demo.viewer import OpenCVViewer


if TYPE_CHECKING:
    from collections.abc import Sequence

    from mobilenet_ssd_demo.detector import DetectorProtocol
    from mobilenet_ssd_demo.types import Acceleration, DetectionParams


LOG_INTERVAL_S = 2.0


def detection_loop(
    source: VideoSource,
    sink: VideoSink,
    detector: DetectorProtocol,
    viewer: OpenCVViewer,
    labels: Sequence[str],
    params: DetectionParams,
    acceleration: Acceleration,
    frame_stats: FrameStats,
) -> int:
    """Process frames until escape is pressed or a file source ends.

    Returns the number of frames written. A failed read raises
    :class:`FrameReadError` unless a file source has reached its end.
    """
    width, height = params.frame_size
    last_log_time = time.perf_counter()

    logger.info("-" * 60)
    logger.info("Starting detection loop. Press ESC to quit.")
    logger.info("-" * 60)

    while not viewer.stop_requested():
        ok, frame = source.read()
        if not ok or frame is None:
            if source.reached_end():
                logger.info("End of stream after {} frames", source.frames_read)
                break
            if source.is_live:
                message = "Video camera is disconnected!"
            else:
                message = (
                    f"Video read failed after frame {source.frames_read}"
                    f" of {source.frame_count}"
                )
            raise FrameReadError(message)

        frame = cv2.resize(frame, (width, height))

        result = detector.detect(frame)

        status = build_status_line(result.elapsed_s, acceleration.enabled, width, height)
        commands = build_draw_commands(
            width,
            height,
            result.rows,
            labels,
            status,
            params.confidence_threshold,
        )
        render(frame, commands)
        frame_stats.record(
            result.elapsed_s,
            sum(isinstance(c, RectangleCommand) for c in commands),
        )

        viewer.show(frame)
        sink.write(frame)

        current_time = time.perf_counter()
        if current_time - last_log_time >= LOG_INTERVAL_S:
            logger.info(
                "Frames: {} | {:.1f} FPS | Inference: {:.1f}ms | Detections: {}",
                frame_stats.frames,
                frame_stats.recent_fps(),
                frame_stats.recent_inference_ms(),
                frame_stats.detections,
            )
            last_log_time = current_time

    return sink.frames_written


def run_demo(argv: list[str] | None = None) -> int:
    """Entry point for the MobileNet-SSD demo; returns the exit status."""
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_dir)
    config = build_run_config(args)
    params = config.params

    logger.info("=" * 60)
    logger.info("MobileNet-SSD Object Detection Demo")
    logger.info("=" * 60)

    sys_monitor = SystemMonitor()
    sys_monitor.log_host_info()
    logger.info("Input: {}", "default camera" if config.use_camera else config.input_path)
    logger.info("Output: {}", config.output_path)

    source = VideoSource(config.input_path)
    sink: VideoSink | None = None
    viewer = OpenCVViewer(
        params.window_title,
        params.delay_ms,
        params.escape_key,
        enabled=config.show_window,
    )
    frame_stats = FrameStats(window=30)
    exit_code = 0

    try:
        source.open()
        labels = load_labels(config.labels_path)

        sink = VideoSink(config.output_path, source.fps, params.frame_size, params.fourcc)
        sink.open()

        acceleration = select_acceleration(config.use_cuda)
        detector = SSDDetector(
            config.prototxt_path,
            config.weights_path,
            params,
            acceleration,
        )

        detection_loop(
            source,
            sink,
            detector,
            viewer,
            labels,
            params,
            acceleration,
            frame_stats,
        )
    except DemoError as exc:
        logger.error("{}", exc)
        exit_code = 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        logger.info("=" * 60)
        logger.info("Session Summary")
        summary = frame_stats.summary()
        proc_stats = sys_monitor.get_process_stats()
        logger.info("Source: {}", source.get_info())
        logger.info("Total frames: {}", summary.frames)
        logger.info("Detections drawn: {}", summary.detections)
        logger.info("Frames written: {}", sink.frames_written if sink else 0)
        logger.info("Avg throughput: {:.1f} FPS", summary.throughput_fps)
        logger.info("Avg inference: {:.1f}ms", summary.mean_inference_ms)
        logger.info(
            "Process: CPU {:.1f}% | {:.0f}MB RAM",
            proc_stats["cpu_percent"],
            proc_stats["memory_mb"],
        )

        source.release()
        if sink is not None:
            sink.release()
        viewer.close()
        logger.success("Cleanup complete. Goodbye!")

    return exit_code


def main() -> None:
    """Console-script entry point."""
    raise SystemExit(run_demo())


if __name__ == "__main__":
    main()
