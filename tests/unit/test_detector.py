"""Unit tests for the SSD detector wrapper."""

from __future__ import annotations

from unittest.mock import patch

import cv2
import numpy as np
import pytest

from mobilenet_ssd_demo.acceleration import cpu_acceleration
from mobilenet_ssd_demo.detector import SSDDetector, as_detection_rows
from mobilenet_ssd_demo.errors import ModelLoadError
from mobilenet_ssd_demo.types import Acceleration, DetectionParams


@pytest.fixture
def model_files(tmp_path):
    prototxt = tmp_path / "MobileNetSSD_deploy.prototxt"
    weights = tmp_path / "MobileNetSSD_deploy.caffemodel"
    prototxt.write_text("name: 'stub'\n", encoding="utf-8")
    weights.write_bytes(b"\x00")
    return prototxt, weights


class TestAsDetectionRows:
    """Tests for as_detection_rows."""

    def test_flattens_ssd_output(self):
        output = np.arange(14, dtype=np.float32).reshape(1, 1, 2, 7)

        rows = as_detection_rows(output)

        assert rows.shape == (2, 7)
        assert rows[1, 0] == 7

    def test_empty_output(self):
        assert as_detection_rows(np.empty((1, 1, 0, 7))).shape == (0, 7)


class TestSSDDetector:
    """Tests for SSDDetector."""

    def test_missing_files_raise(self, tmp_path):
        with pytest.raises(ModelLoadError):
            SSDDetector(
                tmp_path / "missing.prototxt",
                tmp_path / "missing.caffemodel",
                DetectionParams(),
                cpu_acceleration("test"),
            )

    @patch("mobilenet_ssd_demo.detector.cv2.dnn.readNetFromCaffe")
    def test_empty_network_raises(self, mock_read, model_files):
        mock_read.return_value.empty.return_value = True

        with pytest.raises(ModelLoadError):
            SSDDetector(*model_files, DetectionParams(), cpu_acceleration("test"))

    @patch("mobilenet_ssd_demo.detector.cv2.dnn.readNetFromCaffe")
    def test_opencv_error_raises(self, mock_read, model_files):
        mock_read.side_effect = cv2.error("bad prototxt")

        with pytest.raises(ModelLoadError):
            SSDDetector(*model_files, DetectionParams(), cpu_acceleration("test"))

    @patch("mobilenet_ssd_demo.detector.cv2.dnn.readNetFromCaffe")
    def test_backend_applied_once(self, mock_read, model_files):
        """Test the backend/target is set at load time, not per frame."""
        net = mock_read.return_value
        net.empty.return_value = False
        net.forward.return_value = np.zeros((1, 1, 0, 7), dtype=np.float32)
        acceleration = Acceleration(
            enabled=True,
            backend=cv2.dnn.DNN_BACKEND_CUDA,
            target=cv2.dnn.DNN_TARGET_CUDA,
        )

        detector = SSDDetector(*model_files, DetectionParams(), acceleration)
        frame = np.zeros((500, 500, 3), dtype=np.uint8)
        detector.detect(frame)
        detector.detect(frame)

        mock_read.assert_called_once()
        net.setPreferableBackend.assert_called_once_with(cv2.dnn.DNN_BACKEND_CUDA)
        net.setPreferableTarget.assert_called_once_with(cv2.dnn.DNN_TARGET_CUDA)

    @patch("mobilenet_ssd_demo.detector.cv2.dnn.readNetFromCaffe")
    def test_detect_forwards_named_layers(self, mock_read, model_files):
        """Test the blob goes to 'data' and rows come from 'detection_out'."""
        net = mock_read.return_value
        net.empty.return_value = False
        net.forward.return_value = np.array(
            [[[[0, 15, 0.9, 0.1, 0.2, 0.3, 0.4]]]], dtype=np.float32
        )

        detector = SSDDetector(*model_files, DetectionParams(), cpu_acceleration("test"))
        result = detector.detect(np.zeros((500, 500, 3), dtype=np.uint8))

        blob, layer = net.setInput.call_args.args
        assert blob.shape == (1, 3, 300, 300)
        assert layer == "data"
        net.forward.assert_called_once_with("detection_out")
        assert result.rows.shape == (1, 7)
        assert result.rows[0, 1] == 15
        assert result.elapsed_s >= 0.0

    @patch("mobilenet_ssd_demo.detector.cv2.dnn.readNetFromCaffe")
    def test_blob_normalization(self, mock_read, model_files):
        """Test pixels are mean-subtracted and scaled."""
        mock_read.return_value.empty.return_value = False

        detector = SSDDetector(*model_files, DetectionParams(), cpu_acceleration("test"))
        blob = detector.make_blob(np.full((500, 500, 3), 255, dtype=np.uint8))

        assert blob.shape == (1, 3, 300, 300)
        assert blob[0, 0, 0, 0] == pytest.approx((255 - 127.5) * 0.007843, rel=1e-4)
