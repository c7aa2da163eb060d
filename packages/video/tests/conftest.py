"""
Shared fixtures for video package tests.
"""

from unittest.mock import MagicMock

import cv2
import numpy as np
import pytest

from packages.render.plan import OverlayPlan, RenderPlan, SegmentPlan


def _gray_frames(count, width=40, height=30):
    return [np.full((height, width, 3), i, dtype=np.uint8) for i in range(count)]


@pytest.fixture
def gray_frames():
    """Factory for frames whose every pixel equals the frame index."""
    return _gray_frames


@pytest.fixture
def sample_frames():
    """Create sample video frames (10 frames, 100x100, RGB)."""
    return np.random.randint(0, 255, (10, 100, 100, 3), dtype=np.uint8)


@pytest.fixture
def single_frame():
    """Create a single frame (30 rows x 40 columns, RGB)."""
    return np.random.randint(0, 255, (30, 40, 3), dtype=np.uint8)


@pytest.fixture
def mock_video_capture(mocker):
    """Factory patching cv2.VideoCapture with a capture that returns ``frames``."""

    def _make(frames, fps=30.0, opened=True):
        mock_cap = MagicMock()
        mock_cap.isOpened.return_value = opened
        props = {cv2.CAP_PROP_FPS: fps, cv2.CAP_PROP_FRAME_COUNT: float(len(frames))}
        mock_cap.get.side_effect = lambda prop: props.get(prop, 0.0)
        mock_cap.read.side_effect = [(True, frame) for frame in frames] + [(False, None)]

        mocker.patch("cv2.VideoCapture", return_value=mock_cap)
        return mock_cap

    return _make


@pytest.fixture
def mock_ffmpeg(mocker):
    """Mock subprocess calls for ffmpeg."""
    mock_run = mocker.patch("subprocess.run")
    mock_run.return_value = MagicMock(returncode=0, stdout=b"", stderr=b"")

    mock_popen = mocker.patch("subprocess.Popen")
    process = MagicMock()
    process.returncode = 0
    process.stdin = MagicMock()
    mock_popen.return_value = process

    return mock_run, mock_popen


@pytest.fixture
def small_plan():
    """Two 3-frame segments at 40x30 with an overlay over frames 2-4."""
    return RenderPlan(
        fps=30,
        width=40,
        height=30,
        duration_in_frames=6,
        segments=(
            SegmentPlan(clip_id="a", url="/videos/a.mp4", start_frame=0, frame_count=3),
            SegmentPlan(clip_id="b", url="/videos/b.mp4", start_frame=3, frame_count=3),
        ),
        overlays=(
            OverlayPlan(id="text-1", content="Hi", start_frame=2, frame_count=3),
        ),
    )


class FakeLoader:
    """Clip loader yielding solid frames and recording its calls."""

    def __init__(self):
        self.calls = []

    def frames(self, url, frame_count, width, height, fps):
        self.calls.append((url, frame_count, width, height, fps))
        for _ in range(frame_count):
            yield np.zeros((height, width, 3), dtype=np.uint8)


@pytest.fixture
def fake_loader():
    return FakeLoader()
