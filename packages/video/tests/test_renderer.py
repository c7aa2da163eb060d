"""Tests for renderer module."""

from dataclasses import replace
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from packages.core.errors import ExportError, RendererUnavailableError
from packages.core.protocols import Renderer
from packages.core.types import Aspect, JobStatus, Overlay, RenderRequest, SourceClip
from packages.render.manager import RenderJobManager
from packages.video.renderer import FFmpegRenderer


class FakeWriter:
    """Frame writer that counts frames and writes a stub file on close."""

    def __init__(self, output_path):
        self.output_path = Path(output_path)
        self.frames_written = 0
        self.shapes = []

    def write(self, frame):
        self.shapes.append(frame.shape)
        self.frames_written += 1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.output_path.write_bytes(b"mp4")


@pytest.fixture
def fake_exporter():
    """Exporter whose open() returns FakeWriters."""
    exporter = MagicMock()
    exporter.writers = []

    def _open(output_path, width, height, fps):
        writer = FakeWriter(output_path)
        exporter.writers.append(writer)
        return writer

    exporter.open.side_effect = _open
    return exporter


class TestFFmpegRenderer:
    """Tests for FFmpegRenderer."""

    def test_is_a_renderer(self):
        assert isinstance(FFmpegRenderer(exporter=MagicMock()), Renderer)

    def test_renders_every_frame(self, small_plan, fake_loader, fake_exporter, tmp_path):
        """Test all frames reach the writer at plan size."""
        renderer = FFmpegRenderer(exporter=fake_exporter, loader=fake_loader)
        output = tmp_path / "video-1.mp4"

        result = renderer.render(small_plan, output, lambda fraction: None)

        writer = fake_exporter.writers[0]
        assert result == output
        assert writer.frames_written == 6
        assert set(writer.shapes) == {(30, 40, 3)}
        fake_exporter.check_ffmpeg.assert_called_once()
        fake_exporter.open.assert_called_once_with(output, 40, 30, 30)

    def test_progress_reaches_one(self, small_plan, fake_loader, fake_exporter, tmp_path):
        """Test progress starts at 0, never decreases and ends at 1."""
        progress = []
        renderer = FFmpegRenderer(exporter=fake_exporter, loader=fake_loader)

        renderer.render(small_plan, tmp_path / "v.mp4", progress.append)

        assert progress[0] == 0.0
        assert progress[-1] == pytest.approx(1.0)
        assert progress == sorted(progress)
        assert len(progress) == 7

    def test_empty_plan(self, small_plan, fake_exporter, tmp_path):
        plan = replace(small_plan, duration_in_frames=0, segments=(), overlays=())

        with pytest.raises(ExportError):
            FFmpegRenderer(exporter=fake_exporter).render(plan, tmp_path / "v.mp4", print)

        fake_exporter.check_ffmpeg.assert_not_called()

    def test_ffmpeg_missing(self, small_plan, fake_exporter, tmp_path):
        fake_exporter.check_ffmpeg.side_effect = RendererUnavailableError("ffmpeg not found")

        with pytest.raises(RendererUnavailableError):
            FFmpegRenderer(exporter=fake_exporter).render(small_plan, tmp_path / "v.mp4", print)

        fake_exporter.open.assert_not_called()


class TestWithManager:
    """Tests for running the default renderer through the job manager."""

    def test_job_succeeds(self, fake_loader, fake_exporter, tmp_path):
        """Test a submitted job ends with the rendered file."""
        renderer = FFmpegRenderer(exporter=fake_exporter, loader=fake_loader)
        manager = RenderJobManager(renderer, renders_dir=tmp_path)
        request = RenderRequest(
            clips=tuple(SourceClip(id=str(i), url=f"/v/{i}.mp4", duration=0.1) for i in range(2)),
            overlays=(Overlay(id="t", content="Hi", start_position=0, duration=1),),
            aspect=Aspect.LANDSCAPE,
        )

        try:
            job = manager.wait(manager.submit(request), timeout=5)
        finally:
            manager.shutdown()

        assert job.status is JobStatus.SUCCEEDED
        assert Path(job.artifact_path).read_bytes() == b"mp4"
        assert fake_exporter.writers[0].frames_written == 6
        assert fake_loader.calls[0][2:4] == (1920, 1080)
