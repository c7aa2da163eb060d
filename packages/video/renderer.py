"""
FFmpeg Renderer - Default renderer: OpenCV frames piped into ffmpeg.
"""

import logging
from pathlib import Path
from typing import Optional

from packages.core.errors import ExportError
from packages.core.protocols import ProgressCallback
from packages.render.plan import RenderPlan

from .clip_loader import ClipLoader
from .compositor import Compositor, CompositorSettings
from .exporter import ExportSettings, VideoExporter
from .text_overlay import TextOverlayDrawer

logger = logging.getLogger(__name__)


class FFmpegRenderer:
    """
    Render plans to MP4 by compositing frames and streaming them to ffmpeg.

    Progress is reported as the fraction of frames written.

    Usage:
        renderer = FFmpegRenderer()
        renderer.render(plan, Path("renders/video-1.mp4"), print)
    """

    def __init__(
        self,
        exporter: Optional[VideoExporter] = None,
        loader: Optional[ClipLoader] = None,
        drawer: Optional[TextOverlayDrawer] = None,
        settings: Optional[CompositorSettings] = None,
        export_settings: Optional[ExportSettings] = None,
    ):
        self.exporter = exporter or VideoExporter(export_settings)
        self.loader = loader or ClipLoader()
        self.drawer = drawer or TextOverlayDrawer()
        self.settings = settings or CompositorSettings()

    def render(self, plan: RenderPlan, output_path: Path, on_progress: ProgressCallback) -> Path:
        """
        Render ``plan`` to ``output_path``.

        Raises:
            RendererUnavailableError: If ffmpeg is missing
            ClipLoadError: If a source clip cannot be read
            ExportError: If encoding fails or the plan has no frames
        """
        total = plan.duration_in_frames
        if total <= 0:
            raise ExportError(str(output_path), "no frames to export")

        self.exporter.check_ffmpeg()
        compositor = Compositor(plan, self.loader, self.drawer, self.settings)

        logger.info("Rendering %d frames at %dx%d to %s", total, plan.width, plan.height, output_path)
        on_progress(0.0)
        with self.exporter.open(output_path, plan.width, plan.height, plan.fps) as writer:
            for frame in compositor.frames():
                writer.write(frame)
                on_progress(writer.frames_written / total)

        if writer.frames_written != total:
            raise ExportError(
                str(output_path),
                f"wrote {writer.frames_written} of {total} frames",
            )
        return Path(output_path)
