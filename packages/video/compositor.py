"""
Compositor - Stream the frames of a render plan.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from packages.render.plan import OverlayPlan, RenderPlan

from .clip_loader import ClipLoader
from .text_overlay import FADE_FRAMES, TextOverlayDrawer, overlay_opacity

logger = logging.getLogger(__name__)


@dataclass
class CompositorSettings:
    """Settings for the compositor."""
    fade_frames: int = FADE_FRAMES


class Compositor:
    """
    Produce the output frames of a plan in order.

    Segments play back to back; every overlay active on a frame is drawn
    over it with its fade applied.

    Usage:
        comp = Compositor(plan)
        for frame in comp.frames():
            writer.write(frame)
    """

    def __init__(
        self,
        plan: RenderPlan,
        loader: Optional[ClipLoader] = None,
        drawer: Optional[TextOverlayDrawer] = None,
        settings: Optional[CompositorSettings] = None,
    ):
        """
        Initialize the compositor.

        Args:
            plan: Frame-mapped timeline to compose
            loader: Source clip reader
            drawer: Overlay text drawer
            settings: Compositor settings
        """
        self.plan = plan
        self.loader = loader or ClipLoader()
        self.drawer = drawer or TextOverlayDrawer()
        self.settings = settings or CompositorSettings()

    @property
    def num_frames(self) -> int:
        return self.plan.duration_in_frames

    def frames(self) -> Iterator[np.ndarray]:
        """Yield every output frame, ``plan.duration_in_frames`` in total."""
        plan = self.plan
        index = 0
        for segment in plan.segments:
            logger.debug(
                "Compositing %s: frames %d-%d",
                segment.clip_id, segment.start_frame, segment.end_frame,
            )
            clip_frames = self.loader.frames(
                segment.url, segment.frame_count, plan.width, plan.height, plan.fps,
            )
            for frame in clip_frames:
                yield self.apply_overlays(frame, index)
                index += 1

    def apply_overlays(self, frame: np.ndarray, index: int) -> np.ndarray:
        """Draw every overlay active at frame ``index``."""
        for overlay in self.plan.overlays:
            opacity = self._opacity(overlay, index)
            if opacity > 0:
                frame = self.drawer.draw(frame, overlay.content, opacity)
        return frame

    def _opacity(self, overlay: OverlayPlan, index: int) -> float:
        return overlay_opacity(
            index - overlay.start_frame,
            overlay.frame_count,
            self.settings.fade_frames,
        )
