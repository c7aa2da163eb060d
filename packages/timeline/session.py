"""
Editing Session - Clip ordering and the snap-aware overlay of one edit.
"""

import logging
import uuid
from typing import Any, List, Optional, Sequence, Tuple

from packages.core.protocols import AssetLookup
from packages.core.types import Aspect, Clip, Overlay, RenderRequest, SourceClip

from .constraints import clamp_range, clamp_start, commit_range
from .geometry import PixelGeometry, pixel_geometry
from .snapping import DEFAULT_SNAP_THRESHOLD, snap_position, snap_range

logger = logging.getLogger(__name__)

# Overlays are kept in a list; renders currently support a single one.
MAX_OVERLAYS = 1

# Clips a freshly applied overlay spans
DEFAULT_OVERLAY_SPAN = 2


class EditingSession:
    """
    Owns the clip sequence and overlay of one editing session.

    The overlay only moves through ``move_overlay``/``resize_overlay``,
    which snap to clip boundaries and keep it on the timeline.

    Usage:
        session = EditingSession(clips)
        session.apply_overlay("Hello")
        session.resize_overlay(0.8, 1.4)
        session.commit_overlay()
    """

    def __init__(
        self,
        clips: Sequence[SourceClip] = (),
        snap_threshold: float = DEFAULT_SNAP_THRESHOLD,
        assets: Optional[AssetLookup] = None,
    ):
        """
        Initialize the session.

        Args:
            clips: Source clips in playback order
            snap_threshold: Snap distance in clip units
            assets: Template lookup used when an overlay names a template
        """
        self._clips: List[SourceClip] = list(clips)
        self._removed: List[SourceClip] = []
        self._overlays: List[Overlay] = []
        self.snap_threshold = snap_threshold
        self.assets = assets

    # ============ Clips ============

    @property
    def clips(self) -> Tuple[SourceClip, ...]:
        return tuple(self._clips)

    @property
    def removed_clips(self) -> Tuple[SourceClip, ...]:
        return tuple(self._removed)

    @property
    def total_clips(self) -> int:
        return len(self._clips)

    def timeline_clips(self) -> List[Clip]:
        """Clips as one-unit spans at their list index."""
        return [
            Clip(id=clip.id, start_position=index, duration=1)
            for index, clip in enumerate(self._clips)
        ]

    def _index_of(self, clip_id: str) -> int:
        for index, clip in enumerate(self._clips):
            if clip.id == clip_id:
                return index
        raise ValueError(f"Clip not on timeline: {clip_id}")

    def add_clip(self, clip: SourceClip) -> None:
        """Append a clip to the end of the timeline."""
        self._clips.append(clip)

    def remove_clip(self, clip_id: str) -> SourceClip:
        """
        Take a clip off the timeline.

        An overlay spanning the removed clip shrinks by one clip (never below
        one), and the overlay is pulled back if it would hang off the end.

        Raises:
            ValueError: If the clip is not on the timeline
        """
        index = self._index_of(clip_id)
        clip = self._clips.pop(index)
        self._removed.append(clip)

        overlay = self.overlay
        if overlay is not None:
            start, duration = overlay.start_position, overlay.duration
            if start <= index < start + duration:
                duration = max(1, duration - 1)
            start = clamp_start(start, duration, self.total_clips)
            self._overlays = [overlay.moved(start, duration)]

        logger.debug("Removed clip %s at index %d", clip_id, index)
        return clip

    def restore_clip(self, clip_id: str) -> SourceClip:
        """
        Put a removed clip back at the end of the timeline.

        Raises:
            ValueError: If the clip was not removed
        """
        for index, clip in enumerate(self._removed):
            if clip.id == clip_id:
                del self._removed[index]
                self._clips.append(clip)
                return clip
        raise ValueError(f"Clip was not removed: {clip_id}")

    def move_clip(self, clip_id: str, new_index: int) -> None:
        """Reorder a clip; positions of all clips follow the new order."""
        clip = self._clips.pop(self._index_of(clip_id))
        new_index = max(0, min(new_index, len(self._clips)))
        self._clips.insert(new_index, clip)

    # ============ Overlay ============

    @property
    def overlays(self) -> Tuple[Overlay, ...]:
        return tuple(self._overlays)

    @property
    def overlay(self) -> Optional[Overlay]:
        return self._overlays[0] if self._overlays else None

    def _require_overlay(self) -> Overlay:
        overlay = self.overlay
        if overlay is None:
            raise ValueError("No overlay applied")
        return overlay

    def apply_overlay(
        self,
        content: str,
        asset: Optional[Any] = None,
        template_key: Optional[str] = None,
        overlay_id: Optional[str] = None,
    ) -> Overlay:
        """
        Apply a text overlay, replacing any existing one.

        The overlay starts on the first clip and spans up to two clips.

        Args:
            content: Overlay text
            asset: Animation blob to attach as is
            template_key: Animation template to fetch from ``assets`` when no
                ``asset`` is given
            overlay_id: Explicit id (generated when omitted)

        Raises:
            ValueError: If ``content`` is blank
        """
        if not content.strip():
            raise ValueError("Overlay content must not be empty")

        if asset is None and template_key and self.assets is not None:
            asset = self.assets.get_asset(template_key, content)
            if asset is None:
                logger.warning("Unknown animation template: %s", template_key)

        overlay = Overlay(
            id=overlay_id or f"text-overlay-{uuid.uuid4().hex[:8]}",
            content=content,
            start_position=0,
            duration=max(1, min(DEFAULT_OVERLAY_SPAN, self.total_clips)),
            asset=asset,
        )
        self._overlays = [overlay]
        return overlay

    def reset_overlay(self) -> None:
        """Remove the overlay."""
        self._overlays = []

    def move_overlay(self, position: float) -> Overlay:
        """Move the overlay, snapping its start to the nearest boundary."""
        overlay = self._require_overlay()
        snapped = snap_position(position, self.timeline_clips(), self.snap_threshold)
        start = clamp_start(snapped, overlay.duration, self.total_clips)

        self._overlays = [overlay.moved(start)]
        return self._overlays[0]

    def resize_overlay(self, position: float, duration: float) -> Overlay:
        """Change start and length, snapping both edges independently."""
        overlay = self._require_overlay()
        snapped = snap_range(position, duration, self.timeline_clips(), self.snap_threshold)
        start, duration = clamp_range(snapped.start, snapped.duration, self.total_clips)

        self._overlays = [overlay.moved(start, duration)]
        return self._overlays[0]

    def commit_overlay(self) -> Overlay:
        """Settle the overlay on whole clips (at least one)."""
        overlay = self._require_overlay()
        start, duration = commit_range(overlay.start_position, overlay.duration, self.total_clips)

        self._overlays = [overlay.moved(start, duration)]
        return self._overlays[0]

    def overlay_geometry(self, clip_width_px: float, gap_px: float) -> PixelGeometry:
        """Pixel placement of the overlay on the timeline strip."""
        overlay = self._require_overlay()
        return pixel_geometry(overlay.start_position, overlay.duration, clip_width_px, gap_px)

    def to_render_request(self, aspect: Aspect = Aspect.PORTRAIT) -> RenderRequest:
        """Snapshot the timeline as a render request."""
        return RenderRequest(
            clips=tuple(self._clips),
            overlays=tuple(self._overlays),
            aspect=aspect,
        )
