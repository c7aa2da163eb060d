"""Timeline service - server-side access to the snapping and geometry engine."""

from typing import Optional, Sequence

from packages.core import Clip
from packages.timeline import (
    DEFAULT_SNAP_THRESHOLD,
    clamp_range,
    commit_range,
    covered_width,
    pixel_geometry,
    snap_points,
    snap_range,
)


class TimelineService:
    """Snaps overlay drafts and lays them out in pixels."""

    def __init__(self, snap_threshold: float = DEFAULT_SNAP_THRESHOLD):
        self.snap_threshold = snap_threshold

    def layout(
        self,
        clips: Sequence[Clip],
        start: float,
        duration: float,
        clip_width_px: float,
        gap_px: float,
        threshold: Optional[float] = None,
        commit: bool = False,
    ) -> dict:
        """
        Snap an overlay draft and compute where it is drawn.

        Args:
            clips: Timeline clips in clip-unit space
            start: Draft start in clip units
            duration: Draft length in clip units
            clip_width_px: Width of one clip card
            gap_px: Gap between clip cards
            threshold: Snap distance (service default when omitted)
            commit: Settle the range on whole clips as when a drag ends

        Returns:
            Dict with the snapped range, pixel geometry and snap points
        """
        if threshold is None:
            threshold = self.snap_threshold

        snapped = snap_range(start, duration, clips, threshold)
        total = len(clips)
        range_start, range_duration = clamp_range(snapped.start, snapped.duration, total)
        if commit:
            range_start, range_duration = commit_range(range_start, range_duration, total)

        geometry = pixel_geometry(range_start, range_duration, clip_width_px, gap_px)
        return {
            "start": range_start,
            "duration": range_duration,
            "x_offset_px": geometry.x_offset_px,
            "width_px": geometry.width_px,
            "min_width_px": geometry.min_width_px,
            "covered_width_px": covered_width(
                range_start, range_duration, clips, clip_width_px, gap_px
            ),
            "snap_points": snap_points(clips),
        }
