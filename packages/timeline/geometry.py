"""
Geometry - Map clip-unit ranges to on-screen pixel placement.
"""

from dataclasses import dataclass
from typing import Sequence

from packages.core.types import Clip

# Visual inset subtracted from an overlay's width so it sits inside the
# clip cards it spans.
OVERLAY_SLACK_PX = 15


@dataclass(frozen=True)
class PixelGeometry:
    """Placement of an overlay on the timeline strip."""
    x_offset_px: float
    width_px: float
    min_width_px: float

    def to_dict(self) -> dict:
        return {
            "x_offset_px": self.x_offset_px,
            "width_px": self.width_px,
            "min_width_px": self.min_width_px,
        }


def unit_width(clip_width_px: float, gap_px: float) -> float:
    """Pixels covered by one clip unit (a clip card plus its gap)."""
    return clip_width_px + gap_px


def pixel_geometry(
    start: float,
    duration: float,
    clip_width_px: float,
    gap_px: float,
    slack_px: float = OVERLAY_SLACK_PX,
) -> PixelGeometry:
    """
    Compute where an overlay is drawn.

    Args:
        start: Overlay start in clip units
        duration: Overlay length in clip units
        clip_width_px: Width of one clip card
        gap_px: Gap between clip cards
        slack_px: Inset removed from the width

    Returns:
        PixelGeometry; the width is never narrower than one clip
    """
    min_width = clip_width_px - slack_px
    spanned = clip_width_px * duration + gap_px * (duration - 1) - slack_px

    return PixelGeometry(
        x_offset_px=start * unit_width(clip_width_px, gap_px),
        width_px=max(min_width, spanned),
        min_width_px=min_width,
    )


def covered_width(
    start: float,
    duration: float,
    clips: Sequence[Clip],
    clip_width_px: float,
    gap_px: float,
) -> float:
    """
    Width of the clip cards an overlay covers.

    Partially covered clips at either end contribute only the covered
    fraction of their card. The result is never narrower than one clip.
    """
    if not clips:
        return clip_width_px

    end = start + duration
    covered = sorted(
        (clip for clip in clips if clip.start_position < end and clip.end_position > start),
        key=lambda clip: clip.start_position,
    )
    if not covered:
        return clip_width_px

    first, last = covered[0], covered[-1]
    width = (last.start_position - first.start_position) * unit_width(clip_width_px, gap_px)
    width += clip_width_px

    if start > first.start_position:
        width -= (start - first.start_position) * clip_width_px

    if end < last.end_position:
        end_coverage = end - last.start_position
        width -= (1 - end_coverage) * clip_width_px

    return max(clip_width_px, width)
