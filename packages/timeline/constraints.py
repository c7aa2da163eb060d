"""
Constraints - Keep an overlay range inside the timeline.

The snapping functions never clamp; editors call these after snapping.
Drag and resize helpers turn a pointer delta in pixels into a clip-unit
range the same way the timeline strip lays clips out.
"""

from dataclasses import replace
from enum import Enum
from typing import List, Sequence, Tuple

from packages.core.types import Clip
from packages.core.utils import clamp, round_half_up

from .geometry import unit_width
from .snapping import MIN_DISPLAY_DURATION

# Smallest overlay a gesture or a commit may produce, in clip units
MIN_COMMITTED_DURATION = 1


class ResizeSide(Enum):
    """Edge of the overlay being dragged."""
    LEFT = "left"
    RIGHT = "right"


def clamp_start(start: float, duration: float, total_clips: int) -> float:
    """Clamp a start so that ``[start, start + duration]`` fits the timeline."""
    return clamp(start, 0, max(0, total_clips - duration))


def clamp_range(start: float, duration: float, total_clips: int) -> Tuple[float, float]:
    """
    Fit a live range onto the timeline.

    A range longer than the timeline is cut to the timeline length (never
    below MIN_DISPLAY_DURATION); the start is then clamped so the range
    ends on or before the last clip.

    Returns:
        (start, duration) in clip units
    """
    fitted = min(duration, max(MIN_DISPLAY_DURATION, total_clips))
    return clamp_start(start, fitted, total_clips), fitted


def commit_range(start: float, duration: float, total_clips: int) -> Tuple[int, int]:
    """
    Turn a live (possibly fractional) range into a committed one.

    The committed range is integral, at least one clip long, no longer than
    the timeline, and starts inside it.

    Returns:
        (start, duration) in whole clip units
    """
    committed_duration = int(
        clamp(round_half_up(duration), MIN_COMMITTED_DURATION, max(MIN_COMMITTED_DURATION, total_clips))
    )
    committed_start = int(clamp_start(round_half_up(start), committed_duration, total_clips))
    return committed_start, committed_duration


def drag_position(
    origin_start: float,
    delta_px: float,
    duration: float,
    clip_width_px: float,
    gap_px: float,
    total_clips: int,
) -> float:
    """
    Position of an overlay being dragged by ``delta_px``.

    Args:
        origin_start: Start when the drag began
        delta_px: Horizontal pointer movement since the drag began
        duration: Overlay length (unchanged by a drag)
        clip_width_px: Width of one clip card
        gap_px: Gap between clip cards
        total_clips: Number of clips on the timeline

    Returns:
        New start in clip units, kept inside the timeline
    """
    delta = delta_px / unit_width(clip_width_px, gap_px)
    return clamp_start(origin_start + delta, duration, total_clips)


def resize_range(
    side: ResizeSide,
    origin_start: float,
    origin_duration: float,
    delta_px: float,
    clip_width_px: float,
    gap_px: float,
    total_clips: int,
) -> Tuple[float, float]:
    """
    Range of an overlay whose edge is being dragged.

    Dragging the right edge keeps the start fixed; dragging the left edge
    keeps the end fixed. Either way the overlay stays at least one clip long
    and inside the timeline.

    Returns:
        (start, duration) in clip units
    """
    delta = delta_px / unit_width(clip_width_px, gap_px)

    if side is ResizeSide.RIGHT:
        max_duration = max(MIN_COMMITTED_DURATION, total_clips - origin_start)
        duration = clamp(origin_duration + delta, MIN_COMMITTED_DURATION, max_duration)
        return origin_start, duration

    origin_end = origin_start + origin_duration
    start = clamp(origin_start + delta, 0, max(0, origin_end - MIN_COMMITTED_DURATION))
    return start, origin_end - start


def sequential_positions(clips: Sequence[Clip]) -> List[Clip]:
    """Recompute start positions so clips sit back to back in list order."""
    positioned = []
    position = 0.0
    for clip in clips:
        positioned.append(replace(clip, start_position=position))
        position += clip.duration
    return positioned
