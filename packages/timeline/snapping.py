"""
Snapping - Magnetic alignment of overlay edges to clip boundaries.

All positions are in clip-unit space. Nothing here touches pixels or frames.
"""

from dataclasses import dataclass
from typing import List, Sequence

from packages.core.types import Clip

DEFAULT_SNAP_THRESHOLD = 0.3

# Floor applied to a snapped duration so a dragged overlay never collapses
# to zero width. Committed overlays are held to a one-clip minimum instead.
MIN_DISPLAY_DURATION = 0.1

# Boundaries of a timeline with no clips
EMPTY_TIMELINE_POINTS = (0.0, 1.0)


@dataclass(frozen=True)
class SnappedRange:
    """Result of snapping both edges of a range."""
    start: float
    duration: float

    @property
    def end(self) -> float:
        return self.start + self.duration


def snap_points(clips: Sequence[Clip]) -> List[float]:
    """
    Get every boundary an edge can snap to.

    Includes the timeline start, each clip's start and end, and the end of
    the last clip.

    Args:
        clips: Clips in timeline order

    Returns:
        Sorted boundaries without duplicates ([0, 1] for an empty timeline)
    """
    if not clips:
        return list(EMPTY_TIMELINE_POINTS)

    points = {0.0}
    for clip in clips:
        points.add(float(clip.start_position))
        points.add(float(clip.end_position))
    points.add(float(clips[-1].end_position))

    return sorted(points)


def _nearest(points: Sequence[float], position: float) -> float:
    # min() keeps the first of equally distant candidates
    return min(points, key=lambda point: abs(point - position))


def snap_position(
    position: float,
    clips: Sequence[Clip],
    threshold: float = DEFAULT_SNAP_THRESHOLD,
) -> float:
    """
    Snap a position to the nearest clip boundary.

    Args:
        position: Position in clip units
        clips: Clips in timeline order
        threshold: Maximum distance (inclusive) that still snaps

    Returns:
        The nearest boundary if it lies within ``threshold``, else ``position``
    """
    nearest = _nearest(snap_points(clips), position)
    if abs(nearest - position) <= threshold:
        return nearest
    return position


def snap_range(
    start: float,
    duration: float,
    clips: Sequence[Clip],
    threshold: float = DEFAULT_SNAP_THRESHOLD,
) -> SnappedRange:
    """
    Snap both edges of a range independently.

    Start and end are each compared against the full boundary set, so they
    may land on unrelated boundaries. The resulting duration is floored at
    MIN_DISPLAY_DURATION and the start at 0.

    Args:
        start: Range start in clip units
        duration: Range length in clip units
        clips: Clips in timeline order
        threshold: Maximum snapping distance for either edge

    Returns:
        SnappedRange with the adjusted start and duration
    """
    points = snap_points(clips)
    end = start + duration

    nearest_start = _nearest(points, start)
    nearest_end = _nearest(points, end)

    snapped_start = nearest_start if abs(nearest_start - start) <= threshold else start
    snapped_end = nearest_end if abs(nearest_end - end) <= threshold else end

    return SnappedRange(
        start=max(0.0, snapped_start),
        duration=max(MIN_DISPLAY_DURATION, snapped_end - snapped_start),
    )
