# Timeline package - snapping, geometry and frame mapping in clip-unit space

from .constraints import (
    ResizeSide,
    clamp_range,
    clamp_start,
    commit_range,
    drag_position,
    resize_range,
    sequential_positions,
)
from .frames import clip_frames, clip_schedule, frame_range_for, seconds_to_frames, total_frames
from .geometry import OVERLAY_SLACK_PX, PixelGeometry, covered_width, pixel_geometry
from .session import MAX_OVERLAYS, EditingSession
from .snapping import (
    DEFAULT_SNAP_THRESHOLD,
    MIN_DISPLAY_DURATION,
    SnappedRange,
    snap_points,
    snap_position,
    snap_range,
)

__all__ = [
    # Snapping
    "DEFAULT_SNAP_THRESHOLD",
    "MIN_DISPLAY_DURATION",
    "SnappedRange",
    "snap_points",
    "snap_position",
    "snap_range",
    # Geometry
    "OVERLAY_SLACK_PX",
    "PixelGeometry",
    "pixel_geometry",
    "covered_width",
    # Constraints
    "ResizeSide",
    "clamp_range",
    "clamp_start",
    "commit_range",
    "drag_position",
    "resize_range",
    "sequential_positions",
    # Frames
    "seconds_to_frames",
    "clip_frames",
    "clip_schedule",
    "total_frames",
    "frame_range_for",
    # Session
    "MAX_OVERLAYS",
    "EditingSession",
]
