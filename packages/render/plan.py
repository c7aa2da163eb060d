"""
Render Plan - Frame-mapped description of a timeline for a renderer.

Validates a RenderRequest and converts it from clip units into frames.
Clips are laid back to back, each rounded to whole frames on its own;
overlays are mapped onto the clips they cover.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from packages.core.errors import OverlayLimitError, TimelineValidationError
from packages.core.types import RenderRequest
from packages.timeline.frames import clip_schedule, frame_range_for
from packages.timeline.session import MAX_OVERLAYS

logger = logging.getLogger(__name__)

DEFAULT_FPS = 30


@dataclass(frozen=True)
class SegmentPlan:
    """One source clip placed on the render timeline."""
    clip_id: str
    url: str
    start_frame: int
    frame_count: int

    @property
    def end_frame(self) -> int:
        return self.start_frame + self.frame_count


@dataclass(frozen=True)
class OverlayPlan:
    """One text overlay placed on the render timeline."""
    id: str
    content: str
    start_frame: int
    frame_count: int
    asset: Optional[Any] = field(default=None, compare=False)

    @property
    def end_frame(self) -> int:
        return self.start_frame + self.frame_count


@dataclass(frozen=True)
class RenderPlan:
    """Everything a renderer needs, in frames and pixels."""
    fps: int
    width: int
    height: int
    duration_in_frames: int
    segments: Tuple[SegmentPlan, ...] = ()
    overlays: Tuple[OverlayPlan, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for logging and debugging."""
        return {
            "fps": self.fps,
            "width": self.width,
            "height": self.height,
            "duration_in_frames": self.duration_in_frames,
            "segments": [
                {
                    "clip_id": s.clip_id,
                    "url": s.url,
                    "start_frame": s.start_frame,
                    "frame_count": s.frame_count,
                }
                for s in self.segments
            ],
            "overlays": [
                {
                    "id": o.id,
                    "content": o.content,
                    "start_frame": o.start_frame,
                    "frame_count": o.frame_count,
                }
                for o in self.overlays
            ],
        }


def validate_request(request: RenderRequest) -> None:
    """
    Check a render request before any job is created.

    Raises:
        OverlayLimitError: If more overlays are given than a render supports
        TimelineValidationError: With every problem found in clips and overlays
    """
    if len(request.overlays) > MAX_OVERLAYS:
        raise OverlayLimitError(len(request.overlays), MAX_OVERLAYS)

    errors: List[str] = []
    total_clips = len(request.clips)

    if total_clips == 0:
        errors.append("At least one clip is required")

    seen_ids = set()
    for index, clip in enumerate(request.clips):
        if not clip.id:
            errors.append(f"clips[{index}]: id is required")
        elif clip.id in seen_ids:
            errors.append(f"clips[{index}]: duplicate id {clip.id!r}")
        seen_ids.add(clip.id)

        if not clip.url:
            errors.append(f"clips[{index}]: url is required")
        if not clip.duration > 0:
            errors.append(f"clips[{index}]: duration must be positive")

    for index, overlay in enumerate(request.overlays):
        if overlay.start_position < 0:
            errors.append(f"overlays[{index}]: startPosition must not be negative")
        if not overlay.duration > 0:
            errors.append(f"overlays[{index}]: duration must be positive")
        elif total_clips and overlay.end_position > total_clips:
            errors.append(
                f"overlays[{index}]: range [{overlay.start_position}, "
                f"{overlay.end_position}] is outside the timeline [0, {total_clips}]"
            )

    if errors:
        raise TimelineValidationError(errors)


def build_render_plan(request: RenderRequest, fps: int = DEFAULT_FPS) -> RenderPlan:
    """
    Validate ``request`` and map it to frames.

    Overlays with blank content are left out of the plan.

    Args:
        request: Clips, overlays and aspect to render
        fps: Output frame rate

    Returns:
        RenderPlan sized for the request's aspect

    Raises:
        InputError: If the request is invalid
    """
    validate_request(request)

    schedule = clip_schedule(request.clips, fps)
    segments = tuple(
        SegmentPlan(
            clip_id=clip.id,
            url=clip.url,
            start_frame=frames.start_frame,
            frame_count=frames.frame_count,
        )
        for clip, frames in zip(request.clips, schedule)
    )

    overlays = []
    for overlay in request.overlays:
        if not overlay.content.strip():
            logger.debug("Skipping blank overlay %s", overlay.id)
            continue
        frames = frame_range_for(overlay.start_position, overlay.duration, request.clips, fps)
        overlays.append(
            OverlayPlan(
                id=overlay.id,
                content=overlay.content,
                start_frame=frames.start_frame,
                frame_count=frames.frame_count,
                asset=overlay.asset,
            )
        )

    width, height = request.aspect.dimensions
    duration = segments[-1].end_frame if segments else 0

    return RenderPlan(
        fps=fps,
        width=width,
        height=height,
        duration_in_frames=duration,
        segments=segments,
        overlays=tuple(overlays),
    )
