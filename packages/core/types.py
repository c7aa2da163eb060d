"""Shared type definitions for ClipRender.

Contains canonical type definitions used across packages.
Domain-specific types should remain in their respective packages.

Core Types (shared across packages):
- Aspect: Output orientation and its canonical dimensions
- JobStatus: Render job lifecycle states
- Clip: A clip's extent on the clip-unit timeline
- SourceClip: A media clip submitted for rendering
- Overlay: Text/animation overlay spanning a clip range
- FrameRange: A span of frames on the render timeline
- RenderJob: Lifecycle record of one render request
- RenderRequest: Clips, overlays and aspect submitted for rendering

Domain-Specific Types (remain in packages):
- timeline.SnappedRange: Result of two-sided snapping
- timeline.PixelGeometry: Overlay placement in pixels
- render.RenderPlan: Frame-mapped timeline handed to a renderer
- video.LoadedClip: Decoded source frames
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


# ============ Enums ============


class Aspect(Enum):
    """Output orientation of a render."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @property
    def dimensions(self) -> tuple[int, int]:
        """Canonical (width, height) in pixels."""
        if self is Aspect.PORTRAIT:
            return (1080, 1920)
        return (1920, 1080)


class JobStatus(Enum):
    """Render job lifecycle status.

    Jobs progress through: PENDING -> RUNNING -> SUCCEEDED (or FAILED).
    SUCCEEDED and FAILED are terminal.
    """

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


# ============ Timeline ============


@dataclass(frozen=True)
class Clip:
    """A clip's extent in clip-unit space.

    ``start_position`` is an offset on the abstract timeline, not pixels
    or frames. A simple sequential timeline gives clip ``i`` the position
    ``i`` and a duration of 1.
    """

    id: str
    start_position: float = 0
    duration: float = 1.0

    @property
    def end_position(self) -> float:
        return self.start_position + self.duration


@dataclass(frozen=True)
class SourceClip:
    """A media clip submitted for rendering.

    ``duration`` is in seconds; on the render timeline the i-th source
    clip occupies clip unit ``[i, i + 1)``.
    """

    id: str
    url: str
    duration: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "url": self.url, "duration": self.duration}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceClip":
        """Create from dictionary."""
        return cls(
            id=str(data.get("id", "")),
            url=data.get("url", ""),
            duration=float(data.get("duration", 0)),
        )


@dataclass(frozen=True)
class Overlay:
    """Text/animation overlay spanning a contiguous clip range.

    ``start_position`` and ``duration`` are in clip units. They may be
    fractional while an edit is in progress and are integral once committed.
    ``asset`` is an opaque animation blob passed through to the renderer.
    """

    id: str
    content: str
    start_position: float = 0
    duration: float = 1.0
    asset: Optional[Any] = field(default=None, compare=False)

    @property
    def end_position(self) -> float:
        return self.start_position + self.duration

    def moved(self, start_position: float, duration: Optional[float] = None) -> "Overlay":
        """Return a copy at a new position (and optionally new duration)."""
        if duration is None:
            duration = self.duration
        return replace(self, start_position=start_position, duration=duration)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "content": self.content,
            "start_position": self.start_position,
            "duration": self.duration,
            "asset": self.asset,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Overlay":
        """Create from dictionary (snake_case or camelCase keys)."""
        start = data.get("start_position", data.get("startPosition", 0))
        return cls(
            id=str(data.get("id", "")),
            content=data.get("content", ""),
            start_position=float(start),
            duration=float(data.get("duration", 1.0)),
            asset=data.get("asset"),
        )


@dataclass(frozen=True)
class FrameRange:
    """A span of frames on the render timeline."""

    start_frame: int
    frame_count: int

    @property
    def end_frame(self) -> int:
        """First frame after the range."""
        return self.start_frame + self.frame_count

    def contains(self, frame: int) -> bool:
        return self.start_frame <= frame < self.end_frame


# ============ Render Jobs ============


@dataclass(frozen=True)
class RenderJob:
    """Lifecycle record of one render request.

    Records are immutable; the job store replaces them wholesale so a
    concurrent reader never observes a partially updated record.
    """

    id: str
    status: JobStatus = JobStatus.PENDING
    progress: int = 0
    error_message: Optional[str] = None
    artifact_path: Optional[str] = None
    created_at: float = 0.0
    updated_at: float = 0.0

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "id": self.id,
            "status": self.status.value,
            "progress": self.progress,
        }
        if self.error_message:
            result["error_message"] = self.error_message
        if self.artifact_path:
            result["artifact_path"] = self.artifact_path
        return result


@dataclass(frozen=True)
class RenderRequest:
    """A timeline submitted for rendering.

    ``overlays`` is a list for forward compatibility; how many a render
    accepts is checked when the request is validated.
    """

    clips: tuple[SourceClip, ...]
    overlays: tuple[Overlay, ...] = ()
    aspect: Aspect = Aspect.PORTRAIT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "clips": [clip.to_dict() for clip in self.clips],
            "overlays": [overlay.to_dict() for overlay in self.overlays],
            "aspect": self.aspect.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderRequest":
        """Create from dictionary.

        Accepts a single ``overlay`` in addition to the ``overlays`` list.
        """
        overlays = [Overlay.from_dict(item) for item in data.get("overlays") or []]
        if data.get("overlay"):
            overlays.append(Overlay.from_dict(data["overlay"]))
        return cls(
            clips=tuple(SourceClip.from_dict(item) for item in data.get("clips") or []),
            overlays=tuple(overlays),
            aspect=Aspect(data.get("aspect", Aspect.PORTRAIT.value)),
        )
