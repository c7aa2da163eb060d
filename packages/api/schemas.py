"""Pydantic schemas for API request/response models.

Field names are camelCase on the wire and snake_case in Python.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from packages.core import Aspect, Clip, JobStatus, Overlay, RenderJob, RenderRequest, SourceClip


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _coerce_id(value: Any) -> Any:
    # Editors send numeric ids for clips
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


# ============ Render Schemas ============

class SourceClipSchema(CamelModel):
    """A clip to render, in timeline order."""
    id: str
    url: str
    duration: float = Field(..., description="Clip length in seconds")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        return _coerce_id(value)

    def to_source_clip(self) -> SourceClip:
        return SourceClip(id=self.id, url=self.url, duration=self.duration)


class OverlaySchema(CamelModel):
    """Text overlay spanning a range of clips."""
    id: str
    content: str
    start_position: float = Field(0, description="First covered clip (clip units)")
    duration: float = Field(1, description="Number of clips covered")
    asset: Optional[Any] = Field(None, description="Animation blob passed to the renderer")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        return _coerce_id(value)

    def to_overlay(self) -> Overlay:
        return Overlay(
            id=self.id,
            content=self.content,
            start_position=self.start_position,
            duration=self.duration,
            asset=self.asset,
        )


class RenderRequestBody(CamelModel):
    """Request body for starting a render.

    Clients may send a single ``overlay`` or an ``overlays`` list; both are
    merged and the overlay limit is checked when the job is submitted.
    """
    clips: list[SourceClipSchema]
    overlays: list[OverlaySchema] = Field(default_factory=list)
    overlay: Optional[OverlaySchema] = None
    aspect: Aspect = Aspect.PORTRAIT

    def to_request(self) -> RenderRequest:
        overlays = list(self.overlays)
        if self.overlay is not None:
            overlays.append(self.overlay)
        return RenderRequest(
            clips=tuple(clip.to_source_clip() for clip in self.clips),
            overlays=tuple(overlay.to_overlay() for overlay in overlays),
            aspect=self.aspect,
        )


class RenderAcceptedResponse(CamelModel):
    """Response from starting a render."""
    job_id: str


class JobResponse(CamelModel):
    """Current state of a render job."""
    id: str
    status: JobStatus
    progress: int = Field(..., ge=0, le=100)
    error: Optional[str] = None
    download_url: Optional[str] = None

    @classmethod
    def from_job(cls, job: RenderJob) -> "JobResponse":
        download_url = None
        if job.status is JobStatus.SUCCEEDED:
            download_url = f"/api/download/{job.id}"
        return cls(
            id=job.id,
            status=job.status,
            progress=job.progress,
            error=job.error_message,
            download_url=download_url,
        )


class RenderStatsResponse(CamelModel):
    """Job table statistics."""
    total_jobs: int
    by_status: dict[str, int]
    active_subscriptions: int


# ============ Timeline Schemas ============

class TimelineClipSchema(CamelModel):
    """A clip's extent in clip units."""
    id: str
    start_position: float = Field(..., ge=0)
    duration: float = Field(1.0, gt=0)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        return _coerce_id(value)

    def to_clip(self) -> Clip:
        return Clip(id=self.id, start_position=self.start_position, duration=self.duration)


class LayoutRequest(CamelModel):
    """An overlay draft to snap against a clip list."""
    clips: list[TimelineClipSchema]
    start: float = Field(..., description="Draft start in clip units")
    duration: float = Field(..., gt=0, description="Draft length in clip units")
    clip_width_px: float = Field(..., gt=0)
    gap_px: float = Field(16, ge=0)
    threshold: Optional[float] = Field(None, ge=0, description="Snap distance in clip units")
    commit: bool = Field(False, description="Settle on whole clips")


class LayoutResponse(CamelModel):
    """Snapped overlay range and its pixel placement."""
    start: float
    duration: float
    x_offset_px: float
    width_px: float
    min_width_px: float
    covered_width_px: float
    snap_points: list[float]


# ============ Error Schemas ============

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = None


# ============ Health Schemas ============

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    services: dict[str, str] = Field(default_factory=dict)
