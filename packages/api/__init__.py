"""ClipRender API package - REST endpoints for timeline layout and render jobs."""

from .main import app
from .schemas import (
    RenderRequestBody,
    RenderAcceptedResponse,
    JobResponse,
    LayoutRequest,
    LayoutResponse,
    ErrorResponse,
    HealthResponse,
)
from .services import RenderService, TimelineService

__all__ = [
    "app",
    "RenderRequestBody",
    "RenderAcceptedResponse",
    "JobResponse",
    "LayoutRequest",
    "LayoutResponse",
    "ErrorResponse",
    "HealthResponse",
    "RenderService",
    "TimelineService",
]
