"""API services - business logic behind the routes."""

from .render_service import RenderService
from .timeline_service import TimelineService

__all__ = ["RenderService", "TimelineService"]
