"""API route modules."""

from .render import router as render_router
from .timeline import router as timeline_router

__all__ = ["render_router", "timeline_router"]
