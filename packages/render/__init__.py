# Render package - render plans, the job table and background render jobs

from .manager import RENDER_FAILED_MESSAGE, RenderJobManager, RenderOutcome, progress_percent
from .plan import DEFAULT_FPS, OverlayPlan, RenderPlan, SegmentPlan, build_render_plan, validate_request
from .publisher import DEFAULT_INTERVAL, ProgressEvent, ProgressPublisher, Subscription
from .store import JobStore

__all__ = [
    # Plans
    "DEFAULT_FPS",
    "RenderPlan",
    "SegmentPlan",
    "OverlayPlan",
    "build_render_plan",
    "validate_request",
    # Jobs
    "JobStore",
    "RenderJobManager",
    "RenderOutcome",
    "RENDER_FAILED_MESSAGE",
    "progress_percent",
    # Progress
    "DEFAULT_INTERVAL",
    "ProgressEvent",
    "ProgressPublisher",
    "Subscription",
]
