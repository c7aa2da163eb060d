"""FastAPI dependency injection for services."""

from functools import lru_cache

from packages.core import Renderer, get_config
from packages.render import ProgressPublisher, RenderJobManager
from packages.video import FFmpegRenderer

from .services import RenderService, TimelineService


@lru_cache()
def get_renderer() -> Renderer:
    """Get or create the renderer singleton."""
    return FFmpegRenderer()


@lru_cache()
def get_render_manager() -> RenderJobManager:
    """Get or create the render job manager singleton."""
    config = get_config()
    return RenderJobManager(
        renderer=get_renderer(),
        renders_dir=config.renders_dir,
        max_workers=config.max_workers,
        job_ttl_seconds=config.job_ttl_seconds,
        fps=config.fps,
    )


@lru_cache()
def get_progress_publisher() -> ProgressPublisher:
    """Get or create the progress publisher singleton."""
    config = get_config()
    return ProgressPublisher(get_render_manager(), interval=config.progress_interval)


@lru_cache()
def get_render_service() -> RenderService:
    """Get or create the render service singleton."""
    return RenderService(
        manager=get_render_manager(),
        publisher=get_progress_publisher(),
    )


@lru_cache()
def get_timeline_service() -> TimelineService:
    """Get or create the timeline service singleton."""
    return TimelineService(snap_threshold=get_config().snap_threshold)


def clear_dependency_cache() -> None:
    """Drop all singletons, shutting down a running job manager first."""
    if get_render_manager.cache_info().currsize:
        get_render_manager().shutdown(wait=False)
    for factory in (
        get_renderer,
        get_render_manager,
        get_progress_publisher,
        get_render_service,
        get_timeline_service,
    ):
        factory.cache_clear()
