"""Render service - submits render jobs and exposes their state."""

from pathlib import Path

from packages.core import RenderJob, RenderRequest
from packages.render import ProgressPublisher, RenderJobManager, Subscription


class RenderService:
    """Thin facade over the job manager and progress publisher used by the routes."""

    def __init__(self, manager: RenderJobManager, publisher: ProgressPublisher):
        self.manager = manager
        self.publisher = publisher

    def submit(self, request: RenderRequest) -> str:
        """
        Queue a render and return its job id.

        Settled jobs past their retention period are evicted first so the
        job table does not grow without bound.

        Raises:
            InputError: If the request is invalid
        """
        self.manager.evict_expired()
        return self.manager.submit(request)

    def get_job(self, job_id: str) -> RenderJob:
        """Raises JobNotFoundError for unknown ids."""
        return self.manager.get(job_id)

    def artifact_path(self, job_id: str) -> Path:
        """Raises JobNotFoundError or ArtifactNotFoundError."""
        return self.manager.artifact_path(job_id)

    def subscribe(self, job_id: str) -> Subscription:
        """Raises JobNotFoundError for unknown ids."""
        return self.publisher.subscribe(job_id)

    def get_stats(self) -> dict:
        """Count jobs by status."""
        counts: dict[str, int] = {}
        for job in self.manager.store.list_jobs():
            counts[job.status.value] = counts.get(job.status.value, 0) + 1
        return {
            "total_jobs": len(self.manager.store),
            "by_status": counts,
            "active_subscriptions": self.publisher.active_subscriptions,
        }
