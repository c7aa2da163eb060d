"""
Render Job Manager - Run renders in the background and track their state.

Jobs move pending -> running -> succeeded | failed. The manager is the only
writer of job records; the renderer talks to it through the progress and
settle callbacks, and nothing a renderer raises escapes a job.
"""

import logging
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from packages.core.errors import ArtifactNotFoundError, JobNotFoundError
from packages.core.protocols import Renderer
from packages.core.types import JobStatus, RenderJob, RenderRequest
from packages.core.utils import artifact_filename, clamp, ensure_dir, round_half_up

from .plan import DEFAULT_FPS, RenderPlan, build_render_plan
from .store import JobStore

logger = logging.getLogger(__name__)

# Message stored on failed jobs; the cause is only logged
RENDER_FAILED_MESSAGE = "Render failed"


@dataclass(frozen=True)
class RenderOutcome:
    """How a renderer finished."""
    success: bool
    artifact_path: Optional[Path] = None
    error_message: Optional[str] = None

    @classmethod
    def succeeded(cls, artifact_path: Path) -> "RenderOutcome":
        return cls(success=True, artifact_path=Path(artifact_path))

    @classmethod
    def failed(cls, error_message: str = RENDER_FAILED_MESSAGE) -> "RenderOutcome":
        return cls(success=False, error_message=error_message)


def progress_percent(fraction: float) -> int:
    """Renderer fraction as a whole percentage in [0, 100]."""
    return int(clamp(round_half_up(fraction * 100), 0, 100))


class RenderJobManager:
    """
    Accepts render requests and runs them on a worker pool.

    Usage:
        manager = RenderJobManager(renderer, renders_dir=Path("renders"))
        job_id = manager.submit(request)
        manager.get(job_id)            # RenderJob(status=PENDING, progress=0)
        ...
        manager.artifact_path(job_id)  # renders/video-<job_id>.mp4
    """

    def __init__(
        self,
        renderer: Renderer,
        renders_dir: Path,
        store: Optional[JobStore] = None,
        max_workers: int = 2,
        job_ttl_seconds: float = 3600,
        monotonic_progress: bool = True,
        fps: int = DEFAULT_FPS,
    ):
        """
        Initialize the manager.

        Args:
            renderer: Composition engine used for every job
            renders_dir: Directory artifacts are written to
            store: Job table (a fresh one when omitted)
            max_workers: Number of renders that may run at once
            job_ttl_seconds: Age after which finished jobs are evicted
            monotonic_progress: Ignore progress updates lower than the
                recorded value
            fps: Frame rate of rendered videos
        """
        self.renderer = renderer
        self.renders_dir = ensure_dir(Path(renders_dir))
        self.store = store if store is not None else JobStore()
        self.job_ttl_seconds = job_ttl_seconds
        self.monotonic_progress = monotonic_progress
        self.fps = fps

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="render",
        )
        self._futures: Dict[str, Future] = {}
        self._futures_lock = Lock()

    # ============ Submission ============

    def submit(self, request: RenderRequest) -> str:
        """
        Start rendering ``request`` in the background.

        Returns as soon as the job is stored; the job starts out pending
        with zero progress.

        Returns:
            The new job's id

        Raises:
            InputError: If the request is invalid (no job is created)
        """
        plan = build_render_plan(request, fps=self.fps)

        job_id = str(uuid.uuid4())
        self.store.create(job_id)
        logger.info(
            "Render job %s accepted: %d clips, %d frames at %dx%d",
            job_id, len(plan.segments), plan.duration_in_frames, plan.width, plan.height,
        )

        future = self._executor.submit(self._run, job_id, plan)
        with self._futures_lock:
            self._futures[job_id] = future
        return job_id

    def output_path_for(self, job_id: str) -> Path:
        return self.renders_dir / artifact_filename(job_id)

    def _run(self, job_id: str, plan: RenderPlan) -> None:
        output_path = self.output_path_for(job_id)
        try:
            written = self.renderer.render(
                plan,
                output_path,
                lambda fraction: self.on_renderer_progress(job_id, fraction),
            )
        except Exception:
            logger.exception("Render job %s failed", job_id)
            output_path.unlink(missing_ok=True)
            self.on_renderer_settled(job_id, RenderOutcome.failed())
            return

        self.on_renderer_settled(job_id, RenderOutcome.succeeded(written or output_path))

    # ============ Renderer callbacks ============

    def on_renderer_progress(self, job_id: str, fraction: float) -> Optional[RenderJob]:
        """
        Record renderer progress and mark the job running.

        Updates for finished or unknown jobs are ignored.

        Args:
            job_id: Job being rendered
            fraction: Completed fraction in [0, 1]

        Returns:
            The job record after the update, or None if unknown
        """
        percent = progress_percent(fraction)

        def change(job: RenderJob) -> RenderJob:
            if job.is_terminal:
                return job
            progress = max(percent, job.progress) if self.monotonic_progress else percent
            if job.status is JobStatus.RUNNING and job.progress == progress:
                return job
            return replace(job, status=JobStatus.RUNNING, progress=progress)

        job = self.store.update(job_id, change)
        if job is None:
            logger.debug("Progress for unknown job %s ignored", job_id)
        return job

    def on_renderer_settled(self, job_id: str, outcome: RenderOutcome) -> Optional[RenderJob]:
        """
        Move a job to its terminal state.

        Success stores 100% and the artifact path; failure keeps the last
        progress and stores the error message. A job settles once; later
        calls leave it as it is.
        """
        def change(job: RenderJob) -> RenderJob:
            if job.is_terminal:
                logger.warning("Job %s already %s; settle ignored", job_id, job.status.value)
                return job
            if outcome.success:
                return replace(
                    job,
                    status=JobStatus.SUCCEEDED,
                    progress=100,
                    artifact_path=str(outcome.artifact_path),
                    error_message=None,
                )
            return replace(
                job,
                status=JobStatus.FAILED,
                error_message=outcome.error_message or RENDER_FAILED_MESSAGE,
            )

        job = self.store.update(job_id, change)
        if job is None:
            logger.debug("Settle for unknown job %s ignored", job_id)
        elif job.status is JobStatus.SUCCEEDED:
            logger.info("Render job %s succeeded: %s", job_id, job.artifact_path)
        return job

    # ============ Queries ============

    def get(self, job_id: str) -> RenderJob:
        """
        Current record of a job.

        Raises:
            JobNotFoundError: If the job is unknown or was evicted
        """
        job = self.store.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    def artifact_path(self, job_id: str) -> Path:
        """
        Path of a finished job's video.

        Raises:
            JobNotFoundError: If the job is unknown
            ArtifactNotFoundError: If the job has not succeeded or the file is gone
        """
        job = self.get(job_id)
        if job.status is not JobStatus.SUCCEEDED or not job.artifact_path:
            raise ArtifactNotFoundError(job_id, f"job is {job.status.value}")

        path = Path(job.artifact_path)
        if not path.is_file():
            raise ArtifactNotFoundError(job_id, "file not found")
        return path

    def wait(self, job_id: str, timeout: Optional[float] = None) -> RenderJob:
        """
        Block until a job's render has finished.

        Raises:
            JobNotFoundError: If the job is unknown
            concurrent.futures.TimeoutError: If ``timeout`` passes first
        """
        with self._futures_lock:
            future = self._futures.get(job_id)
        if future is not None:
            future.result(timeout=timeout)
        return self.get(job_id)

    # ============ Housekeeping ============

    def evict_expired(self) -> int:
        """
        Drop finished jobs older than the TTL, with their artifacts.

        Returns:
            Number of jobs evicted
        """
        expired = self.store.evict_expired(self.job_ttl_seconds)
        for job in expired:
            with self._futures_lock:
                self._futures.pop(job.id, None)
            self.output_path_for(job.id).unlink(missing_ok=True)
            if job.artifact_path:
                Path(job.artifact_path).unlink(missing_ok=True)

        if expired:
            logger.info("Evicted %d expired render jobs", len(expired))
        return len(expired)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and release the worker pool."""
        self._executor.shutdown(wait=wait)
