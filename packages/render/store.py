"""In-memory render job table with TTL-based eviction.

Records are frozen RenderJob values. Every change swaps the stored record
for a new one under the lock, so readers on other threads only ever see a
complete record.
"""

import threading
import time
from dataclasses import replace
from typing import Callable, Optional

from packages.core.types import RenderJob

Clock = Callable[[], float]


class JobStore:
    """Thread-safe job table owned by the render job manager."""

    def __init__(self, clock: Clock = time.time) -> None:
        self._jobs: dict[str, RenderJob] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def create(self, job_id: str) -> RenderJob:
        """Insert a new pending job.

        Raises:
            ValueError: If the id is already in use
        """
        now = self._clock()
        job = RenderJob(id=job_id, created_at=now, updated_at=now)
        with self._lock:
            if job_id in self._jobs:
                raise ValueError(f"Job already exists: {job_id}")
            self._jobs[job_id] = job
        return job

    def get(self, job_id: str) -> Optional[RenderJob]:
        """Current record for a job, or None if unknown."""
        with self._lock:
            return self._jobs.get(job_id)

    def update(
        self,
        job_id: str,
        change: Callable[[RenderJob], RenderJob],
    ) -> Optional[RenderJob]:
        """Atomically replace a record with ``change(record)``.

        ``change`` runs under the lock and must not block. Returning the
        record unchanged leaves the store (and ``updated_at``) untouched.

        Returns:
            The stored record after the call, or None if the job is unknown
        """
        with self._lock:
            current = self._jobs.get(job_id)
            if current is None:
                return None
            updated = change(current)
            if updated is current:
                return current
            updated = replace(updated, updated_at=self._clock())
            self._jobs[job_id] = updated
            return updated

    def remove(self, job_id: str) -> Optional[RenderJob]:
        """Drop a job and return its last record."""
        with self._lock:
            return self._jobs.pop(job_id, None)

    def evict_expired(self, ttl_seconds: float) -> list[RenderJob]:
        """Remove terminal jobs not updated for ``ttl_seconds``.

        Jobs still pending or running are never evicted.

        Returns:
            The evicted records
        """
        cutoff = self._clock() - ttl_seconds
        with self._lock:
            expired = [
                job for job in self._jobs.values()
                if job.is_terminal and job.updated_at <= cutoff
            ]
            for job in expired:
                del self._jobs[job.id]
        return expired

    def list_jobs(self) -> list[RenderJob]:
        """Snapshot of all records, oldest first."""
        with self._lock:
            jobs = list(self._jobs.values())
        return sorted(jobs, key=lambda job: job.created_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        with self._lock:
            return job_id in self._jobs
