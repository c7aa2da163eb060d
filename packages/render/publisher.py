"""
Progress Publisher - Push job progress to subscribers until the job ends.

Each subscription samples the job table on a fixed interval from the
asyncio event loop and yields one event per tick. A subscription ends after
the first terminal event, when its job disappears, or when it is closed.
A subscription counts as active only while its stream runs; one that is
never iterated holds nothing.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Protocol, Set

from packages.core.errors import JobNotFoundError
from packages.core.types import RenderJob

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.5


class JobSource(Protocol):
    """Anything that returns the current record of a job."""

    def get(self, job_id: str) -> RenderJob:
        """Raises JobNotFoundError for unknown ids."""
        ...


@dataclass(frozen=True)
class ProgressEvent:
    """One progress sample as sent to clients."""
    progress: int
    done: bool
    error: Optional[str] = None

    @classmethod
    def from_job(cls, job: RenderJob) -> "ProgressEvent":
        return cls(
            progress=job.progress,
            done=job.is_terminal,
            error=job.error_message,
        )

    def to_dict(self) -> dict:
        data = {"progress": self.progress, "done": self.done}
        if self.error is not None:
            data["error"] = self.error
        return data

    def to_sse(self) -> str:
        """Format as a server-sent event frame."""
        return f"data: {json.dumps(self.to_dict())}\n\n"


class Subscription:
    """
    A client's view of one job's progress.

    Usage:
        subscription = publisher.subscribe(job_id)
        try:
            async for event in subscription.events():
                send(event)
        finally:
            subscription.close()
    """

    def __init__(self, publisher: "ProgressPublisher", job_id: str, interval: float):
        self.job_id = job_id
        self.interval = interval
        self._publisher = publisher
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def events(self) -> AsyncIterator[ProgressEvent]:
        """Yield a sample now and then every ``interval`` seconds until done."""
        if self._closed:
            return
        self._publisher._register(self)
        try:
            while not self._closed:
                try:
                    job = self._publisher.source.get(self.job_id)
                except JobNotFoundError:
                    logger.debug("Job %s disappeared; ending stream", self.job_id)
                    return

                event = ProgressEvent.from_job(job)
                yield event
                if event.done:
                    return

                await asyncio.sleep(self.interval)
        finally:
            self.close()

    def close(self) -> None:
        """Stop sampling and release the subscription. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._publisher._release(self)
        logger.debug("Subscription to job %s closed", self.job_id)


class ProgressPublisher:
    """Creates subscriptions over a job source."""

    def __init__(self, source: JobSource, interval: float = DEFAULT_INTERVAL):
        """
        Initialize the publisher.

        Args:
            source: Job lookup, normally the RenderJobManager
            interval: Default seconds between samples
        """
        self.source = source
        self.interval = interval
        self._subscriptions: Set[Subscription] = set()

    def subscribe(self, job_id: str, interval: Optional[float] = None) -> Subscription:
        """
        Subscribe to a job's progress.

        Raises:
            JobNotFoundError: If the job is unknown
        """
        self.source.get(job_id)

        subscription = Subscription(
            self,
            job_id,
            self.interval if interval is None else interval,
        )
        return subscription

    @property
    def active_subscriptions(self) -> int:
        """Number of subscriptions whose event stream is running."""
        return len(self._subscriptions)

    def _register(self, subscription: Subscription) -> None:
        self._subscriptions.add(subscription)

    def _release(self, subscription: Subscription) -> None:
        self._subscriptions.discard(subscription)
