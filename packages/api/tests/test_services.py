"""Tests for API services."""

import logging
from unittest.mock import MagicMock

import pytest

from packages.api.services import RenderService, TimelineService
from packages.core import Clip, JobStatus, RenderRequest, SourceClip


@pytest.fixture
def request_two_clips():
    return RenderRequest(
        clips=(
            SourceClip(id="a", url="/videos/a.mp4", duration=1),
            SourceClip(id="b", url="/videos/b.mp4", duration=1),
        )
    )


class TestRenderService:
    """Tests for RenderService."""

    def test_submit_evicts_expired_first(self, request_two_clips):
        """Test expired jobs are evicted before a new job is queued."""
        manager = MagicMock()
        manager.evict_expired.return_value = 2
        manager.submit.return_value = "job-1"
        service = RenderService(manager, MagicMock())

        assert service.submit(request_two_clips) == "job-1"

        manager.evict_expired.assert_called_once()
        manager.submit.assert_called_once_with(request_two_clips)

    def test_eviction_logged_once(self, instant_service, request_two_clips, caplog):
        """Test an eviction is reported by the manager alone."""
        first = instant_service.submit(request_two_clips)
        instant_service.manager.wait(first, timeout=5)
        instant_service.manager.job_ttl_seconds = 0

        with caplog.at_level(logging.INFO):
            instant_service.submit(request_two_clips)

        evictions = [r for r in caplog.records if "Evicted" in r.getMessage()]
        assert len(evictions) == 1
        assert evictions[0].name == "packages.render.manager"

    def test_stats(self, instant_service, request_two_clips):
        job_id = instant_service.submit(request_two_clips)
        instant_service.manager.wait(job_id, timeout=5)

        stats = instant_service.get_stats()

        assert stats == {
            "total_jobs": 1,
            "by_status": {JobStatus.SUCCEEDED.value: 1},
            "active_subscriptions": 0,
        }

    def test_subscribe_returns_handle(self, instant_service, request_two_clips):
        """Test a handle is counted only once its stream runs."""
        job_id = instant_service.submit(request_two_clips)

        subscription = instant_service.subscribe(job_id)

        assert subscription.job_id == job_id
        assert instant_service.publisher.active_subscriptions == 0
        subscription.close()
        assert subscription.closed


class TestTimelineService:
    """Tests for TimelineService."""

    @pytest.fixture
    def clips(self):
        return [Clip(id=str(i), start_position=i) for i in range(3)]

    def test_default_threshold(self, clips):
        """Test the service threshold applies when none is given."""
        loose = TimelineService(snap_threshold=0.5).layout(clips, 0.6, 1, 100, 16)
        strict = TimelineService(snap_threshold=0.1).layout(clips, 0.6, 1, 100, 16)

        assert loose["start"] == pytest.approx(1)
        assert strict["start"] == pytest.approx(0.6)

    def test_explicit_threshold_wins(self, clips):
        result = TimelineService(snap_threshold=0.5).layout(clips, 0.6, 1, 100, 16, threshold=0)

        assert result["start"] == pytest.approx(0.6)

    def test_no_clips(self):
        result = TimelineService().layout([], 0.2, 1, 100, 16)

        assert result["start"] == 0
        assert result["duration"] == pytest.approx(0.1)
        assert result["snap_points"] == [0, 1]
        assert result["covered_width_px"] == 100
