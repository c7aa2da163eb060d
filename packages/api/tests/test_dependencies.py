"""Tests for API dependencies module."""

import pytest

from packages.api.dependencies import (
    clear_dependency_cache,
    get_progress_publisher,
    get_render_manager,
    get_render_service,
    get_timeline_service,
)
from packages.core import clear_config_cache
from packages.video import FFmpegRenderer


@pytest.fixture
def configured(monkeypatch, tmp_path):
    """Point config at a temporary renders directory with fresh singletons."""
    monkeypatch.setenv("CLIPRENDER_ENV", "testing")
    monkeypatch.setenv("CLIPRENDER_RENDERS_DIR", str(tmp_path / "renders"))
    monkeypatch.setenv("CLIPRENDER_FPS", "24")
    monkeypatch.setenv("CLIPRENDER_SNAP_THRESHOLD", "0.5")
    monkeypatch.setenv("CLIPRENDER_PROGRESS_INTERVAL_MS", "250")
    clear_config_cache()
    clear_dependency_cache()

    yield tmp_path

    clear_dependency_cache()
    clear_config_cache()


class TestSingletons:
    """Tests for the cached service factories."""

    def test_same_instance(self, configured):
        assert get_render_service() is get_render_service()
        assert get_render_service().manager is get_render_manager()
        assert get_render_service().publisher is get_progress_publisher()

    def test_built_from_config(self, configured):
        """Test config values reach the manager, publisher and timeline service."""
        manager = get_render_manager()

        assert manager.renders_dir == configured / "renders"
        assert manager.renders_dir.is_dir()
        assert manager.fps == 24
        assert isinstance(manager.renderer, FFmpegRenderer)
        assert get_progress_publisher().interval == pytest.approx(0.25)
        assert get_timeline_service().snap_threshold == pytest.approx(0.5)

    def test_clear_creates_new_instances(self, configured):
        manager = get_render_manager()

        clear_dependency_cache()

        assert get_render_manager() is not manager
