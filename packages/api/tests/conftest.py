"""
Shared fixtures for API package tests.
"""

import os
import threading

import pytest
from fastapi.testclient import TestClient

# Keep config from creating data directories when the app is imported
os.environ.setdefault("CLIPRENDER_ENV", "testing")

from packages.api.dependencies import get_render_service, get_timeline_service  # noqa: E402
from packages.api.main import app  # noqa: E402
from packages.api.services import RenderService, TimelineService  # noqa: E402
from packages.render import ProgressPublisher, RenderJobManager  # noqa: E402


class InstantRenderer:
    """Reports progress in two steps and writes a stub video."""

    def render(self, plan, output_path, on_progress):
        on_progress(0.37)
        on_progress(1.0)
        output_path.write_bytes(b"fake mp4 content")
        return output_path


class GatedRenderer(InstantRenderer):
    """Holds the render until ``gate`` is set."""

    def __init__(self):
        self.gate = threading.Event()

    def render(self, plan, output_path, on_progress):
        on_progress(0.1)
        self.gate.wait(timeout=5)
        return super().render(plan, output_path, on_progress)


class FailingRenderer:
    """Fails half way through."""

    def render(self, plan, output_path, on_progress):
        on_progress(0.5)
        raise RuntimeError("encoder crashed")


@pytest.fixture
def render_body():
    """Request body as the editor sends it."""
    return {
        "clips": [
            {"id": 1, "url": "/videos/a.mp4", "duration": 5},
            {"id": 2, "url": "/videos/b.mp4", "duration": 5},
            {"id": 3, "url": "/videos/c.mp4", "duration": 5},
        ],
        "overlay": {
            "id": "text-1",
            "content": "Hello",
            "startPosition": 1,
            "duration": 1,
        },
        "aspect": "portrait",
    }


@pytest.fixture
def make_render_service(tmp_path):
    """Factory for a RenderService around a given renderer."""
    managers = []

    def _make(renderer, **kwargs):
        manager = RenderJobManager(renderer, renders_dir=tmp_path / "renders", **kwargs)
        managers.append(manager)
        return RenderService(manager, ProgressPublisher(manager, interval=0.01))

    yield _make

    for manager in managers:
        manager.shutdown(wait=False)


@pytest.fixture
def api_client():
    """Factory for a TestClient using the given render service."""

    def _client(render_service=None):
        if render_service is not None:
            app.dependency_overrides[get_render_service] = lambda: render_service
        app.dependency_overrides[get_timeline_service] = lambda: TimelineService()
        return TestClient(app, raise_server_exceptions=False)

    yield _client

    app.dependency_overrides.clear()


@pytest.fixture
def instant_service(make_render_service):
    return make_render_service(InstantRenderer())


@pytest.fixture
def gated_renderer():
    renderer = GatedRenderer()
    yield renderer
    renderer.gate.set()


@pytest.fixture
def gated_service(make_render_service, gated_renderer):
    return make_render_service(gated_renderer)


@pytest.fixture
def failing_service(make_render_service):
    return make_render_service(FailingRenderer())
