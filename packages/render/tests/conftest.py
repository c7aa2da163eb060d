"""
Shared fixtures for render package tests.
"""

import threading

import pytest

from packages.core.types import Aspect, Overlay, RenderRequest, SourceClip
from packages.render.manager import RenderJobManager
from packages.render.store import JobStore


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InstantRenderer:
    """Reports a few progress steps and writes a tiny file."""

    def __init__(self, steps=(0.37, 1.0)):
        self.steps = steps
        self.plans = []

    def render(self, plan, output_path, on_progress):
        self.plans.append(plan)
        for fraction in self.steps:
            on_progress(fraction)
        output_path.write_bytes(b"mp4")
        return output_path


class GatedRenderer(InstantRenderer):
    """Waits for ``gate`` before rendering so tests can see pending jobs."""

    def __init__(self, steps=(0.37, 1.0)):
        super().__init__(steps)
        self.started = threading.Event()
        self.gate = threading.Event()

    def render(self, plan, output_path, on_progress):
        self.started.set()
        self.gate.wait(timeout=5)
        return super().render(plan, output_path, on_progress)


class FailingRenderer:
    """Reports some progress, leaves a partial file and raises."""

    def render(self, plan, output_path, on_progress):
        on_progress(0.4)
        output_path.write_bytes(b"partial")
        raise RuntimeError("decoder exploded")


@pytest.fixture
def sources():
    """Three 5-second source clips."""
    return tuple(
        SourceClip(id=f"clip-{i}", url=f"/videos/{i}.mp4", duration=5.0)
        for i in range(3)
    )


@pytest.fixture
def request_with_overlay(sources):
    """Render request with an overlay on the middle clip."""
    overlay = Overlay(id="text-1", content="Hello", start_position=1, duration=1)
    return RenderRequest(clips=sources, overlays=(overlay,), aspect=Aspect.PORTRAIT)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return JobStore(clock=clock)


@pytest.fixture
def make_manager(tmp_path, store):
    """Factory for managers that are shut down after the test."""
    managers = []

    def _make(renderer, **kwargs):
        kwargs.setdefault("store", store)
        manager = RenderJobManager(renderer, renders_dir=tmp_path / "renders", **kwargs)
        managers.append(manager)
        return manager

    yield _make

    for manager in managers:
        manager.shutdown(wait=True)


@pytest.fixture
def instant_renderer():
    return InstantRenderer()


@pytest.fixture
def gated_renderer():
    renderer = GatedRenderer()
    yield renderer
    renderer.gate.set()


@pytest.fixture
def failing_renderer():
    return FailingRenderer()
