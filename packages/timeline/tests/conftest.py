"""
Shared fixtures for timeline package tests.
"""

import pytest

from packages.core.types import Clip, SourceClip


@pytest.fixture
def three_clips():
    """Three back-to-back clips of one unit each."""
    return [Clip(id=f"clip-{i}", start_position=i, duration=1) for i in range(3)]


@pytest.fixture
def five_second_sources():
    """Three 5-second source clips."""
    return [
        SourceClip(id=f"clip-{i}", url=f"/videos/{i}.mp4", duration=5.0)
        for i in range(3)
    ]


@pytest.fixture
def uneven_sources():
    """Source clips whose frame counts need rounding at 30fps."""
    return [
        SourceClip(id="a", url="/videos/a.mp4", duration=1.25),  # 37.5 -> 38
        SourceClip(id="b", url="/videos/b.mp4", duration=1.25),  # 38
        SourceClip(id="c", url="/videos/c.mp4", duration=2.0),   # 60
    ]
