"""Shared fixtures for CLI tests."""

import json
import os

import pytest
from typer.testing import CliRunner

os.environ.setdefault("CLIPRENDER_ENV", "testing")


@pytest.fixture
def cli_runner():
    """Create a CliRunner instance for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def timeline_data():
    """Three five-second clips with an overlay on the middle one."""
    return {
        "clips": [
            {"id": "a", "url": "clips/a.mp4", "duration": 5},
            {"id": "b", "url": "clips/b.mp4", "duration": 5},
            {"id": "c", "url": "/abs/c.mp4", "duration": 5},
        ],
        "overlay": {"id": "text-1", "content": "Hello", "startPosition": 1, "duration": 1},
        "aspect": "portrait",
    }


@pytest.fixture
def write_timeline(tmp_path):
    """Write a timeline dict to a JSON file and return its path."""

    def _write(data, name="timeline.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
