"""Tests for utility functions."""

import tempfile
from pathlib import Path

import pytest

from packages.core.utils import (
    artifact_filename,
    clamp,
    ensure_dir,
    format_duration,
    round_half_up,
)


class TestRoundHalfUp:
    """Tests for round_half_up function."""

    def test_rounds_halves_up(self):
        """Test that .5 rounds up unlike built-in round()."""
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round(2.5) == 2

    def test_regular_rounding(self):
        """Test values away from .5."""
        assert round_half_up(37.4) == 37
        assert round_half_up(37.6) == 38
        assert round_half_up(150.0) == 150

    def test_returns_int(self):
        """Test the return type."""
        assert isinstance(round_half_up(1.2), int)


class TestClamp:
    """Tests for clamp function."""

    def test_within_bounds(self):
        assert clamp(1.5, 0, 3) == 1.5

    def test_below_and_above(self):
        assert clamp(-1, 0, 3) == 0
        assert clamp(4, 0, 3) == 3

    def test_inverted_bounds_lower_wins(self):
        """Test that lower bound wins when bounds cross."""
        assert clamp(5, 2, 1) == 2


class TestTimeUtilities:
    """Tests for time helpers."""

    def test_format_duration_seconds(self):
        assert format_duration(1500) == "1.5s"

    def test_format_duration_minutes(self):
        assert format_duration(150000) == "2m 30s"


class TestArtifactFilename:
    """Tests for artifact_filename function."""

    def test_deterministic_name(self):
        """Test artifact names are derived from the job id."""
        job_id = "3f2b8c1e-0000-4000-8000-000000000000"

        assert artifact_filename(job_id) == f"video-{job_id}.mp4"

    @pytest.mark.parametrize("job_id", ["../etc/passwd", "a/b", "", "a b"])
    def test_rejects_unsafe_ids(self, job_id):
        """Test path traversal is refused."""
        with pytest.raises(ValueError):
            artifact_filename(job_id)


class TestFileUtilities:
    """Tests for file helpers."""

    def test_ensure_dir_creates_nested(self):
        """Test nested directory creation."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "a" / "b"

            assert ensure_dir(path) == path
            assert path.is_dir()
