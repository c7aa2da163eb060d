"""Tests for snapping module."""

import pytest

from packages.core.types import Clip
from packages.timeline.snapping import (
    DEFAULT_SNAP_THRESHOLD,
    MIN_DISPLAY_DURATION,
    SnappedRange,
    snap_points,
    snap_position,
    snap_range,
)


class TestSnapPoints:
    """Tests for snap_points function."""

    def test_empty_timeline_default(self):
        """Test an empty timeline has two default boundaries."""
        assert snap_points([]) == [0, 1]

    def test_unit_clips(self, three_clips):
        """Test boundaries of three one-unit clips."""
        assert snap_points(three_clips) == [0, 1, 2, 3]

    def test_shared_boundaries_deduplicated(self, three_clips):
        """Test that a clip end and the next start appear once."""
        points = snap_points(three_clips)

        assert len(points) == len(set(points))

    def test_strictly_increasing(self):
        """Test ordering for clips given out of order."""
        clips = [
            Clip(id="b", start_position=2, duration=1.5),
            Clip(id="a", start_position=0, duration=2),
        ]

        points = snap_points(clips)

        assert points == [0, 2, 3.5]
        assert all(a < b for a, b in zip(points, points[1:]))

    def test_contains_zero_when_first_clip_is_offset(self):
        """Test that the timeline start is always present."""
        clips = [Clip(id="a", start_position=2, duration=1)]

        assert snap_points(clips) == [0, 2, 3]

    def test_contains_timeline_end(self):
        """Test the end of the last clip is a boundary."""
        clips = [Clip(id=f"c{i}", start_position=i * 2, duration=2) for i in range(4)]

        assert snap_points(clips)[-1] == 8


class TestSnapPosition:
    """Tests for snap_position function."""

    def test_snaps_within_threshold(self, three_clips):
        """Test snapping to the nearest boundary."""
        assert snap_position(0.8, three_clips, 0.3) == 1

    def test_unchanged_beyond_threshold(self, three_clips):
        """Test a position far from every boundary is kept."""
        assert snap_position(1.5, three_clips, 0.3) == 1.5

    def test_threshold_is_inclusive(self):
        """Test that a distance equal to the threshold still snaps."""
        clips = [Clip(id="a", start_position=0, duration=1)]

        assert snap_position(0.75, clips, 0.25) == 1

    def test_result_is_a_boundary(self, three_clips):
        """Test that a snapped value is a member of snap_points."""
        result = snap_position(2.1, three_clips, 0.3)

        assert result in snap_points(three_clips)

    def test_idempotent(self, three_clips):
        """Test re-snapping a snapped value returns it unchanged."""
        once = snap_position(1.2, three_clips, 0.3)

        assert snap_position(once, three_clips, 0.3) == once

    def test_zero_threshold_only_exact(self, three_clips):
        """Test a zero threshold snaps only exact boundaries."""
        assert snap_position(2, three_clips, 0) == 2
        assert snap_position(2.01, three_clips, 0) == 2.01

    def test_empty_timeline_snaps_to_defaults(self):
        """Test snapping with no clips uses [0, 1]."""
        assert snap_position(0.9, [], 0.3) == 1

    def test_default_threshold(self, three_clips):
        """Test the default threshold is 0.3 clip units."""
        assert DEFAULT_SNAP_THRESHOLD == 0.3
        assert snap_position(1.25, three_clips) == 1


class TestSnapRange:
    """Tests for snap_range function."""

    def test_reference_scenario(self, three_clips):
        """Test start 0.8 / duration 1.4 snaps to start 1, duration 1."""
        result = snap_range(0.8, 1.4, three_clips, 0.3)

        assert result == SnappedRange(start=1, duration=1)

    def test_edges_snap_independently(self, three_clips):
        """Test only the edge within threshold moves."""
        result = snap_range(0.9, 1.5, three_clips, 0.3)

        assert result.start == 1
        assert result.end == pytest.approx(2.4)

    def test_neither_edge_snaps(self, three_clips):
        """Test a range far from boundaries is unchanged."""
        result = snap_range(0.5, 1.0, three_clips, 0.3)

        assert result.start == 0.5
        assert result.duration == 1.0

    def test_duration_floor(self, three_clips):
        """Test both edges snapping to one point leaves the display floor."""
        result = snap_range(0.9, 0.2, three_clips, 0.3)

        assert result.start == 1
        assert result.duration == MIN_DISPLAY_DURATION

    def test_inverted_edges_floor(self, three_clips):
        """Test edges snapping past each other still give a positive duration."""
        result = snap_range(1.25, 0.5, three_clips, 0.3)

        assert result.duration >= MIN_DISPLAY_DURATION

    def test_start_floored_at_zero(self, three_clips):
        """Test a negative start far from 0 is clamped to 0."""
        result = snap_range(-2.0, 3.0, three_clips, 0.3)

        assert result.start == 0
        assert result.duration > 0

    @pytest.mark.parametrize(
        "start,duration",
        [(0.0, 0.05), (0.1, 0.1), (2.9, 0.05), (-0.4, 0.2), (1.7, 3.0)],
    )
    def test_invariants(self, three_clips, start, duration):
        """Test duration >= 0.1 and start >= 0 for assorted drafts."""
        result = snap_range(start, duration, three_clips, 0.3)

        assert result.duration >= MIN_DISPLAY_DURATION
        assert result.start >= 0

    def test_empty_timeline(self):
        """Test snapping a range with no clips."""
        result = snap_range(0.1, 0.8, [], 0.3)

        assert result == SnappedRange(start=0, duration=1)
