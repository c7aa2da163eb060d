"""Common utility functions for ClipRender.

Provides helper functions used across multiple packages.
"""

from __future__ import annotations

import math
import re
from pathlib import Path


# ============ Numeric Utilities ============


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``);
    frame counts and percentages are rounded with halves going up.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(37.4)
        37
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``.

    If ``upper < lower`` the lower bound wins.
    """
    return max(lower, min(value, upper))


# ============ Time Utilities ============


def format_duration(ms: int) -> str:
    """Format milliseconds as human-readable duration.

    Args:
        ms: Duration in milliseconds

    Returns:
        Formatted string (e.g., "1.5s", "2m 30s")
    """
    seconds = ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    remaining_seconds = seconds % 60
    return f"{minutes}m {remaining_seconds:.0f}s"


# ============ File Utilities ============


_JOB_ID_RE = re.compile(r"^[A-Za-z0-9\-]+$")


def artifact_filename(job_id: str) -> str:
    """Deterministic file name of a job's rendered video.

    Raises:
        ValueError: If ``job_id`` contains path-unsafe characters
    """
    if not _JOB_ID_RE.match(job_id):
        raise ValueError(f"Invalid job id: {job_id!r}")
    return f"video-{job_id}.mp4"


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating if necessary.

    Args:
        path: Directory path

    Returns:
        The path (for chaining)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path
