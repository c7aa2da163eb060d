"""CLI utilities."""

from .display import console, print_geometry, print_plan, print_snap
from .timeline import fill_durations, load_timeline, unit_clips

__all__ = [
    "console",
    "print_geometry",
    "print_plan",
    "print_snap",
    "fill_durations",
    "load_timeline",
    "unit_clips",
]
