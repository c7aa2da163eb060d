"""Inspect snapping, overlay geometry and frame schedules."""

from pathlib import Path
from typing import Optional

import typer

from packages.core import InputError, get_config
from packages.render import DEFAULT_FPS, build_render_plan
from packages.timeline import covered_width, pixel_geometry, snap_points, snap_position, snap_range

from ..utils.display import console, print_geometry, print_plan, print_snap
from ..utils.timeline import load_timeline, unit_clips


def snap(
    start: float = typer.Argument(..., help="Position in clip units"),
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", help="Snap a range of this length instead of a point"
    ),
    clips: int = typer.Option(3, "--clips", "-c", min=0, help="Number of one-unit clips"),
    threshold: Optional[float] = typer.Option(
        None, "--threshold", "-t", min=0.0, help="Snap distance (default from config)"
    ),
) -> None:
    """Snap a position or range to clip boundaries.

    Example:
        cliprender snap 0.8 --duration 1.4
        cliprender snap 1.25 --clips 5 --threshold 0.5
    """
    if threshold is None:
        threshold = get_config().snap_threshold

    timeline = unit_clips(clips)
    points = snap_points(timeline)

    if duration is None:
        print_snap(points, start, snap_position(start, timeline, threshold))
        return

    snapped = snap_range(start, duration, timeline, threshold)
    print_snap(points, start, snapped.start, duration, snapped.duration)


def geometry(
    start: float = typer.Argument(..., help="Overlay start in clip units"),
    duration: float = typer.Argument(..., help="Overlay length in clip units"),
    clip_width: float = typer.Option(100, "--clip-width", "-w", min=1, help="Clip card width"),
    gap: float = typer.Option(16, "--gap", "-g", min=0, help="Gap between clip cards"),
    clips: int = typer.Option(3, "--clips", "-c", min=0, help="Number of one-unit clips"),
) -> None:
    """Show where an overlay is drawn on the timeline strip.

    Example:
        cliprender geometry 1 2 --clip-width 120 --gap 8
    """
    placement = pixel_geometry(start, duration, clip_width, gap)
    covered = covered_width(start, duration, unit_clips(clips), clip_width, gap)
    print_geometry(placement, covered)


def frames(
    timeline: Path = typer.Argument(..., exists=True, dir_okay=False, help="Timeline JSON file"),
    fps: int = typer.Option(DEFAULT_FPS, "--fps", min=1, help="Frames per second"),
) -> None:
    """Show the frame schedule a timeline renders to.

    Clip durations must be present in the file.

    Example:
        cliprender frames timeline.json --fps 24
    """
    try:
        request = load_timeline(timeline)
        plan = build_render_plan(request, fps=fps)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)
    except InputError as e:
        console.print(f"[red]Invalid timeline:[/] {e.message}")
        raise typer.Exit(1)

    print_plan(plan)
