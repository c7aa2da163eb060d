"""Rich display utilities for CLI output."""

from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from packages.core import format_duration
from packages.render import RenderPlan
from packages.timeline import PixelGeometry

console = Console()


def print_snap(
    points: Sequence[float],
    start: float,
    snapped_start: float,
    duration: Optional[float] = None,
    snapped_duration: Optional[float] = None,
) -> None:
    """Print a snapping result next to its input."""
    console.print(f"[dim]Snap points:[/] {', '.join(f'{p:g}' for p in points)}")

    changed = "[green]snapped[/]" if snapped_start != start else "[yellow]unchanged[/]"
    console.print(f"[bold]Start:[/]    {start:g} -> {snapped_start:g} ({changed})")
    if duration is not None and snapped_duration is not None:
        console.print(f"[bold]Duration:[/] {duration:g} -> {snapped_duration:g}")
        console.print(f"[bold]End:[/]      {start + duration:g} -> {snapped_start + snapped_duration:g}")


def print_geometry(geometry: PixelGeometry, covered_width_px: Optional[float] = None) -> None:
    """Print overlay pixel placement."""
    table = Table(title="Overlay Geometry")
    table.add_column("Metric", style="bold")
    table.add_column("Pixels", justify="right")

    table.add_row("X offset", f"{geometry.x_offset_px:g}")
    table.add_row("Width", f"{geometry.width_px:g}")
    table.add_row("Min width", f"{geometry.min_width_px:g}")
    if covered_width_px is not None:
        table.add_row("Covered clips", f"{covered_width_px:g}")

    console.print(table)


def print_plan(plan: RenderPlan) -> None:
    """Print a render plan's frame schedule."""
    length = format_duration(round(plan.duration_in_frames * 1000 / plan.fps))
    console.print(Panel(
        f"[dim]Size:[/] {plan.width}x{plan.height} @ {plan.fps}fps\n"
        f"[dim]Frames:[/] {plan.duration_in_frames} ({length})",
        title="[bold]Render Plan[/]",
        expand=False,
    ))

    table = Table(title="Segments")
    table.add_column("Clip", style="bold")
    table.add_column("Source")
    table.add_column("Start", justify="right")
    table.add_column("Frames", justify="right")
    table.add_column("End", justify="right")
    for segment in plan.segments:
        table.add_row(
            segment.clip_id,
            segment.url,
            str(segment.start_frame),
            str(segment.frame_count),
            str(segment.end_frame),
        )
    console.print(table)

    if not plan.overlays:
        console.print("[dim]No overlays[/]")
        return

    overlays = Table(title="Overlays")
    overlays.add_column("Overlay", style="bold")
    overlays.add_column("Text")
    overlays.add_column("Start", justify="right")
    overlays.add_column("Frames", justify="right")
    for overlay in plan.overlays:
        overlays.add_row(
            overlay.id,
            overlay.content,
            str(overlay.start_frame),
            str(overlay.frame_count),
        )
    console.print(overlays)
