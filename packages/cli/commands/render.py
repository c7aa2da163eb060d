"""Render a timeline file to MP4 on this machine."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from packages.core import Aspect, ClipRenderError, InputError, get_config
from packages.render import build_render_plan
from packages.video import ExportSettings, FFmpegRenderer

from ..utils.display import console, print_plan
from ..utils.timeline import fill_durations, load_timeline

logger = logging.getLogger(__name__)


def render(
    timeline: Path = typer.Argument(..., exists=True, dir_okay=False, help="Timeline JSON file"),
    output: Path = typer.Option(..., "--output", "-o", help="Output MP4 path"),
    aspect: Optional[Aspect] = typer.Option(
        None, "--aspect", "-a", case_sensitive=False, help="Override the file's aspect"
    ),
    fps: Optional[int] = typer.Option(None, "--fps", min=1, help="Frames per second (default from config)"),
    quality: int = typer.Option(23, "--quality", "-q", min=0, max=51, help="x264 CRF (lower is better)"),
    preset: str = typer.Option("medium", "--preset", help="x264 preset"),
    show_plan: bool = typer.Option(False, "--plan/--no-plan", help="Print the frame schedule first"),
) -> None:
    """Render a timeline to an MP4 file.

    Clips without a duration are probed before rendering.

    Example:
        cliprender render timeline.json -o out.mp4
        cliprender render timeline.json -o out.mp4 --aspect landscape --quality 18
    """
    if fps is None:
        fps = get_config().fps

    try:
        request = fill_durations(load_timeline(timeline))
        if aspect is not None:
            request = replace(request, aspect=aspect)
        plan = build_render_plan(request, fps=fps)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)
    except InputError as e:
        console.print(f"[red]Invalid timeline:[/] {e.message}")
        raise typer.Exit(1)
    except ClipRenderError as e:
        console.print(f"[red]Error reading clips:[/] {e.message}")
        raise typer.Exit(1)

    if show_plan:
        print_plan(plan)

    renderer = FFmpegRenderer(export_settings=ExportSettings(quality=quality, preset=preset))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"Rendering {plan.duration_in_frames} frames...", total=100)
        try:
            output_path = renderer.render(
                plan,
                output,
                lambda fraction: progress.update(task, completed=fraction * 100),
            )
        except ClipRenderError as e:
            logger.debug("Render failed", exc_info=True)
            output.unlink(missing_ok=True)
            console.print(f"[red]Render failed:[/] {e.message}")
            raise typer.Exit(1)

    console.print(f"[green]Saved to {output_path}[/]")
