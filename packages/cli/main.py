"""ClipRender CLI - Command-line tools for timelines and rendering.

Usage:
    cliprender <command> [options]

Commands:
    snap        Snap a position or range to clip boundaries
    geometry    Show an overlay's pixel placement
    frames      Show the frame schedule of a timeline file
    render      Render a timeline file to MP4
    serve       Run the API server
"""

from typing import Optional

import typer

from packages.core import configure_logging, get_config

from . import __version__
from .commands.inspect import frames, geometry, snap
from .commands.render import render
from .utils.display import console

# Create the main app
app = typer.Typer(
    name="cliprender",
    help="ClipRender CLI - Timeline snapping and video rendering tools",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"ClipRender CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
) -> None:
    """ClipRender CLI - Command-line tools for timelines and rendering."""
    configure_logging(get_config())


# Register commands
app.command("snap")(snap)
app.command("geometry")(geometry)
app.command("frames")(frames)
app.command("render")(render)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the render API server.

    Example:
        cliprender serve --port 8080
    """
    import uvicorn

    config = get_config()
    uvicorn.run(
        "packages.api.main:app",
        host=host or config.api_host,
        port=port or config.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
