"""Protocol definitions for ClipRender interfaces.

Protocols define interfaces for duck typing, allowing packages to
depend on behaviors rather than concrete implementations.

Usage:
    from packages.core import Renderer

    class StubRenderer:
        def render(self, plan, output_path, on_progress):
            on_progress(1.0)
            return output_path

    manager = RenderJobManager(renderer=StubRenderer(), ...)
"""

from pathlib import Path
from typing import Any, Callable, Optional, Protocol, runtime_checkable


ProgressCallback = Callable[[float], None]


@runtime_checkable
class Renderer(Protocol):
    """Protocol for the composition engine that produces a video.

    The renderer receives a declarative, frame-mapped timeline and writes
    an MP4 to ``output_path``. It reports progress as a fraction in
    ``[0, 1]`` from whatever thread it runs on, and raises on failure.

    Example:
        class MyRenderer:
            def render(self, plan, output_path, on_progress) -> Path:
                for i in range(plan.duration_in_frames):
                    ...
                    on_progress((i + 1) / plan.duration_in_frames)
                return output_path
    """

    def render(
        self,
        plan: Any,
        output_path: Path,
        on_progress: ProgressCallback,
    ) -> Path:
        """Render ``plan`` to ``output_path``.

        Args:
            plan: RenderPlan describing segments and overlays in frames
            output_path: Destination file
            on_progress: Called with the completed fraction

        Returns:
            Path of the written artifact
        """
        ...


@runtime_checkable
class AssetLookup(Protocol):
    """Protocol for animation-template storage.

    Returns an opaque overlay asset for a template key, already carrying
    the overlay's text content.
    """

    def get_asset(self, key: str, content: str) -> Optional[Any]:
        """Look up a template by key and fill in ``content``.

        Returns:
            Opaque asset or None if the key is unknown
        """
        ...
