# Video package - default renderer: clip decoding, overlay text and ffmpeg export

from .clip_loader import ClipLoader, cover_resize
from .compositor import Compositor, CompositorSettings
from .exporter import ExportSettings, FrameWriter, VideoExporter
from .renderer import FFmpegRenderer
from .text_overlay import FADE_FRAMES, TextOverlayDrawer, TextStyle, overlay_opacity

__all__ = [
    # Clip loading
    "ClipLoader",
    "cover_resize",
    # Overlay text
    "FADE_FRAMES",
    "TextStyle",
    "TextOverlayDrawer",
    "overlay_opacity",
    # Compositing
    "Compositor",
    "CompositorSettings",
    # Export
    "VideoExporter",
    "ExportSettings",
    "FrameWriter",
    # Renderer
    "FFmpegRenderer",
]
