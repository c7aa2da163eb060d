"""
Text Overlay - Draw overlay text onto frames with a fade in and out.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np

# Frames over which an overlay fades in, and again before it ends
FADE_FRAMES = 10


def overlay_opacity(frame: int, duration_frames: int, fade_frames: int = FADE_FRAMES) -> float:
    """
    Opacity of an overlay ``frame`` frames after it starts.

    Ramps 0 -> 1 over the first ``fade_frames`` and 1 -> 0 over the last
    ``fade_frames``. Overlays too short for both fades peak below 1.
    """
    if duration_frames <= 0 or not 0 <= frame < duration_frames:
        return 0.0
    if fade_frames <= 0:
        return 1.0

    fade_in = frame / fade_frames
    fade_out = (duration_frames - frame) / fade_frames
    return float(min(1.0, fade_in, fade_out))


@dataclass
class TextStyle:
    """Look of overlay text."""
    font_size_px: int = 80
    padding_px: int = 40
    color: Tuple[int, int, int] = (255, 255, 255)  # RGB
    shadow_color: Tuple[int, int, int] = (0, 0, 0)
    shadow_offset_px: int = 4
    shadow_alpha: float = 0.5
    line_spacing: float = 1.25
    font_face: int = cv2.FONT_HERSHEY_DUPLEX
    thickness: int = 4


class TextOverlayDrawer:
    """
    Draw centred, wrapped text onto RGB frames.

    Layout depends only on the text and frame size, so it is computed once
    per overlay and reused for every frame.

    Usage:
        drawer = TextOverlayDrawer()
        frame = drawer.draw(frame, "Hello", opacity=0.5)
    """

    def __init__(self, style: Optional[TextStyle] = None):
        self.style = style or TextStyle()
        self._layout_cache = {}

    def _font_scale(self) -> float:
        (_, height), _ = cv2.getTextSize("Hg", self.style.font_face, 1.0, self.style.thickness)
        return self.style.font_size_px / max(1, height)

    def wrap(self, text: str, max_width: int) -> List[str]:
        """Greedily break ``text`` into lines no wider than ``max_width``."""
        scale = self._font_scale()
        lines: List[str] = []
        current = ""
        for word in text.split():
            candidate = f"{current} {word}".strip()
            (width, _), _ = cv2.getTextSize(candidate, self.style.font_face, scale, self.style.thickness)
            if current and width > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)
        return lines

    def layout(self, text: str, width: int, height: int) -> List[Tuple[str, Tuple[int, int]]]:
        """Lines of ``text`` with their baseline origins, centred in the frame."""
        key = (text, width, height)
        if key in self._layout_cache:
            return self._layout_cache[key]

        style = self.style
        scale = self._font_scale()
        lines = self.wrap(text, width - 2 * style.padding_px)
        line_height = int(style.font_size_px * style.line_spacing)
        top = (height - line_height * len(lines)) // 2

        placed = []
        for index, line in enumerate(lines):
            (line_width, _), _ = cv2.getTextSize(line, style.font_face, scale, style.thickness)
            x = (width - line_width) // 2
            y = top + index * line_height + style.font_size_px
            placed.append((line, (x, y)))

        self._layout_cache[key] = placed
        return placed

    def draw(self, frame: np.ndarray, text: str, opacity: float = 1.0) -> np.ndarray:
        """
        Return a copy of ``frame`` with ``text`` drawn over it.

        The input frame is never modified.
        """
        if opacity <= 0 or not text.strip():
            return frame

        style = self.style
        height, width = frame.shape[:2]
        scale = self._font_scale()
        placed = self.layout(text, width, height)

        shadow = frame.copy()
        for line, (x, y) in placed:
            cv2.putText(
                shadow, line, (x, y + style.shadow_offset_px), style.font_face, scale,
                style.shadow_color, style.thickness, cv2.LINE_AA,
            )
        shadow_alpha = style.shadow_alpha * opacity
        result = cv2.addWeighted(shadow, shadow_alpha, frame, 1 - shadow_alpha, 0)

        text_layer = result.copy()
        for line, (x, y) in placed:
            cv2.putText(
                text_layer, line, (x, y), style.font_face, scale,
                style.color, style.thickness, cv2.LINE_AA,
            )
        return cv2.addWeighted(text_layer, opacity, result, 1 - opacity, 0)
