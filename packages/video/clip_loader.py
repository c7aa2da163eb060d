"""
Clip Loader - Decode source clips into output-sized frames.

Frames are read lazily with OpenCV so only one decoded frame per clip is
held at a time. Each clip is scaled to cover the output (cropping the
overflow) and retimed to the number of frames its segment is scheduled for.
"""

import logging
import math
from typing import Iterator, Optional

import cv2
import numpy as np

from packages.core.errors import ClipLoadError

logger = logging.getLogger(__name__)


def cover_resize(frame: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Scale a frame to fill ``width`` x ``height``, cropping the overflow.

    The frame keeps its aspect ratio and is centred, like CSS
    ``object-fit: cover``.
    """
    src_h, src_w = frame.shape[:2]
    if (src_w, src_h) == (width, height):
        return frame

    scale = max(width / src_w, height / src_h)
    scaled_w = max(width, math.ceil(src_w * scale))
    scaled_h = max(height, math.ceil(src_h * scale))
    scaled = cv2.resize(frame, (scaled_w, scaled_h), interpolation=cv2.INTER_LINEAR)

    x = (scaled_w - width) // 2
    y = (scaled_h - height) // 2
    return scaled[y:y + height, x:x + width]


class ClipLoader:
    """
    Read source clips frame by frame.

    Usage:
        loader = ClipLoader()
        for frame in loader.frames("/videos/a.mp4", 150, 1080, 1920, fps=30):
            ...
    """

    def frames(
        self,
        url: str,
        frame_count: int,
        width: int,
        height: int,
        fps: float,
    ) -> Iterator[np.ndarray]:
        """
        Yield exactly ``frame_count`` RGB frames of a clip.

        Output frame ``i`` shows the source at time ``i / fps``. A source
        shorter than its segment holds its last frame.

        Args:
            url: Path or URL OpenCV can open
            frame_count: Number of frames to produce
            width: Output width
            height: Output height
            fps: Output frame rate

        Raises:
            ClipLoadError: If the clip cannot be opened or has no frames
        """
        if frame_count <= 0:
            return

        cap = cv2.VideoCapture(url)
        if not cap.isOpened():
            raise ClipLoadError(url, "could not open video")

        try:
            source_fps = cap.get(cv2.CAP_PROP_FPS) or fps
            step = source_fps / fps

            source_index = -1
            raw: Optional[np.ndarray] = None
            current: Optional[np.ndarray] = None
            exhausted = False

            for i in range(frame_count):
                target = int(i * step)
                while not exhausted and source_index < target:
                    ret, frame = cap.read()
                    if not ret:
                        exhausted = True
                        break
                    source_index += 1
                    raw, current = frame, None

                if current is None:
                    if raw is None:
                        raise ClipLoadError(url, "no frames decoded")
                    current = cover_resize(cv2.cvtColor(raw, cv2.COLOR_BGR2RGB), width, height)
                yield current
        finally:
            cap.release()

        if exhausted:
            logger.debug("Clip %s ended early; held its last frame", url)

    def probe_duration(self, url: str) -> float:
        """
        Duration of a clip in seconds, from its frame count and rate.

        Raises:
            ClipLoadError: If the clip cannot be opened
        """
        cap = cv2.VideoCapture(url)
        if not cap.isOpened():
            raise ClipLoadError(url, "could not open video")
        try:
            fps = cap.get(cv2.CAP_PROP_FPS)
            count = cap.get(cv2.CAP_PROP_FRAME_COUNT)
        finally:
            cap.release()

        if not fps or fps <= 0:
            raise ClipLoadError(url, "unknown frame rate")
        return count / fps
