"""Loading timeline files for the CLI."""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from packages.core import Clip, RenderRequest
from packages.video import ClipLoader

logger = logging.getLogger(__name__)


def unit_clips(count: int) -> list[Clip]:
    """``count`` one-unit clips laid out back to back."""
    return [Clip(id=str(i), start_position=i, duration=1) for i in range(count)]


def _resolve_url(url: str, base_dir: Path) -> str:
    if not url or "://" in url or Path(url).is_absolute():
        return url
    return str(base_dir / url)


def load_timeline(path: Path) -> RenderRequest:
    """
    Read a timeline JSON file.

    The file has the same shape as a ``POST /api/render`` body. Relative clip
    paths are resolved against the file's directory.

    Raises:
        ValueError: If the file is not valid JSON or has an unknown aspect
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e

    request = RenderRequest.from_dict(data)
    base_dir = Path(path).resolve().parent
    return replace(
        request,
        clips=tuple(replace(clip, url=_resolve_url(clip.url, base_dir)) for clip in request.clips),
    )


def fill_durations(request: RenderRequest, loader: Optional[ClipLoader] = None) -> RenderRequest:
    """Probe the length of every clip whose duration was left out."""
    if all(clip.duration > 0 for clip in request.clips):
        return request

    loader = loader or ClipLoader()
    clips = []
    for clip in request.clips:
        if clip.duration <= 0 and clip.url:
            duration = loader.probe_duration(clip.url)
            logger.debug("Probed %s: %.3fs", clip.url, duration)
            clip = replace(clip, duration=duration)
        clips.append(clip)
    return replace(request, clips=tuple(clips))
