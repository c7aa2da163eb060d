"""
Frames - Map clip-unit ranges onto the discrete render timeline.

Each source clip is scheduled for ``round(duration * fps)`` frames and clips
play back to back, so every position on the render timeline is a running
sum of per-clip frame counts. Rounding happens per clip, never on a total:
three clips of 1.25s at 30fps are 38 + 38 + 38 = 114 frames, not
round(3.75 * 30) = 113.
"""

import math
from typing import List, Sequence

from packages.core.types import FrameRange, SourceClip
from packages.core.utils import clamp, round_half_up


def seconds_to_frames(seconds: float, fps: float) -> int:
    """Convert a duration in seconds to a whole number of frames."""
    return round_half_up(seconds * fps)


def clip_frames(clip: SourceClip, fps: float) -> int:
    """Number of frames a clip is scheduled for."""
    return seconds_to_frames(clip.duration, fps)


def clip_schedule(clips: Sequence[SourceClip], fps: float) -> List[FrameRange]:
    """
    Schedule clips back to back.

    Returns:
        One FrameRange per clip, in order
    """
    schedule = []
    current = 0
    for clip in clips:
        count = clip_frames(clip, fps)
        schedule.append(FrameRange(start_frame=current, frame_count=count))
        current += count
    return schedule


def total_frames(clips: Sequence[SourceClip], fps: float) -> int:
    """Length of the whole render timeline in frames."""
    return sum(clip_frames(clip, fps) for clip in clips)


def frame_range_for(
    start: float,
    duration: float,
    clips: Sequence[SourceClip],
    fps: float,
) -> FrameRange:
    """
    Frame range covered by a clip-unit range.

    Clip ``i`` occupies clip units ``[i, i + 1)``; every clip that is fully
    or partially inside ``[start, start + duration)`` contributes its whole
    frame count. Clip indices are clamped to the clips that exist.

    Args:
        start: Range start in clip units
        duration: Range length in clip units
        clips: Source clips in playback order
        fps: Frames per second

    Returns:
        FrameRange with the cumulative start frame and the frame count
    """
    count = len(clips)
    first = int(clamp(math.floor(start), 0, count))
    last = int(clamp(math.ceil(start + duration), first, count))

    per_clip = [clip_frames(clip, fps) for clip in clips]
    return FrameRange(
        start_frame=sum(per_clip[:first]),
        frame_count=sum(per_clip[first:last]),
    )
