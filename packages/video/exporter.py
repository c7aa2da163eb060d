"""
Exporter - Stream frames into ffmpeg to produce an H.264 MP4.
"""

import logging
import os
import platform
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Optional

import numpy as np

from packages.core.errors import ExportError, RendererUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class ExportSettings:
    """Settings for video export."""
    quality: int = 23  # CRF for H.264 (lower = better, 0-51)
    preset: str = "medium"
    use_hwaccel: bool = False  # Use a hardware H.264 encoder
    hwaccel_type: str = "auto"  # "cuda", "videotoolbox", "vaapi", "auto"
    ffmpeg_binary: str = "ffmpeg"


class FrameWriter:
    """
    An open ffmpeg process accepting RGB frames on stdin.

    Usage:
        with exporter.open(path, 1080, 1920, fps=30) as writer:
            for frame in frames:
                writer.write(frame)
    """

    def __init__(self, process: subprocess.Popen, output_path: Path, stderr: IO[bytes],
                 width: int, height: int):
        self.process = process
        self.output_path = output_path
        self.width = width
        self.height = height
        self.frames_written = 0
        self._stderr = stderr
        self._closed = False

    def write(self, frame: np.ndarray) -> None:
        """
        Send one frame to ffmpeg.

        Raises:
            ExportError: If the frame has the wrong size or ffmpeg has exited
        """
        if frame.shape[:2] != (self.height, self.width):
            raise ExportError(
                str(self.output_path),
                f"frame is {frame.shape[1]}x{frame.shape[0]}, expected {self.width}x{self.height}",
            )
        try:
            self.process.stdin.write(np.ascontiguousarray(frame, dtype=np.uint8).tobytes())
        except BrokenPipeError:
            raise ExportError(str(self.output_path), f"ffmpeg exited early: {self._read_stderr()}")
        self.frames_written += 1

    def close(self) -> Path:
        """
        Finish the file and wait for ffmpeg.

        Raises:
            ExportError: If ffmpeg reports a failure
        """
        if self._closed:
            return self.output_path
        self._closed = True

        try:
            if self.process.stdin:
                self.process.stdin.close()
        except BrokenPipeError:
            pass  # reported through the return code
        self.process.wait()

        stderr = self._read_stderr()
        self._stderr.close()
        if self.process.returncode != 0:
            raise ExportError(str(self.output_path), f"ffmpeg failed: {stderr}")

        logger.debug("Wrote %d frames to %s", self.frames_written, self.output_path)
        return self.output_path

    def abort(self) -> None:
        """Kill ffmpeg and discard the partial file."""
        if self._closed:
            return
        self._closed = True
        self.process.kill()
        self.process.wait()
        self._stderr.close()
        self.output_path.unlink(missing_ok=True)

    def _read_stderr(self) -> str:
        try:
            self._stderr.seek(0)
            return self._stderr.read().decode(errors="replace").strip()
        except (OSError, ValueError):
            return ""

    def __enter__(self) -> "FrameWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()


class VideoExporter:
    """Export video frames to MP4 using ffmpeg."""

    def __init__(self, settings: Optional[ExportSettings] = None):
        self.settings = settings or ExportSettings()

    def check_ffmpeg(self) -> None:
        """
        Verify ffmpeg is available.

        Raises:
            RendererUnavailableError: If the ffmpeg binary cannot be run
        """
        try:
            subprocess.run(
                [self.settings.ffmpeg_binary, "-version"],
                capture_output=True,
                check=True,
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            raise RendererUnavailableError("ffmpeg not found. Please install ffmpeg.")

    def build_command(self, output_path: Path, width: int, height: int, fps: float) -> list:
        """ffmpeg arguments for encoding raw RGB frames read from stdin."""
        settings = self.settings
        cmd = [settings.ffmpeg_binary, "-y", "-loglevel", "error"]

        if settings.use_hwaccel:
            cmd.extend(self._get_hwaccel_args(settings.hwaccel_type))

        cmd.extend([
            "-f", "rawvideo",
            "-vcodec", "rawvideo",
            "-pix_fmt", "rgb24",
            "-s", f"{width}x{height}",
            "-r", str(fps),
            "-i", "-",  # Read from pipe
        ])

        cmd.extend([
            "-c:v", self._get_h264_encoder(settings),
            "-crf", str(settings.quality),
            "-preset", settings.preset,
            "-pix_fmt", "yuv420p",
            "-movflags", "+faststart",
        ])

        cmd.append(str(output_path))
        return cmd

    def open(self, output_path: Path, width: int, height: int, fps: float) -> FrameWriter:
        """
        Start ffmpeg for a new MP4.

        Raises:
            RendererUnavailableError: If ffmpeg cannot be started
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        cmd = self.build_command(output_path, width, height, fps)

        # stderr goes to a file so a chatty ffmpeg never blocks on a full pipe
        stderr = tempfile.TemporaryFile()
        try:
            process = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.DEVNULL,
                stderr=stderr,
            )
        except FileNotFoundError:
            stderr.close()
            raise RendererUnavailableError("ffmpeg not found. Please install ffmpeg.")

        return FrameWriter(process, output_path, stderr, width, height)

    def _get_hwaccel_args(self, hwaccel_type: str) -> list:
        """Get hardware acceleration arguments for ffmpeg."""
        if hwaccel_type == "auto":
            hwaccel_type = self._detect_hwaccel()

        if hwaccel_type in ("cuda", "videotoolbox", "vaapi"):
            return ["-hwaccel", hwaccel_type]
        return []

    def _detect_hwaccel(self) -> str:
        """Detect available hardware acceleration."""
        if shutil.which("nvidia-smi"):
            try:
                result = subprocess.run(["nvidia-smi"], capture_output=True, timeout=5)
                if result.returncode == 0:
                    return "cuda"
            except (subprocess.SubprocessError, FileNotFoundError):
                pass

        if platform.system() == "Darwin":
            return "videotoolbox"

        if os.path.exists("/dev/dri"):
            return "vaapi"

        return ""

    def _get_h264_encoder(self, settings: ExportSettings) -> str:
        """Get the best available H.264 encoder."""
        if settings.use_hwaccel:
            hwaccel = settings.hwaccel_type
            if hwaccel == "auto":
                hwaccel = self._detect_hwaccel()

            encoders = {
                "cuda": "h264_nvenc",
                "videotoolbox": "h264_videotoolbox",
                "vaapi": "h264_vaapi",
            }
            if hwaccel in encoders:
                return encoders[hwaccel]

        return "libx264"
