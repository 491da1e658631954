"""ffmpeg-backed frame extractor."""

from __future__ import annotations

import logging
from typing import Protocol

from vid2boot.core.contracts import FrameFormat, ToolOutcome
from vid2boot.utils.subprocess_utils import run_command
from .contracts import ExtractionRequest

logger = logging.getLogger(__name__)

# Near-lossless JPEG, moderate PNG compression effort.
QUALITY_ARGS: dict[FrameFormat, list[str]] = {
    FrameFormat.JPG: ["-qscale:v", "2"],
    FrameFormat.PNG: ["-compression_level", "3"],
}


class FrameExtractor(Protocol):
    def __call__(self, request: ExtractionRequest) -> ToolOutcome: ...


def build_ffmpeg_command(executable: str, request: ExtractionRequest) -> list[str]:
    """Build the ffmpeg command line for ``request``."""
    res = request.resolution
    cmd = [executable, "-hide_banner", "-y"]
    if request.quiet:
        cmd += ["-loglevel", "error"]
    cmd += [
        "-i", str(request.video_path),
        "-vf", f"scale={res.width}:{res.height},fps={request.fps}",
        *QUALITY_ARGS[request.frame_format],
        str(request.output_pattern),
    ]
    return cmd


class FfmpegFrameExtractor:
    """Rasterize a video into ``%06d.<ext>`` frames with ffmpeg."""

    def __init__(self, executable: str = "ffmpeg"):
        self.executable = executable

    def __call__(self, request: ExtractionRequest) -> ToolOutcome:
        cmd = build_ffmpeg_command(self.executable, request)
        result = run_command(cmd, quiet=request.quiet)
        return ToolOutcome(returncode=result.returncode, command=cmd, stderr=result.stderr or "")
